"""
Renderer module - the heart of the path tracer.

Implements:
- Monte Carlo light transport along one path per sample (ray_color)
- Jittered multi-sample antialiasing with one random stream per pixel
- Optional multi-threaded scanline rendering (deterministic per seed)
- Gamma 2 conversion to an 8-bit RGB grid and image output
"""

from __future__ import annotations
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera
from .shapes import Hittable

logger = logging.getLogger(__name__)

SKY_WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient standing in for environment light."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(
    ray: Ray,
    world: Hittable,
    depth: int,
    rng: np.random.Generator,
    t_min: float = 0.001
) -> Color:
    """Estimate the light arriving along a ray.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Remaining bounce budget
        rng: Random source shared by every scatter along the path
        t_min: Lower bound of the hit interval, avoids self-intersection

    Returns:
        Linear-light color carried back along this ray
    """
    # Attenuation accumulated along the path so far
    throughput = Color.ONE

    while depth > 0:
        hit_record = world.hit(ray, t_min, float('inf'))

        if hit_record is None:
            return throughput.schur(sky_color(ray))

        scatter_result = hit_record.material.scatter(ray, hit_record, rng)
        if scatter_result is None:
            return Color.ZERO

        throughput = throughput.schur(scatter_result.attenuation)
        ray = scatter_result.scattered_ray
        depth -= 1

    # Light trapped between surfaces contributes nothing once the budget is spent
    return Color.ZERO


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    num_threads: int = 1  # 0 = auto-detect
    seed: Optional[int] = None
    t_min: float = 0.001

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Renderer:
    """Path tracing renderer.

    Every pixel draws from its own generator seeded by (seed, y, x), so the
    image is identical whatever the thread count or scanline order.
    """

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[int], None]] = None

    def set_progress_callback(self, callback: Callable[[int], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function called with the number of scanlines remaining
                each time a scanline completes
        """
        self._progress_callback = callback

    def pixel_rng(self, root_seed: int, x: int, y: int) -> np.random.Generator:
        """Independent random stream for one pixel."""
        return np.random.default_rng([root_seed, y, x])

    def render_pixel(self, world: Hittable, camera: Camera, x: int, y: int,
                     rng: np.random.Generator) -> Color:
        """Average samples_per_pixel jittered estimates for pixel (x, y).

        Row 0 is the top of the image; camera space has t = 0 at the bottom.
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        # Single-pixel axes would divide by zero
        u_scale = max(width - 1, 1)
        v_scale = max(height - 1, 1)

        pixel_color = Color.ZERO
        for _ in range(samples):
            dx, dy = rng.random(2)
            u = (x + dx) / u_scale
            v = 1.0 - (y + dy) / v_scale

            ray = camera.get_ray(u, v, rng)
            pixel_color = pixel_color + ray_color(
                ray, world, self.settings.max_depth, rng, self.settings.t_min
            )

        return pixel_color / samples

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            world: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Linear-light image as numpy array of shape (height, width, 3)
        """
        width = self.settings.width
        height = self.settings.height
        root_seed = self.settings.seed
        if root_seed is None:
            root_seed = np.random.SeedSequence().entropy

        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d thread(s)",
            width, height, self.settings.samples_per_pixel,
            self.settings.max_depth, self.settings.num_threads
        )
        start_time = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)
        lock = threading.Lock()
        remaining = [height]  # Use list for mutable in closure

        def render_row(y: int) -> None:
            """Render a single scanline into the shared image."""
            for x in range(width):
                rng = self.pixel_rng(root_seed, x, y)
                image[y, x] = self.render_pixel(world, camera, x, y, rng).to_array()

            # Reported under the lock so counts arrive in decreasing order
            with lock:
                remaining[0] -= 1
                left = remaining[0]
                logger.debug("Scanline %d done, %d remaining", y, left)
                if self._progress_callback:
                    self._progress_callback(left)

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                # list() re-raises any worker exception
                list(executor.map(render_row, range(height)))
        else:
            for y in range(height):
                render_row(y)

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return image

    @staticmethod
    def to_ldr(image: np.ndarray) -> np.ndarray:
        """Convert a linear image to 8-bit display values.

        Applies gamma 2 (square root), clamps to [0, 1], scales by 255
        and floors.

        Args:
            image: Linear image array (float64)

        Returns:
            LDR image as uint8 array
        """
        corrected = np.sqrt(np.clip(image, 0.0, None))
        return np.floor(np.clip(corrected, 0.0, 1.0) * 255.0).astype(np.uint8)

    def render_ldr(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Render and convert straight to the 8-bit RGB grid."""
        return self.to_ldr(self.render(world, camera))

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array, linear float or already converted uint8
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        pil_image = PILImage.fromarray(image)
        pil_image.save(filename)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filename)
