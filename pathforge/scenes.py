"""
Built-in scenes.

Each builder returns a populated world and a camera configured for the
given aspect ratio.
"""

from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric, RefractiveIndex


def create_demo_scene(aspect_ratio: float = 16.0 / 9.0) -> Tuple[HittableList, Camera]:
    """Three spheres showing each material on a large diffuse ground."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(RefractiveIndex.CROWN_GLASS)
    gold = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, glass))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, gold))

    look_from = Point3(3, 3, 2)
    look_at = Point3(0, 0, -1)
    camera = Camera(
        look_from=look_from,
        look_at=look_at,
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.5,
        focus_dist=(look_from - look_at).length()
    )
    return world, camera


def create_random_scene(
    aspect_ratio: float = 3.0 / 2.0,
    rng: Optional[np.random.Generator] = None
) -> Tuple[HittableList, Camera]:
    """The cover scene: a field of small random spheres around three large ones."""
    if rng is None:
        rng = np.random.default_rng()

    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))))

    glass = Dielectric(RefractiveIndex.CROWN_GLASS)
    clearing = Point3(4, 0.2, 0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vec3.random(rng).schur(Vec3.random(rng))
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                material = Metal(Vec3.random(rng, 0.5, 1.0), rng.uniform(0.0, 0.5))
            else:
                material = glass
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, glass))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )
    return world, camera


SCENES = {
    'demo': create_demo_scene,
    'random': create_random_scene,
}
