"""
Materials system describing how light scatters at a surface.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction and Fresnel mixing)
- Refractive index lookup table for real-world media
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING, Union
import math

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray

if TYPE_CHECKING:
    from .shapes import HitRecord


@dataclass
class ScatterResult:
    """Result of a material scatter operation."""
    scattered_ray: Ray
    attenuation: Color


class Material(ABC):
    """Abstract base class for materials.

    Material instances are immutable and may be shared by any number
    of primitives.
    """

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            hit: Intersection record (point, face-corrected normal, front_face)
            rng: Random source for stochastic scattering

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """
        pass


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        self.albedo = albedo

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        # normal + unit sphere sample is cosine distributed about the normal,
        # so the attenuation needs no explicit cosine factor
        scatter_direction = hit.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return ScatterResult(
            scattered_ray=Ray(hit.point, scatter_direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Radius of the reflection perturbation (0 = mirror, 1 = very rough)
        """
        if not 0.0 <= fuzz <= 1.0:
            raise ValueError(f"Metal fuzz must be within [0, 1], got {fuzz}")
        self.albedo = albedo
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)

        # Absorbed when the mirror direction heads into the surface
        if reflected.dot(hit.normal) <= 0:
            return None

        direction = reflected
        if self.fuzz > 0:
            direction = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction),
            attenuation=self.albedo
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class RefractiveIndex(Enum):
    """Index of refraction for common real-world media."""

    AIR = (1.000273, "Earth's atmosphere")
    AMBER = (1.55, "Solidified tree sap")
    BOROSILICATE_GLASS = (1.47, "Pyrex")
    CROWN_GLASS = (1.52, "Low dispersion glass for convex lenses")
    CUBIC_ZIRCONIA = (2.165, "Diamond alternative")
    DIAMOND = (2.417, "Pure carbon crystal")
    EYE_CORNEA = (1.373, "Human eye cornea")
    EYE_LENS = (1.386, "Human eye lens")
    FLINT_GLASS = (1.61, "Optical glass for concave lenses")
    FUSED_SILICA = (1.458, "Pure glass, also known as fused quartz")
    ICE = (1.31, "Water ice")
    LIQUID_HELIUM = (1.025, "Very cold helium")
    PLASTIC_ETFE = (1.403, "Ethylene tetrafluoroethylene")
    PLASTIC_PET = (1.575, "Polyethylene terephthalate")
    PLATE_GLASS = (1.52, "Normal window glass")
    PLEXIGLASS = (1.4896, "Poly(methyl methacrylate)")
    POLYCARBONATE = (1.6, "Common plastic")
    ROCK_SALT = (1.516, "Halite")
    SAPPHIRE = (1.77, "Precious gemstone")
    SODIUM_CHLORIDE = (1.544, "Table salt")
    SUGAR_WATER_25 = (1.3723, "25% solution of sugar water")
    SUGAR_WATER_50 = (1.42, "50% solution of sugar water")
    SUGAR_WATER_75 = (1.4774, "75% solution of sugar water")
    VACUUM = (1.0, "Nothing")
    VEGETABLE_OIL = (1.47, "Kitchen cooking oil")
    WATER = (1.333, "Hydrogen dioxide liquid")

    def __init__(self, index: float, description: str):
        self.index = index
        self.description = description

    def __float__(self) -> float:
        return self.index

    @classmethod
    def from_name(cls, name: str) -> RefractiveIndex:
        """Look up a medium by case-insensitive name, e.g. 'crown_glass'."""
        key = name.strip().upper().replace('-', '_').replace(' ', '_')
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown refractive medium: {name}") from None


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction.

    The surrounding medium is always assumed to be vacuum.
    """

    def __init__(self, refractive_index: Union[RefractiveIndex, float] = 1.5):
        """Create a dielectric material.

        Args:
            refractive_index: A RefractiveIndex medium or a custom index value
        """
        ior = float(refractive_index)
        if ior <= 0:
            raise ValueError(f"Refractive index must be positive, got {ior}")
        self.refractive_index = refractive_index
        self.ior = ior

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: np.random.Generator) -> Optional[ScatterResult]:
        # Entering the medium from vacuum, or leaving it back into vacuum
        refraction_ratio = 1.0 / self.ior if hit.front_face else self.ior

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0

        # Fresnel mixing: one path, reflecting with probability given by Schlick
        if cannot_refract or self._reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = unit_direction.reflect(hit.normal)
        else:
            direction = unit_direction.refract(hit.normal, refraction_ratio)

        return ScatterResult(
            scattered_ray=Ray(hit.point, direction),
            attenuation=Color.ONE
        )

    @staticmethod
    def _reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index!r})"
