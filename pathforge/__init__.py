"""
PathForge - A Python Path Tracing Renderer

A small Monte Carlo path tracer with support for:
- Spheres and an extensible Hittable interface
- Lambertian, fuzzy metal and dielectric materials
- Thin-lens depth of field
- Deterministic, seedable per-pixel sampling
- YAML/JSON scene descriptions
"""

__version__ = "0.1.0"
__author__ = "PathForge Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric, RefractiveIndex
from .camera import Camera
from .renderer import Renderer, RenderSettings, ray_color, sky_color
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import create_demo_scene, create_random_scene
