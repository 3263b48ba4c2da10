"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vec3 value type and Taichi vector helpers
    ray: Ray data structure
    reference: Serial host-side renderer (depends on camera and scene)
    renderer: Row-parallel Taichi render driver

All compute-intensive rendering runs in Taichi kernels on the CPU backend.
"""

from .ray import Ray, ray_at
from .vector import Vec3, safe_normalize, vec3

# Note: reference and renderer are NOT imported here. reference depends on the
# camera and scene packages; renderer declares Taichi fields at import time.
# Import them directly (renderer only after ti.init()):
#   from spheretracer.core.reference import render_reference
#   from spheretracer.core.renderer import RowRenderer, render_image

__all__ = [
    "Vec3",
    "vec3",
    "safe_normalize",
    "Ray",
    "ray_at",
]
