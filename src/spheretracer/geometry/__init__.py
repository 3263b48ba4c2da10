"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Each primitive exposes a host-side intersect/normal_at pair and matching
Taichi functions (@ti.func) for use inside render kernels.
"""

from .sphere import Sphere, hit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_sphere",
    "sphere_normal",
]
