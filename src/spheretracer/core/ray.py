"""Ray data structure for host-side tracing and Taichi kernels.

A ray is an origin plus a unit direction. The host Ray normalizes its
direction once at construction, so every Ray seen by intersection and
shading code has a unit-length direction (or a zero direction when built
from a degenerate vector).

Example:
    >>> from spheretracer.core.ray import Ray
    >>> from spheretracer.core.vector import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -2.0))
    >>> ray.direction
    Vec3(x=0.0, y=0.0, z=-1.0)
    >>> ray.point_at(5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

import taichi as ti

from spheretracer.core.vector import Vec3, vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and a normalized direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Normalized on construction.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    def point_at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Any real t is accepted; only t >= 0 lies in front of the origin.
        """
        return self.origin + self.direction.scale(t)


@ti.func
def ray_at(ray_origin: vec3, ray_direction: vec3, t: ti.f64) -> vec3:
    """Compute the point ray_origin + t * ray_direction inside a kernel."""
    return ray_origin + t * ray_direction
