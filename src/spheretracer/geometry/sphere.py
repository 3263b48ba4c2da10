"""Sphere primitive with ray-sphere intersection.

This module provides the host-side Sphere and the Taichi functions used by
the render kernel. Both solve the same quadratic

    |origin + t * direction - center|^2 = radius^2

with a = dot(d, d), b = 2 * dot(oc, d), c = dot(oc, oc) - radius^2 and
return the nearest strictly positive root.

Example:
    >>> from spheretracer.core.ray import Ray
    >>> from spheretracer.core.vector import Vec3
    >>> from spheretracer.geometry.sphere import Sphere
    >>> sphere = Sphere(Vec3(0.0, 0.0, -5.0), 1.0, Vec3(1.0, 0.2, 0.2))
    >>> sphere.intersect(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)))
    4.0
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import Ray
from spheretracer.core.vector import Vec3, safe_normalize, vec3


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center, radius and surface color.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        color: RGB reflectance, nominally in [0, 1] per channel. Not clamped.

    Raises:
        ValueError: If radius is not positive.
    """

    center: Vec3
    radius: float
    color: Vec3

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive.")

    def intersect(self, ray: Ray) -> float | None:
        """Find the nearest positive intersection distance along a ray.

        Args:
            ray: The ray to test.

        Returns:
            The smallest root t > 0, or None if the ray misses the sphere or
            the sphere lies entirely behind the ray origin. A ray with a
            zero-length direction never intersects.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        if a == 0.0:
            return None
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c

        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        if t0 > 0.0:
            return t0
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t1 > 0.0:
            return t1
        return None

    def normal_at(self, point: Vec3) -> Vec3:
        """Outward unit normal at a point on the surface."""
        return (point - self.center).normalize()


# =============================================================================
# Taichi Intersection Functions
# =============================================================================


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, center: vec3, radius: ti.f64):
    """Test for ray-sphere intersection inside a Taichi kernel.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (normalized by the caller).
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        A tuple (hit, t): hit is 1 when a root t > 0 exists, 0 otherwise.
        t is only meaningful when hit == 1.
    """
    oc = ray_origin - center
    a = tm.dot(ray_direction, ray_direction)
    b = 2.0 * tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    # Taichi requires outer-scope declaration of results
    did_hit = 0
    hit_t = 0.0

    if a > 0.0 and discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > 0.0:
            did_hit = 1
            hit_t = t0
        elif t1 > 0.0:
            did_hit = 1
            hit_t = t1

    return did_hit, hit_t


@ti.func
def sphere_normal(point: vec3, center: vec3) -> vec3:
    """Outward unit normal at a surface point inside a Taichi kernel."""
    return safe_normalize(point - center)
