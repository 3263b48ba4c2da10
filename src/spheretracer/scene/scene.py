"""Scene container with nearest-hit tracing and shading.

A Scene holds an ordered collection of spheres lit by one point light plus a
constant ambient term. trace() finds the nearest sphere along a ray and
shades the hit point with a Lambertian diffuse term and a hard shadow test.

Example:
    >>> from spheretracer.core.ray import Ray
    >>> from spheretracer.core.vector import Vec3
    >>> from spheretracer.geometry.sphere import Sphere
    >>> from spheretracer.scene.scene import Scene
    >>> scene = Scene(
    ...     spheres=[Sphere(Vec3(0.0, 0.0, -5.0), 1.0, Vec3(1.0, 0.2, 0.2))],
    ...     light_position=Vec3(5.0, 5.0, 5.0),
    ...     light_intensity=1.0,
    ...     ambient_intensity=0.1,
    ... )
    >>> color = scene.trace(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)))
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from spheretracer.core.ray import Ray
from spheretracer.core.vector import Vec3
from spheretracer.geometry.sphere import Sphere

# Offset along the normal for shadow ray origins (avoids self-intersection)
SHADOW_EPSILON = 0.001

BACKGROUND_COLOR = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Scene:
    """Spheres plus a single point light and an ambient term.

    Attributes:
        spheres: Spheres in the scene. Order only matters for exact ties
            in hit distance, where the first listed sphere wins.
        light_position: Position of the point light.
        light_intensity: Diffuse light intensity (>= 0).
        ambient_intensity: Ambient intensity applied everywhere (>= 0).

    Raises:
        ValueError: If either intensity is negative.
    """

    spheres: Sequence[Sphere]
    light_position: Vec3
    light_intensity: float
    ambient_intensity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))
        if self.light_intensity < 0.0:
            raise ValueError(f"Light intensity = {self.light_intensity} is negative.")
        if self.ambient_intensity < 0.0:
            raise ValueError(f"Ambient intensity = {self.ambient_intensity} is negative.")

    def closest_hit(self, ray: Ray) -> tuple[float, Sphere] | None:
        """Find the nearest sphere hit by a ray.

        Returns:
            A (t, sphere) pair for the smallest positive hit distance, or
            None if no sphere is hit.
        """
        closest: tuple[float, Sphere] | None = None
        for sphere in self.spheres:
            t = sphere.intersect(ray)
            if t is None:
                continue
            if closest is None or t < closest[0]:
                closest = (t, sphere)
        return closest

    def is_shadowed(self, point: Vec3, normal: Vec3, to_light: Vec3) -> bool:
        """Check whether any sphere blocks the path from a surface point to the light."""
        shadow_ray = Ray(point + normal.scale(SHADOW_EPSILON), to_light)
        return any(sphere.intersect(shadow_ray) is not None for sphere in self.spheres)

    def shade(self, sphere: Sphere, hit_point: Vec3) -> Vec3:
        """Compute the color of a point on a sphere's surface.

        Shadowed points receive only the ambient term. Lit points add a
        diffuse term proportional to the cosine between the surface normal
        and the direction to the light. There is no specular term and no
        distance attenuation.
        """
        normal = sphere.normal_at(hit_point)
        to_light = (self.light_position - hit_point).normalize()

        if self.is_shadowed(hit_point, normal, to_light):
            return sphere.color.scale(self.ambient_intensity)

        diffuse = max(0.0, normal.dot(to_light)) * self.light_intensity
        return sphere.color.scale(diffuse + self.ambient_intensity)

    def trace(self, ray: Ray) -> Vec3:
        """Trace a ray and return its RGB color (black when nothing is hit)."""
        hit = self.closest_hit(ray)
        if hit is None:
            return BACKGROUND_COLOR
        t, sphere = hit
        return self.shade(sphere, ray.point_at(t))
