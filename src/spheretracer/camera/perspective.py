"""Perspective camera model for primary ray generation.

The camera builds an orthonormal basis (u, v, w) from its view direction and
up vector:
- w: opposite of the view direction
- u: points right in the image plane
- v: points up in the image plane

The virtual image plane sits at unit distance in front of the camera. Its
lower-left corner and the horizontal/vertical span vectors are derived from
the vertical field of view and the aspect ratio.

Example:
    >>> from spheretracer.camera.perspective import Camera
    >>> from spheretracer.core.vector import Vec3
    >>> camera = Camera(
    ...     position=Vec3(0.0, 0.0, 0.0),
    ...     direction=Vec3(0.0, 0.0, -1.0),
    ...     up=Vec3(0.0, 1.0, 0.0),
    ...     fov=90.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through the image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property

from spheretracer.core.ray import Ray
from spheretracer.core.vector import Vec3


@dataclass(frozen=True)
class Viewport:
    """Derived camera geometry shared by host and device ray generation.

    Attributes:
        u: Right direction in world space.
        v: Up direction in world space.
        w: Backward direction (opposite the view direction).
        lower_left: Lower-left corner of the image plane in world space.
        horizontal: Vector spanning the full image-plane width.
        vertical: Vector spanning the full image-plane height.
    """

    u: Vec3
    v: Vec3
    w: Vec3
    lower_left: Vec3
    horizontal: Vec3
    vertical: Vec3


@dataclass(frozen=True)
class Camera:
    """Configuration for a perspective camera.

    Attributes:
        position: Camera position in world space.
        direction: View direction. Normalized on construction.
        up: Up direction. Normalized on construction.
        fov: Vertical field of view in degrees. Expected in (0, 180); values
            outside that range are not validated.
        aspect_ratio: Image width divided by image height.
    """

    position: Vec3
    direction: Vec3
    up: Vec3
    fov: float
    aspect_ratio: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())
        object.__setattr__(self, "up", self.up.normalize())

    @cached_property
    def viewport(self) -> Viewport:
        """Camera basis and image-plane geometry, computed on first access."""
        theta = math.radians(self.fov)
        half_height = math.tan(theta / 2.0)
        half_width = self.aspect_ratio * half_height

        w = (-self.direction).normalize()
        u = self.up.cross(w).normalize()
        v = w.cross(u)

        lower_left = self.position - u.scale(half_width) - v.scale(half_height) - w
        return Viewport(
            u=u,
            v=v,
            w=w,
            lower_left=lower_left,
            horizontal=u.scale(2.0 * half_width),
            vertical=v.scale(2.0 * half_height),
        )

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray from the camera position toward the image-plane point.
        """
        view = self.viewport
        direction = view.lower_left - self.position + view.horizontal.scale(u) + view.vertical.scale(v)
        return Ray(self.position, direction)
