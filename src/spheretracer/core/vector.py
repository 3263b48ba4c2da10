"""Vector value type and Taichi vector utilities.

This module provides the immutable host-side Vec3 used to describe scenes and
cameras, plus the matching Taichi helpers used inside render kernels. Device
vectors are double precision so that kernel results line up with the
host-side float arithmetic.

Example:
    >>> from spheretracer.core.vector import Vec3
    >>> a = Vec3(1.0, 2.0, 2.0)
    >>> a.length()
    3.0
    >>> (a + Vec3(1.0, 0.0, 0.0)).scale(2.0)
    Vec3(x=4.0, y=4.0, z=4.0)
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Double precision 3-vector type for use inside Taichi kernels
vec3 = ti.types.vector(3, ti.f64)


@dataclass(frozen=True)
class Vec3:
    """A three-component floating-point vector with value semantics.

    Every operation returns a new instance; instances are never mutated.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> "Vec3":
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    def add(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, t: float) -> "Vec3":
        return Vec3(self.x * t, self.y * t, self.z * t)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Compute the Euclidean length of the vector."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vec3":
        """Scale the vector to unit length.

        Returns:
            A unit vector in the same direction. A zero-length vector is
            returned unchanged instead of dividing by zero.
        """
        length = self.length()
        if length > 0.0:
            return Vec3(self.x / length, self.y / length, self.z / length)
        return self

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_list(self) -> list[float]:
        """Return the components as a list, the form Taichi fields accept."""
        return [self.x, self.y, self.z]

    def __add__(self, other: "Vec3") -> "Vec3":
        return self.add(other)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return self.sub(other)

    def __mul__(self, t: float) -> "Vec3":
        return self.scale(t)

    def __rmul__(self, t: float) -> "Vec3":
        return self.scale(t)

    def __neg__(self) -> "Vec3":
        return self.scale(-1.0)


# =============================================================================
# Taichi Vector Utilities
# =============================================================================


@ti.func
def safe_normalize(v: vec3) -> vec3:
    """Normalize a vector inside a Taichi kernel.

    Unlike tm.normalize, a zero-length input is returned unchanged rather
    than producing NaN components, mirroring Vec3.normalize.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or v itself if it has
        zero length.
    """
    n = tm.length(v)
    result = v
    if n > 0.0:
        result = v / n
    return result
