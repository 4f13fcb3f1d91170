"""Three-component vectors, rays and the renderer's numeric constants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

MAX_WIDTH = 2048
MAX_HEIGHT = 2048

PI = math.pi
PIOVER180 = math.pi / 180.0

# Keeps a ray from hitting the surface it has just left.
EPSILON = 0.01

MAX_RAY_DISTANCE = 2000000.0

# Reflection/refraction bounces followed before a ray is given up on.
MAX_RAYS_CAST = 10

# Refractive index of the empty space between objects.
DEFAULT_REFRACTIVE_INDEX = 1.0


@dataclass(frozen=True)
class Vector:
    """A point or direction in 3D space.

    ``+`` and ``-`` work component-wise, ``*`` and ``/`` scale by a number,
    and ``@`` is the dot product.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Vector(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __matmul__(self, other: Vector) -> float:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dot(other)

    def dot(self, other: Vector) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        """Dot product of the vector with itself."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean magnitude."""
        return math.sqrt(self.length_squared())

    def normalise(self) -> Vector:
        """Return the vector scaled to unit length."""
        squared = self.length_squared()
        if squared == 0.0:
            raise ValueError("cannot normalise a zero-length vector")
        return self * (1.0 / math.sqrt(squared))

    def cross(self, other: Vector) -> Vector:
        """Cross product with another vector."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


@dataclass(frozen=True)
class Ray:
    """A ray cast from ``start`` in ``direction``."""

    start: Vector
    direction: Vector