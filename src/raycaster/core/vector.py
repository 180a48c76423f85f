"""Host-side vector and point value types.

These are the immutable Python types used to describe a scene before it is
uploaded to Taichi fields. Directions and displacements are ``Vector3``;
positions are ``Point``. The two are numerically identical but kept as
distinct types so a position is never used where a direction is expected.

Example:
    >>> from raycaster.core.vector import Point, Vector3
    >>> a = Point(0.0, 0.0, -5.0)
    >>> b = Point(0.0, 0.0, 0.0)
    >>> (a - b).length()
    5.0
    >>> Vector3(3.0, 4.0, 0.0).normalize()
    Vector3(x=0.6, y=0.8, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """A 3D direction or displacement in double precision.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Vector3:
        """Return the zero vector."""
        return Vector3(0.0, 0.0, 0.0)

    def length(self) -> float:
        """Return the Euclidean norm of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3:
        """Return the unit vector pointing in the same direction.

        Returns:
            The vector divided by its length.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.length()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector3(self.x / length, self.y / length, self.z / length)

    def dot(self, other: Vector3) -> float:
        """Return the inner product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return self * -1.0

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


@dataclass(frozen=True)
class Point:
    """A position in 3D space in double precision.

    Subtracting two points gives the ``Vector3`` between them; adding a
    ``Vector3`` to a point moves it.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Point:
        """Return the coordinate-space origin."""
        return Point(0.0, 0.0, 0.0)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: Vector3) -> Point:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vector3) -> Vector3 | Point:
        if isinstance(other, Point):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"
