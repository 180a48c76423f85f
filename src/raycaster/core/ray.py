"""Ray data structure and device vector utilities.

This module provides the host-side ``Ray`` value type together with the
double-precision vector type and helper functions used inside Taichi
kernels. Device code passes rays around as a separate origin and direction
pair of ``vec3`` values.

Example:
    >>> from raycaster.core.ray import Ray
    >>> from raycaster.core.vector import Point, Vector3
    >>> ray = Ray(origin=Point.zero(), direction=Vector3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Point(x=0.0, y=0.0, z=-5.0)
"""


from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raycaster.core.vector import Point, Vector3

# Device-side 3D vector type (double precision)
vec3 = ti.types.vector(3, ti.f64)


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and a unit direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Must be unit length; rays built
            by the camera and by shading are normalized on construction.
    """

    origin: Point
    direction: Vector3

    def at(self, distance: float) -> Point:
        """Return the point ``origin + direction * distance``."""
        return self.origin + self.direction * distance


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def ray_at(ray_origin: vec3, ray_direction: vec3, t: ti.f64) -> vec3:
    """Compute the point along a ray at parameter t.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray_origin + t * ray_direction.
    """
    return ray_origin + ray_direction * t


@ti.func
def dot(a: vec3, b: vec3) -> ti.f64:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f64:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The caller guarantees a non-zero vector; a zero vector yields NaN
    components.
    """
    return v / length(v)
