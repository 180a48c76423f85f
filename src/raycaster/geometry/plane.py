"""Infinite plane primitive with ray-plane intersection.

A plane is defined by a point on it and a unit normal. The ray parameter of
the intersection is

    t = dot(plane_origin - ray_origin, normal) / dot(normal, ray_direction)

Rays whose direction is within ``PARALLEL_EPSILON`` of perpendicular to the
normal are treated as parallel and miss, which avoids dividing by a tiny
denominator. Hits behind the ray origin (``t < 0``) are rejected.

Example:
    >>> from raycaster.core.color import Color
    >>> from raycaster.core.vector import Point, Vector3
    >>> from raycaster.geometry.plane import Plane
    >>> floor = Plane(origin=Point(0, -1, 0), normal=Vector3(0, 1, 0),
    ...               color=Color(0.4, 0.4, 0.4), albedo=0.18)
    >>> # Use intersect_plane within a Taichi kernel
"""


from dataclasses import dataclass

import taichi as ti

from raycaster.core.color import Color
from raycaster.core.ray import dot, vec3
from raycaster.core.vector import Point, Vector3

# |dot(normal, direction)| at or below this is a parallel ray
PARALLEL_EPSILON = 1e-6


@dataclass(frozen=True)
class Plane:
    """A diffuse infinite plane.

    Attributes:
        origin: Any point on the plane.
        normal: The plane normal. Assumed to be unit length; it is used as
            given for both intersection and shading.
        color: The diffuse surface color.
        albedo: Diffuse reflectance coefficient, conceptually in (0, 1]
            but not clamped.
    """

    origin: Point
    normal: Vector3
    color: Color
    albedo: float


@ti.func
def intersect_plane(
    ray_origin: vec3,
    ray_direction: vec3,
    plane_origin: vec3,
    normal: vec3,
):
    """Test a ray against an infinite plane.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane_origin: A point on the plane.
        normal: The unit plane normal.

    Returns:
        A tuple ``(hit, t)`` where ``hit`` is 1 when the ray is not parallel
        to the plane and the intersection lies at ``t >= 0``.
    """
    denom = dot(normal, ray_direction)

    did_hit = 0
    t = ti.cast(0.0, ti.f64)

    if ti.abs(denom) > PARALLEL_EPSILON:
        distance = dot(plane_origin - ray_origin, normal) / denom
        if distance >= 0.0:
            did_hit = 1
            t = distance

    return did_hit, t


@ti.func
def plane_normal(normal: vec3, hit_point: vec3) -> vec3:
    """Normal of a plane; constant over the whole surface."""
    return normal
