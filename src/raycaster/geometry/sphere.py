"""Sphere primitive with geometric ray-sphere intersection.

The intersection projects the vector from the ray origin to the sphere
center onto the (unit) ray direction:

    to_center = center - ray_origin
    adj = dot(to_center, direction)      # distance to closest approach
    d2  = dot(to_center, to_center) - adj^2   # squared miss distance
    thc = sqrt(radius^2 - d2)            # half chord length
    t0, t1 = adj - thc, adj + thc

A ray misses when ``d2 > radius^2`` or when both roots are negative. In
every other case the smaller root is reported, even if it is negative: a
ray that starts inside the sphere reports the intersection behind its
origin.

Example:
    >>> from raycaster.core.color import Color
    >>> from raycaster.core.vector import Point
    >>> from raycaster.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Point(0, 0, -5), radius=1.0,
    ...                 color=Color(0.4, 1.0, 0.4), albedo=0.18)
    >>> # Use intersect_sphere within a Taichi kernel
"""


from dataclasses import dataclass

import taichi as ti

from raycaster.core.color import Color
from raycaster.core.ray import dot, normalize, vec3
from raycaster.core.vector import Point


@dataclass(frozen=True)
class Sphere:
    """A diffuse sphere.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        color: The diffuse surface color.
        albedo: Diffuse reflectance coefficient, conceptually in (0, 1]
            but not clamped.
    """

    center: Point
    radius: float
    color: Color
    albedo: float


@ti.func
def intersect_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f64,
):
    """Test a ray against a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        A tuple ``(hit, t)`` where ``hit`` is 1 on intersection and ``t`` is
        the smaller root. ``t`` is only meaningful when ``hit`` is 1 and may
        be negative when the ray starts inside the sphere.
    """
    # Vector from ray origin to sphere center
    to_center = center - ray_origin
    adj = dot(to_center, ray_direction)
    d2 = dot(to_center, to_center) - adj * adj
    radius2 = radius * radius

    did_hit = 0
    t = ti.cast(0.0, ti.f64)

    if d2 <= radius2:
        thc = ti.sqrt(radius2 - d2)
        t0 = adj - thc
        t1 = adj + thc

        if not (t0 < 0.0 and t1 < 0.0):
            did_hit = 1
            t = t1
            if t0 < t1:
                t = t0

    return did_hit, t


@ti.func
def sphere_normal(center: vec3, hit_point: vec3) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return normalize(hit_point - center)
