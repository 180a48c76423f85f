"""Geometry module for the closed set of shape primitives.

This module provides the two primitive shapes and their intersection
routines:

Components:
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

The primitive set is closed. ``PrimitiveKind`` tags each shape when a scene
is uploaded to Taichi fields, and every dispatch site (host and device)
matches exhaustively on it. Adding a shape means extending ``PrimitiveKind``
and every match over it.

Ray-object intersection follows the pattern:
    hit, t = intersect_shape(ray_origin, ray_direction, *shape_data)
"""

from enum import IntEnum
from typing import Union

from .plane import PARALLEL_EPSILON, Plane, intersect_plane, plane_normal
from .sphere import Sphere, intersect_sphere, sphere_normal

# A scene object is exactly one of the supported shapes
Primitive = Union[Sphere, Plane]


class PrimitiveKind(IntEnum):
    """Tag identifying the shape of a primitive on the device."""

    SPHERE = 0
    PLANE = 1


def primitive_kind(primitive: Primitive) -> PrimitiveKind:
    """Return the tag for a primitive.

    Raises:
        TypeError: If the object is not one of the supported shapes.
    """
    if isinstance(primitive, Sphere):
        return PrimitiveKind.SPHERE
    if isinstance(primitive, Plane):
        return PrimitiveKind.PLANE
    raise TypeError(f"Unsupported primitive type: {type(primitive).__name__}")


__all__ = [
    "Primitive",
    "PrimitiveKind",
    "primitive_kind",
    "Sphere",
    "intersect_sphere",
    "sphere_normal",
    "Plane",
    "intersect_plane",
    "plane_normal",
    "PARALLEL_EPSILON",
]
