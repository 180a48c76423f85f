"""Core rendering module.

This module contains the fundamental building blocks for ray casting:

Components:
    vector: Host-side Vector3 and Point value types
    color: RGB color model and device color type
    ray: Ray value type and device vector utilities
    integrator: Direct-illumination shading and the render driver

Device code works in double precision for geometry (``vec3``) and single
precision for colors (``color3``).
"""

from .color import Color, clamp_color, color3
from .ray import Ray, dot, length, normalize, ray_at, vec3
from .vector import Point, Vector3

# Note: integrator is NOT imported here to avoid circular imports.
# Import it from raycaster.core.integrator (or use raycaster.render).

__all__ = [
    "Vector3",
    "Point",
    "Color",
    "color3",
    "clamp_color",
    "Ray",
    "vec3",
    "ray_at",
    "dot",
    "length",
    "normalize",
]
