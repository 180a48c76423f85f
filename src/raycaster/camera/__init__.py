"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

Ray generation maps pixel centers to normalized device coordinates:
    x in [0, width): left to right across the image
    y in [0, height): top to bottom across the image

The same mapping is available on the host (``create_primary_ray``) and in
Taichi kernels (``primary_ray_direction``).
"""

from .pinhole import (
    PinholeCamera,
    check_landscape,
    create_primary_ray,
    primary_ray_direction,
)

__all__ = [
    "PinholeCamera",
    "check_landscape",
    "create_primary_ray",
    "primary_ray_direction",
]
