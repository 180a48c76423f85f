"""Pinhole camera model for primary ray generation.

The camera sits at the coordinate-space origin and looks down the negative
z-axis; there is no configurable camera transform. A pixel ``(x, y)`` is
mapped through its center into normalized device coordinates, flipped
vertically so that row 0 is the top of the image, widened by the aspect
ratio and scaled by the field of view:

    sensor_x = ((x + 0.5) / width * 2 - 1) * aspect_ratio * tan(fov / 2)
    sensor_y = (1 - (y + 0.5) / height * 2) * tan(fov / 2)
    direction = normalize(sensor_x, sensor_y, -1)

Only landscape framing is supported: the width must exceed the height.

Example:
    >>> from raycaster.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(width=800, height=600, fov=90.0)
    >>> camera.aspect_ratio
    1.3333333333333333
    >>> ray = camera.primary_ray(400, 300)
"""


import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import taichi as ti

from raycaster.core.ray import Ray, normalize, vec3
from raycaster.core.vector import Point, Vector3

if TYPE_CHECKING:
    from raycaster.scene.scene import Scene


def check_landscape(width: int, height: int) -> None:
    """Validate the landscape framing precondition.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If ``width`` does not exceed ``height``.
    """
    if width <= height:
        raise ValueError(
            f"Image width must exceed height for primary ray generation "
            f"(got {width}x{height})"
        )


@dataclass(frozen=True)
class PinholeCamera:
    """Camera parameters derived from the scene.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels (strictly less than width).
        fov: Field of view in degrees.
    """

    width: int
    height: int
    fov: float

    def __post_init__(self) -> None:
        check_landscape(self.width, self.height)

    @classmethod
    def from_scene(cls, scene: "Scene") -> "PinholeCamera":
        """Build the camera for a scene.

        Raises:
            ValueError: If the scene is not landscape.
        """
        return cls(width=scene.width, height=scene.height, fov=scene.fov)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def fov_adjustment(self) -> float:
        """Tangent of half the field of view."""
        return math.tan(math.radians(self.fov) / 2.0)

    def primary_ray(self, x: int, y: int) -> Ray:
        """Generate the ray through the center of pixel ``(x, y)``.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            A ray from the origin with a unit direction.
        """
        fov_adjustment = self.fov_adjustment
        sensor_x = (((x + 0.5) / self.width) * 2.0 - 1.0) * self.aspect_ratio * fov_adjustment
        sensor_y = (1.0 - ((y + 0.5) / self.height) * 2.0) * fov_adjustment
        return Ray(
            origin=Point.zero(),
            direction=Vector3(sensor_x, sensor_y, -1.0).normalize(),
        )


def create_primary_ray(x: int, y: int, scene: "Scene") -> Ray:
    """Generate the primary ray for a pixel of a scene.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        scene: The scene supplying width, height and field of view.

    Returns:
        The camera ray through the pixel center.

    Raises:
        ValueError: If ``scene.width <= scene.height``.
    """
    return PinholeCamera.from_scene(scene).primary_ray(x, y)


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def primary_ray_direction(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov_adjustment: ti.f64,
) -> vec3:
    """Compute the unit direction of the primary ray through a pixel.

    The ray origin is always the coordinate-space origin. The caller must
    have validated ``width > height`` on the host.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov_adjustment: tan(fov / 2), precomputed on the host.

    Returns:
        The normalized camera-space ray direction.
    """
    w = ti.cast(width, ti.f64)
    h = ti.cast(height, ti.f64)
    aspect_ratio = w / h
    sensor_x = (((ti.cast(x, ti.f64) + 0.5) / w) * 2.0 - 1.0) * aspect_ratio * fov_adjustment
    sensor_y = (1.0 - ((ti.cast(y, ti.f64) + 0.5) / h) * 2.0) * fov_adjustment
    return normalize(vec3(sensor_x, sensor_y, -1.0))
