"""Direct-illumination integrator and render driver.

This module implements the per-pixel rendering kernel: one primary ray per
pixel, a nearest-hit query, and local Lambertian shading with one hard
shadow ray per light. There is no recursion, no sampling and no
accumulation; a pixel's color depends only on the scene.

Shading for a hit on a primitive with color ``C`` and albedo ``a``:

    for each light (direction d, color L, intensity I):
        p      = ray_origin + ray_direction * t
        n      = normal at p
        l      = -normalize(d)                 # toward the light
        lit    = nothing hit from p + n * shadow_bias along l
        power  = max(0, dot(n, l)) * (I if lit else 0)
        color += C * L * power * (a / pi)
    color = clamp(color, 0, 1)

Pixels whose primary ray hits nothing receive the background color (black).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.core.integrator import render
    >>> from raycaster.scene.demo import create_demo_scene
    >>>
    >>> image = render(create_demo_scene())  # (600, 800, 3) float32 in [0, 1]
"""


import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.camera.pinhole import PinholeCamera, primary_ray_direction
from raycaster.core.color import Color, clamp_color, color3
from raycaster.core.ray import Ray, dot, ray_at, vec3
from raycaster.scene.intersection import Intersection, SceneData
from raycaster.scene.scene import Scene

logger = logging.getLogger(__name__)

# Color of pixels whose primary ray escapes the scene
BACKGROUND_COLOR = Color.black()


@ti.data_oriented
class Renderer:
    """Renders a scene into a Taichi color buffer.

    The scene is uploaded once on construction; ``render`` can be called any
    number of times and always produces the same image. Each instance
    allocates its own Taichi fields (the scene plus an image buffer) and
    compiles its own kernels, none of which are freed before ``ti.reset()``.
    Long-running callers should keep one renderer per scene and call
    ``render`` on it rather than building a new one for every frame.

    Attributes:
        scene: The host scene being rendered.
        camera: Camera parameters derived from the scene.
        scene_data: The scene compiled into Taichi fields.
    """

    def __init__(self, scene: Scene) -> None:
        """Validate the scene, upload it and allocate the image buffer.

        Args:
            scene: The scene to render.

        Raises:
            ValueError: If ``scene.width <= scene.height`` or a light has a
                zero-length direction.
        """
        # Fails before anything is allocated on the device
        self.camera = PinholeCamera.from_scene(scene)
        self.scene = scene
        self.scene_data = SceneData(scene)

        self._image = ti.Vector.field(3, dtype=ti.f32, shape=(scene.height, scene.width))
        self._pixel_color = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._background = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._background[None] = list(BACKGROUND_COLOR.to_tuple())

        # Scratch fields for host-side shading queries
        self._query_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._query_direction = ti.Vector.field(3, dtype=ti.f64, shape=())

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self.scene.width

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self.scene.height

    # =========================================================================
    # Shading
    # =========================================================================

    @ti.func
    def shade_hit(
        self,
        ray_origin: vec3,
        ray_direction: vec3,
        distance: ti.f64,
        index: ti.i32,
    ) -> color3:
        """Compute the clamped color of a surface hit.

        Args:
            ray_origin: Origin of the ray that produced the hit.
            ray_direction: Unit direction of that ray.
            distance: Ray parameter of the hit.
            index: Index of the hit primitive.

        Returns:
            The summed light contributions, clamped to [0, 1].
        """
        color = color3(0.0, 0.0, 0.0)

        hit_point = ray_at(ray_origin, ray_direction, distance)
        surface_normal = self.scene_data.object_normal(index, hit_point)
        object_color = self.scene_data.colors[index]
        light_reflected = self.scene_data.albedos[index] / ti.cast(tm.pi, ti.f32)
        shadow_origin = hit_point + surface_normal * self.scene_data.shadow_bias[None]

        for j in range(self.scene_data.num_lights[None]):
            direction_to_light = self.scene_data.light_directions[j]

            light_intensity = ti.cast(0.0, ti.f32)
            if self.scene_data.occluded(shadow_origin, direction_to_light) == 0:
                light_intensity = self.scene_data.light_intensities[j]

            cos_theta = ti.cast(dot(surface_normal, direction_to_light), ti.f32)
            light_power = ti.max(cos_theta, ti.cast(0.0, ti.f32)) * light_intensity

            color += object_color * self.scene_data.light_colors[j] * light_power * light_reflected

        return clamp_color(color)

    @ti.func
    def pixel_color(self, x: ti.i32, y: ti.i32, fov_adjustment: ti.f64) -> color3:
        """Trace the primary ray of a pixel and shade it."""
        origin = vec3(0.0, 0.0, 0.0)
        direction = primary_ray_direction(x, y, self.scene.width, self.scene.height, fov_adjustment)

        color = self._background[None]
        found, distance, index = self.scene_data.trace_ray(origin, direction)
        if found == 1:
            color = self.shade_hit(origin, direction, distance, index)

        return color

    # =========================================================================
    # Rendering Kernels
    # =========================================================================

    @ti.kernel
    def _render_kernel(self, fov_adjustment: ti.f64):
        for y, x in self._image:
            self._image[y, x] = self.pixel_color(x, y, fov_adjustment)

    @ti.kernel
    def _render_pixel_kernel(self, x: ti.i32, y: ti.i32, fov_adjustment: ti.f64):
        for _ in range(1):
            self._pixel_color[None] = self.pixel_color(x, y, fov_adjustment)

    @ti.kernel
    def _shade_kernel(self, distance: ti.f64, index: ti.i32):
        for _ in range(1):
            self._pixel_color[None] = self.shade_hit(
                self._query_origin[None], self._query_direction[None], distance, index
            )

    # =========================================================================
    # Public Rendering API
    # =========================================================================

    def render(self) -> npt.NDArray[np.float32]:
        """Render every pixel of the scene.

        Returns:
            Float32 array of shape ``(height, width, 3)``, row-major with the
            origin at the top-left, every channel in [0, 1].
        """
        start = time.perf_counter()
        self._render_kernel(self.camera.fov_adjustment)
        image = self._image.to_numpy().astype(np.float32)
        logger.debug(
            "Rendered %dx%d in %.3fs", self.width, self.height, time.perf_counter() - start
        )
        return image

    def render_pixel(self, x: int, y: int) -> Color:
        """Render a single pixel.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            The pixel color.

        Raises:
            IndexError: If the pixel lies outside the image.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        self._render_pixel_kernel(x, y, self.camera.fov_adjustment)
        return _to_color(self._pixel_color[None])

    def shade(self, ray: Ray, intersection: Intersection) -> Color:
        """Shade an intersection found by tracing ``ray`` in this scene.

        Args:
            ray: The ray that produced the intersection.
            intersection: The nearest hit returned by ``scene_data.trace``.

        Returns:
            The clamped surface color.
        """
        self._query_origin[None] = list(ray.origin.to_tuple())
        self._query_direction[None] = list(ray.direction.to_tuple())
        self._shade_kernel(intersection.distance, intersection.index)
        return _to_color(self._pixel_color[None])

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"objects={len(self.scene.scene_objects)}, lights={len(self.scene.lights)})"
        )


def _to_color(value) -> Color:
    return Color(float(value[0]), float(value[1]), float(value[2]))


def render(scene: Scene) -> npt.NDArray[np.float32]:
    """Render a scene to a grid of colors.

    Convenience wrapper for one-off renders: it builds a new ``Renderer``
    (and its Taichi fields) on every call. Reuse a ``Renderer`` to render
    the same scene repeatedly.

    Args:
        scene: The scene to render. Its width must exceed its height.

    Returns:
        Float32 array of shape ``(height, width, 3)`` with channels in [0, 1].

    Raises:
        ValueError: If ``scene.width <= scene.height`` or a scene value is
            not finite; nothing is rendered.
    """
    return Renderer(scene).render()
