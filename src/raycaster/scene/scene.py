"""Immutable scene description.

A ``Scene`` bundles the image size, camera field of view, shadow bias, the
ordered primitives and the ordered directional lights. It is built once,
handed to the renderer and never mutated afterwards.

Example:
    >>> from raycaster.core.color import Color
    >>> from raycaster.core.vector import Point, Vector3
    >>> from raycaster.geometry import Sphere
    >>> from raycaster.scene.scene import Light, Scene
    >>> scene = Scene(
    ...     width=800, height=600, fov=90.0, shadow_bias=1e-6,
    ...     scene_objects=[Sphere(Point(0, 0, -5), 1.0, Color(0.4, 1.0, 0.4), 0.18)],
    ...     lights=[Light(Vector3(0, 0, -1), Color(1.0, 1.0, 1.0), 1.0)],
    ... )
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from raycaster.core.color import Color
from raycaster.core.vector import Vector3
from raycaster.geometry import Primitive


@dataclass(frozen=True)
class Light:
    """A directional light infinitely far away.

    Attributes:
        direction: Direction the light travels, from the light toward the
            scene. It is negated (and normalized) to get the direction
            toward the light when shading.
        color: The light color.
        intensity: Scalar intensity, unbounded.
    """

    direction: Vector3
    color: Color
    intensity: float


@dataclass(frozen=True)
class Scene:
    """A complete, read-only scene description.

    Attributes:
        width: Image width in pixels. Must exceed ``height``; this is
            checked when primary rays are generated.
        height: Image height in pixels.
        fov: Field of view in degrees.
        shadow_bias: Offset along the surface normal applied to shadow ray
            origins to avoid self-intersection.
        scene_objects: Ordered primitives. Intersections refer to them by
            index.
        lights: Ordered directional lights.
    """

    width: int
    height: int
    fov: float
    shadow_bias: float
    scene_objects: Sequence[Primitive] = ()
    lights: Sequence[Light] = ()

    def __post_init__(self) -> None:
        # Freeze the sequences so the scene cannot change under a render
        object.__setattr__(self, "scene_objects", tuple(self.scene_objects))
        object.__setattr__(self, "lights", tuple(self.lights))
