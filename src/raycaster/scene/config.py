"""Scene serialization to and from plain dictionaries and JSON files.

The dictionary layout mirrors the ``Scene`` dataclass:

    {
        "width": 800, "height": 600, "fov": 90.0, "shadow_bias": 1e-6,
        "scene_objects": [
            {"type": "sphere", "center": [0, 0, -5], "radius": 1.0,
             "color": [0.4, 1.0, 0.4], "albedo": 0.18},
            {"type": "plane", "origin": [0, -1, 0], "normal": [0, 1, 0],
             "color": [0.4, 0.4, 0.4], "albedo": 0.18}
        ],
        "lights": [
            {"direction": [0, 0, -1], "color": [1, 1, 1], "intensity": 1.0}
        ]
    }

Example:
    >>> from raycaster.scene.config import load_scene, save_scene
    >>> save_scene(scene, "scene.json")
    >>> assert load_scene("scene.json") == scene
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from raycaster.core.color import Color
from raycaster.core.vector import Point, Vector3
from raycaster.geometry import Plane, Primitive, PrimitiveKind, Sphere, primitive_kind
from raycaster.scene.scene import Light, Scene


def _triple(values: Any) -> tuple[float, float, float]:
    if len(values) != 3:
        raise ValueError(f"Expected 3 components, got {len(values)}: {values!r}")
    return (float(values[0]), float(values[1]), float(values[2]))


def _point(values: Any) -> Point:
    return Point(*_triple(values))


def _vector(values: Any) -> Vector3:
    return Vector3(*_triple(values))


def _color(values: Any) -> Color:
    return Color(*_triple(values))


# =============================================================================
# Export
# =============================================================================


def primitive_to_dict(primitive: Primitive) -> dict[str, Any]:
    """Export a primitive to a dictionary."""
    kind = primitive_kind(primitive)
    if kind == PrimitiveKind.SPHERE:
        return {
            "type": "sphere",
            "center": list(primitive.center.to_tuple()),
            "radius": primitive.radius,
            "color": list(primitive.color.to_tuple()),
            "albedo": primitive.albedo,
        }
    return {
        "type": "plane",
        "origin": list(primitive.origin.to_tuple()),
        "normal": list(primitive.normal.to_tuple()),
        "color": list(primitive.color.to_tuple()),
        "albedo": primitive.albedo,
    }


def light_to_dict(light: Light) -> dict[str, Any]:
    """Export a light to a dictionary."""
    return {
        "direction": list(light.direction.to_tuple()),
        "color": list(light.color.to_tuple()),
        "intensity": light.intensity,
    }


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization).

    Returns:
        A dictionary representation of the scene.
    """
    return {
        "width": scene.width,
        "height": scene.height,
        "fov": scene.fov,
        "shadow_bias": scene.shadow_bias,
        "scene_objects": [primitive_to_dict(p) for p in scene.scene_objects],
        "lights": [light_to_dict(light) for light in scene.lights],
    }


# =============================================================================
# Import
# =============================================================================


def primitive_from_dict(data: dict[str, Any]) -> Primitive:
    """Build a primitive from a dictionary.

    Raises:
        ValueError: If the primitive type is unknown.
        KeyError: If a required key is missing.
    """
    primitive_type = str(data.get("type", "")).lower()
    if primitive_type == "sphere":
        return Sphere(
            center=_point(data["center"]),
            radius=float(data["radius"]),
            color=_color(data["color"]),
            albedo=float(data["albedo"]),
        )
    if primitive_type == "plane":
        return Plane(
            origin=_point(data["origin"]),
            normal=_vector(data["normal"]),
            color=_color(data["color"]),
            albedo=float(data["albedo"]),
        )
    raise ValueError(f"Unknown primitive type: {primitive_type!r}")


def light_from_dict(data: dict[str, Any]) -> Light:
    """Build a directional light from a dictionary.

    Raises:
        KeyError: If a required key is missing.
    """
    return Light(
        direction=_vector(data["direction"]),
        color=_color(data["color"]),
        intensity=float(data["intensity"]),
    )


def scene_from_dict(data: dict[str, Any]) -> Scene:
    """Build a scene from a dictionary.

    ``scene_objects`` and ``lights`` default to empty lists. The width and
    height are not checked here; the landscape requirement is enforced when
    rendering.

    Args:
        data: Dictionary in the layout described in the module docstring.

    Returns:
        The scene.

    Raises:
        ValueError: If a primitive type is unknown or a triple is malformed.
        KeyError: If a required key is missing.
    """
    return Scene(
        width=int(data["width"]),
        height=int(data["height"]),
        fov=float(data["fov"]),
        shadow_bias=float(data["shadow_bias"]),
        scene_objects=[primitive_from_dict(p) for p in data.get("scene_objects", [])],
        lights=[light_from_dict(light) for light in data.get("lights", [])],
    )


def load_scene(filepath: str | Path) -> Scene:
    """Load a scene from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return scene_from_dict(json.load(f))


def save_scene(scene: Scene, filepath: str | Path) -> None:
    """Save a scene to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(scene_to_dict(scene), f, indent=2)
