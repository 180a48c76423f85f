"""Scene module for scene description and ray-scene queries.

Components:
    scene: Immutable Scene and directional Light descriptions
    intersection: Scene upload to Taichi fields and nearest-hit search
    config: Dictionary / JSON serialization of scenes
    demo: Built-in demo scene

Scene data is organized for device access:
    - Structure-of-Arrays layout for primitive geometry
    - A kind tag per primitive for closed dispatch
    - Light directions pre-negated and normalized
"""

from .config import load_scene, save_scene, scene_from_dict, scene_to_dict
from .demo import create_demo_scene
from .intersection import Intersection, SceneData
from .scene import Light, Scene

__all__ = [
    "Scene",
    "Light",
    "Intersection",
    "SceneData",
    "scene_to_dict",
    "scene_from_dict",
    "load_scene",
    "save_scene",
    "create_demo_scene",
]
