"""Pytest configuration for raycaster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import math

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Geometry runs in
    double precision, so the default float type is f64.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture
def single_sphere_scene():
    """A white sphere straight ahead lit head-on by a white light."""
    from raycaster.core.color import Color
    from raycaster.core.vector import Point, Vector3
    from raycaster.geometry import Sphere
    from raycaster.scene.scene import Light, Scene

    return Scene(
        width=80,
        height=60,
        fov=90.0,
        shadow_bias=1e-6,
        scene_objects=[
            Sphere(
                center=Point(0.0, 0.0, -5.0),
                radius=1.0,
                color=Color(1.0, 1.0, 1.0),
                albedo=math.pi,
            )
        ],
        lights=[Light(direction=Vector3(0.0, 0.0, -1.0), color=Color(1.0, 1.0, 1.0), intensity=1.0)],
    )


@pytest.fixture
def shadow_scene():
    """A floor with a sphere hovering above it.

    The red light shines straight down, so the sphere shadows the floor
    beneath it. The green light comes in at 45 degrees from behind and
    passes beside the sphere.
    """
    from raycaster.core.color import Color
    from raycaster.core.vector import Point, Vector3
    from raycaster.geometry import Plane, Sphere
    from raycaster.scene.scene import Light, Scene

    return Scene(
        width=80,
        height=60,
        fov=90.0,
        shadow_bias=1e-6,
        scene_objects=[
            Plane(
                origin=Point(0.0, -1.0, 0.0),
                normal=Vector3(0.0, 1.0, 0.0),
                color=Color(0.5, 0.5, 0.5),
                albedo=math.pi,
            ),
            Sphere(
                center=Point(0.0, 1.0, -5.0),
                radius=1.0,
                color=Color(1.0, 1.0, 1.0),
                albedo=math.pi,
            ),
        ],
        lights=[
            Light(direction=Vector3(0.0, -1.0, 0.0), color=Color(1.0, 0.0, 0.0), intensity=1.0),
            Light(direction=Vector3(0.0, -1.0, 1.0), color=Color(0.0, 1.0, 0.0), intensity=1.0),
        ],
    )
