"""Demo scene: three spheres over a floor plane lit by three colored lights.

Scene layout (camera at the origin looking down -z):
    - Large blue sphere up and to the left, far back (z = -10, r = 5)
    - Small green sphere straight ahead (z = -5, r = 1)
    - Red sphere to the right, close to the camera (z = -3, r = 2.5)
    - Gray floor plane at y = -1
    - Red, green and blue directional lights from above

Every surface uses an albedo of pi, so the Lambertian ``albedo / pi``
factor is exactly 1 and a surface facing a light head-on receives the full
``color * light_color * intensity``.

Example:
    >>> from raycaster.scene.demo import create_demo_scene
    >>> scene = create_demo_scene()
    >>> len(scene.scene_objects), len(scene.lights)
    (4, 3)
"""

import math

from raycaster.core.color import Color
from raycaster.core.vector import Point, Vector3
from raycaster.geometry import Plane, Sphere
from raycaster.scene.scene import Light, Scene

DEMO_WIDTH = 800
DEMO_HEIGHT = 600
DEMO_FOV = 90.0
DEMO_SHADOW_BIAS = 1e-6


def create_demo_scene(
    width: int = DEMO_WIDTH,
    height: int = DEMO_HEIGHT,
    fov: float = DEMO_FOV,
) -> Scene:
    """Create the demo scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels (must be less than width to render).
        fov: Field of view in degrees.

    Returns:
        The demo scene.
    """
    scene_objects = [
        Sphere(
            center=Point(-2.0, 5.0, -10.0),
            radius=5.0,
            color=Color(0.4, 0.4, 1.0),
            albedo=math.pi,
        ),
        Sphere(
            center=Point(0.0, 0.0, -5.0),
            radius=1.0,
            color=Color(0.4, 1.0, 0.4),
            albedo=math.pi,
        ),
        Sphere(
            center=Point(3.0, 2.0, -3.0),
            radius=2.5,
            color=Color(1.0, 0.4, 0.4),
            albedo=math.pi,
        ),
        Plane(
            origin=Point(0.0, -1.0, 0.0),
            normal=Vector3(0.0, 1.0, 0.0),
            color=Color(0.4, 0.4, 0.4),
            albedo=math.pi,
        ),
    ]

    lights = [
        Light(direction=Vector3(1.0, -2.0, -1.0), color=Color(1.0, 0.0, 0.0), intensity=1.0),
        Light(direction=Vector3(-1.0, -1.0, -1.0), color=Color(0.0, 1.0, 0.0), intensity=2.0),
        Light(direction=Vector3(1.0, -1.0, -1.0), color=Color(0.0, 0.0, 1.0), intensity=2.0),
    ]

    return Scene(
        width=width,
        height=height,
        fov=fov,
        shadow_bias=DEMO_SHADOW_BIAS,
        scene_objects=scene_objects,
        lights=lights,
    )
