"""Direct-illumination ray caster built on Taichi.

Renders scenes of spheres and infinite planes lit by directional lights:
one primary ray per pixel from a fixed pinhole camera, nearest-hit search
over all primitives, and Lambertian shading with hard shadows.

Subpackages:
    core: Vector, point, color and ray types; the render driver
    camera: Primary ray generation
    geometry: Sphere and plane primitives and their intersection tests
    scene: Scene description, nearest-hit queries and serialization
    preview: Image export

Taichi must be initialized before rendering, e.g.
``ti.init(arch=ti.cpu, default_fp=ti.f64)``.
"""

from raycaster.core.integrator import Renderer, render

__version__ = "0.1.0"

__all__ = ["Renderer", "render", "__version__"]
