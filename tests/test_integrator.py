"""Unit tests for the direct-illumination integrator.

Tests cover:
- Lambertian shading of a lit surface
- Clamping of over-bright pixels
- Hard shadows from occluders
- Background for escaping rays
- Render output layout and determinism
- Landscape validation before rendering
"""

import math

import numpy as np
import pytest


def _with(scene, **changes):
    import dataclasses

    return dataclasses.replace(scene, **changes)


class TestShading:
    """Tests for per-pixel shading."""

    def test_head_on_light_gives_full_color(self, single_sphere_scene):
        """Albedo pi cancels the 1/pi factor, so a facing surface shows its color."""
        from raycaster.core.integrator import Renderer

        # Odd dimensions put pixel (40, 30) on the optical axis
        scene = _with(single_sphere_scene, width=81, height=61)
        color = Renderer(scene).render_pixel(40, 30)

        assert abs(color.red - 1.0) < 1e-5
        assert abs(color.green - 1.0) < 1e-5
        assert abs(color.blue - 1.0) < 1e-5

    def test_intensity_scales_linearly(self, single_sphere_scene):
        from raycaster.core.color import Color
        from raycaster.core.integrator import Renderer
        from raycaster.core.vector import Vector3
        from raycaster.scene.scene import Light

        light = Light(direction=Vector3(0.0, 0.0, -1.0), color=Color(1.0, 1.0, 1.0), intensity=0.5)
        scene = _with(single_sphere_scene, width=81, height=61, lights=(light,))
        color = Renderer(scene).render_pixel(40, 30)

        assert abs(color.red - 0.5) < 1e-5

    def test_albedo_divides_by_pi(self, single_sphere_scene):
        from raycaster.core.color import Color
        from raycaster.core.integrator import Renderer
        from raycaster.core.vector import Point
        from raycaster.geometry import Sphere

        sphere = Sphere(center=Point(0.0, 0.0, -5.0), radius=1.0, color=Color(1.0, 1.0, 1.0), albedo=0.18)
        scene = _with(single_sphere_scene, width=81, height=61, scene_objects=(sphere,))
        color = Renderer(scene).render_pixel(40, 30)

        assert abs(color.red - 0.18 / math.pi) < 1e-5

    def test_over_bright_pixel_is_clamped(self, single_sphere_scene):
        from raycaster.core.color import Color
        from raycaster.core.integrator import Renderer
        from raycaster.core.vector import Vector3
        from raycaster.scene.scene import Light

        light = Light(direction=Vector3(0.0, 0.0, -1.0), color=Color(1.0, 0.5, 0.0), intensity=5.0)
        scene = _with(single_sphere_scene, width=81, height=61, lights=(light,))
        color = Renderer(scene).render_pixel(40, 30)

        assert color.red == 1.0
        assert color.green == 1.0
        assert color.blue == 0.0

    def test_light_from_behind_contributes_nothing(self, single_sphere_scene):
        from raycaster.core.color import Color
        from raycaster.core.integrator import Renderer
        from raycaster.core.vector import Vector3
        from raycaster.scene.scene import Light

        light = Light(direction=Vector3(0.0, 0.0, 1.0), color=Color(1.0, 1.0, 1.0), intensity=1.0)
        scene = _with(single_sphere_scene, width=81, height=61, lights=(light,))
        color = Renderer(scene).render_pixel(40, 30)

        assert color.to_tuple() == (0.0, 0.0, 0.0)

    def test_no_lights_renders_black_surfaces(self, single_sphere_scene):
        from raycaster.core.integrator import Renderer

        scene = _with(single_sphere_scene, lights=())
        image = Renderer(scene).render()

        assert np.all(image == 0.0)


class TestShadows:
    """Tests for hard shadows."""

    def test_occluded_light_is_blocked(self, shadow_scene):
        """The floor under the sphere only receives the unblocked green light."""
        from raycaster.core.integrator import Renderer
        from raycaster.core.ray import Ray
        from raycaster.core.vector import Point, Vector3

        renderer = Renderer(shadow_scene)
        ray = Ray(origin=Point.zero(), direction=Vector3(0.0, -1.0, -5.0).normalize())
        hit = renderer.scene_data.trace(ray)

        assert hit is not None
        assert hit.index == 0

        color = renderer.shade(ray, hit)
        assert color.red == 0.0
        assert abs(color.green - 0.5 * math.sqrt(0.5)) < 1e-5
        assert color.blue == 0.0

    def test_unoccluded_floor_receives_both_lights(self, shadow_scene):
        from raycaster.core.integrator import Renderer
        from raycaster.core.ray import Ray
        from raycaster.core.vector import Point, Vector3

        renderer = Renderer(shadow_scene)
        ray = Ray(origin=Point.zero(), direction=Vector3(4.0, -1.0, -5.0).normalize())
        hit = renderer.scene_data.trace(ray)

        assert hit is not None
        assert hit.index == 0

        color = renderer.shade(ray, hit)
        assert abs(color.red - 0.5) < 1e-5
        assert abs(color.green - 0.5 * math.sqrt(0.5)) < 1e-5


class TestRender:
    """Tests for full-image rendering."""

    def test_output_layout(self, single_sphere_scene):
        from raycaster.core.integrator import render

        image = render(single_sphere_scene)

        assert image.shape == (60, 80, 3)
        assert image.dtype == np.float32
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_escaping_rays_get_background(self, single_sphere_scene):
        from raycaster.core.integrator import BACKGROUND_COLOR, render

        image = render(single_sphere_scene)

        assert tuple(image[0, 0]) == BACKGROUND_COLOR.to_tuple()
        assert tuple(image[59, 79]) == BACKGROUND_COLOR.to_tuple()

    def test_render_is_deterministic(self, shadow_scene):
        from raycaster.core.integrator import Renderer

        renderer = Renderer(shadow_scene)
        first = renderer.render()
        second = renderer.render()

        np.testing.assert_array_equal(first, second)

    def test_renderer_reuses_its_buffers(self, shadow_scene):
        """Repeated renders write into the same image field."""
        from raycaster.core.integrator import Renderer

        renderer = Renderer(shadow_scene)
        image_field = renderer._image
        scene_fields = renderer.scene_data.positions

        images = [renderer.render() for _ in range(3)]

        assert renderer._image is image_field
        assert renderer.scene_data.positions is scene_fields
        for image in images[1:]:
            np.testing.assert_array_equal(image, images[0])
        # Returned arrays are copies, not views of the field
        assert images[0] is not images[1]

    def test_render_pixel_matches_image(self, shadow_scene):
        from raycaster.core.integrator import Renderer

        renderer = Renderer(shadow_scene)
        image = renderer.render()

        for x, y in [(0, 0), (40, 45), (79, 59), (40, 20)]:
            color = renderer.render_pixel(x, y)
            np.testing.assert_allclose(color.to_tuple(), image[y, x], atol=1e-6)

    def test_render_pixel_out_of_bounds_raises(self, shadow_scene):
        from raycaster.core.integrator import Renderer

        renderer = Renderer(shadow_scene)

        with pytest.raises(IndexError):
            renderer.render_pixel(80, 0)
        with pytest.raises(IndexError):
            renderer.render_pixel(0, -1)

    def test_top_row_is_image_top(self, shadow_scene):
        """The floor is below the camera, so it fills the bottom rows only."""
        from raycaster.core.integrator import render

        image = render(shadow_scene)

        assert np.all(image[0] == 0.0)
        assert np.any(image[-1] > 0.0)


class TestLandscapeValidation:
    """Rendering requires width > height."""

    @pytest.mark.parametrize("width,height", [(5, 5), (60, 80)])
    def test_non_landscape_raises(self, single_sphere_scene, width, height):
        from raycaster.core.integrator import Renderer, render

        scene = _with(single_sphere_scene, width=width, height=height)

        with pytest.raises(ValueError):
            render(scene)
        with pytest.raises(ValueError):
            Renderer(scene)


class TestDemoScene:
    """End-to-end check on the built-in demo scene."""

    def test_full_size_demo_render(self):
        from raycaster.core.integrator import render
        from raycaster.scene.demo import create_demo_scene

        image = render(create_demo_scene())

        assert image.shape == (600, 800, 3)
        # Straight ahead is the green sphere
        assert image[300, 400].sum() > 0.0
        # The top-left ray escapes above everything
        assert np.all(image[0, 0] == 0.0)
