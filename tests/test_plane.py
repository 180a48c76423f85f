"""Unit tests for infinite plane intersection.

Tests cover:
- Ray hitting the plane in front of its origin
- Parallel rays within the epsilon band
- Plane behind the ray
- Constant normal
"""

import math

import pytest
import taichi as ti


def _intersect(origin, direction, plane_origin, normal):
    """Run intersect_plane in a kernel and return (hit, t)."""
    from raycaster.geometry.plane import intersect_plane

    inputs = ti.Vector.field(3, dtype=ti.f64, shape=4)
    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f64, shape=())
    inputs[0] = list(origin)
    inputs[1] = list(direction)
    inputs[2] = list(plane_origin)
    inputs[3] = list(normal)

    @ti.kernel
    def test_kernel():
        did_hit, t = intersect_plane(inputs[0], inputs[1], inputs[2], inputs[3])
        hit[None] = did_hit
        t_val[None] = t

    test_kernel()
    return hit[None], t_val[None]


FLOOR_ORIGIN = (0.0, -1.0, 0.0)
FLOOR_NORMAL = (0.0, 1.0, 0.0)


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_straight_down_hits_at_distance_one(self):
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -1.0, 0.0), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 1
        assert abs(t - 1.0) < 1e-12

    def test_oblique_hit(self):
        s = 1.0 / math.sqrt(2.0)
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -s, -s), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 1
        assert abs(t - math.sqrt(2.0)) < 1e-9

    def test_normal_facing_away_still_hits(self):
        """Intersection uses the normal as given; orientation does not matter."""
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -1.0, 0.0), FLOOR_ORIGIN, (0.0, -1.0, 0.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-12

    @pytest.mark.parametrize("dy", [0.0, 1e-6, -1e-6, 5e-7])
    def test_parallel_within_epsilon_misses(self, dy):
        hit, _ = _intersect((0.0, 0.0, 0.0), (0.0, dy, -1.0), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 0

    def test_just_outside_epsilon_hits(self):
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -2e-6, -1.0), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 1
        assert t > 0.0

    def test_plane_behind_ray_misses(self):
        hit, _ = _intersect((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 0

    def test_origin_on_plane_hits_at_zero(self):
        hit, t = _intersect((0.0, -1.0, 0.0), (0.0, -1.0, 0.0), FLOOR_ORIGIN, FLOOR_NORMAL)

        assert hit == 1
        assert t == 0.0


class TestPlaneNormal:
    """Tests for plane normals."""

    def test_normal_is_constant(self):
        from raycaster.core.ray import vec3
        from raycaster.geometry.plane import plane_normal

        result = ti.Vector.field(3, dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            n = vec3(0.0, 1.0, 0.0)
            result[0] = plane_normal(n, vec3(0.0, -1.0, 0.0))
            result[1] = plane_normal(n, vec3(100.0, -1.0, -250.0))

        test_kernel()
        for i in range(2):
            n = result[i]
            assert (n[0], n[1], n[2]) == (0.0, 1.0, 0.0)

    def test_plane_kind(self):
        from raycaster.core.color import Color
        from raycaster.core.vector import Point, Vector3
        from raycaster.geometry import Plane, PrimitiveKind, primitive_kind

        plane = Plane(
            origin=Point(0.0, -1.0, 0.0),
            normal=Vector3(0.0, 1.0, 0.0),
            color=Color(0.4, 0.4, 0.4),
            albedo=0.18,
        )

        assert primitive_kind(plane) == PrimitiveKind.PLANE

    def test_unknown_primitive_raises(self):
        from raycaster.geometry import primitive_kind

        with pytest.raises(TypeError):
            primitive_kind(object())
