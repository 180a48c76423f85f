"""Scene-level ray intersection testing.

This module uploads an immutable ``Scene`` into Taichi fields and provides
the nearest-hit search over all of its primitives.

The primitives are stored in a single Structure-of-Arrays table indexed in
scene order. A ``kinds`` field tags each slot with its ``PrimitiveKind`` and
every per-primitive query dispatches on it; ``positions`` holds the sphere
center or the plane origin, ``radii`` the sphere radius and ``normals`` the
plane normal. Lights are stored with their direction already negated and
normalized, i.e. pointing toward the light.

The nearest-hit search is a linear scan in scene order. On equal distances
the earlier primitive wins. Negative sphere distances (ray origin inside a
sphere) take part in the search like any other hit.

Non-finite scene geometry is rejected on upload, so NaN distances cannot
arise from scene data. The shape tests compare with ``<=`` and ``>=``, which
are already false for NaN; the search also skips NaN distances explicitly.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.scene.intersection import SceneData
    >>> data = SceneData(scene)
    >>> hit = data.trace(ray)
    >>> if hit is not None:
    ...     print(hit.distance, hit.primitive(scene))
"""


import logging
import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, vec3
from raycaster.core.vector import Point, Vector3
from raycaster.geometry import (
    Plane,
    Primitive,
    PrimitiveKind,
    Sphere,
    intersect_plane,
    intersect_sphere,
    plane_normal,
    primitive_kind,
    sphere_normal,
)
from raycaster.scene.scene import Scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Intersection:
    """Result of a nearest-hit query.

    Attributes:
        distance: Ray parameter of the hit.
        index: Position of the hit primitive in ``scene.scene_objects``.
            The intersection does not own the primitive; resolve it against
            the scene it was traced in.
    """

    distance: float
    index: int

    def primitive(self, scene: Scene) -> Primitive:
        """Look up the hit primitive in the scene that produced this hit."""
        return scene.scene_objects[self.index]


def _check_finite(scene: Scene) -> None:
    values = [("shadow_bias", scene.shadow_bias)]
    for i, primitive in enumerate(scene.scene_objects):
        if isinstance(primitive, Sphere):
            values += [(f"scene_objects[{i}].center", v) for v in primitive.center.to_tuple()]
            values.append((f"scene_objects[{i}].radius", primitive.radius))
        elif isinstance(primitive, Plane):
            values += [(f"scene_objects[{i}].origin", v) for v in primitive.origin.to_tuple()]
            values += [(f"scene_objects[{i}].normal", v) for v in primitive.normal.to_tuple()]
    for j, light in enumerate(scene.lights):
        values += [(f"lights[{j}].direction", v) for v in light.direction.to_tuple()]

    for name, value in values:
        if not math.isfinite(value):
            raise ValueError(f"Scene value {name} is not finite: {value!r}")


@ti.data_oriented
class SceneData:
    """A scene compiled into Taichi fields.

    Fields are sized to the scene (at least one slot so empty scenes still
    allocate) and written once in the constructor. Kernels and functions
    only read them afterwards. Taichi keeps the fields alive until
    ``ti.reset()``, so build one instance per scene and reuse it.

    Attributes:
        scene: The host scene this data was built from.
        num_objects: Number of primitives (0-d field).
        num_lights: Number of lights (0-d field).
    """

    def __init__(self, scene: Scene) -> None:
        """Allocate fields and upload the scene.

        Args:
            scene: The scene to upload.

        Raises:
            ValueError: If a light has a zero-length direction, or a geometry
                value or the shadow bias is not finite.
            TypeError: If a scene object is not a supported primitive.
        """
        _check_finite(scene)
        self.scene = scene

        object_capacity = max(len(scene.scene_objects), 1)
        light_capacity = max(len(scene.lights), 1)

        # Primitive storage: Structure of Arrays
        self.num_objects = ti.field(dtype=ti.i32, shape=())
        self.kinds = ti.field(dtype=ti.i32, shape=object_capacity)
        self.positions = ti.Vector.field(3, dtype=ti.f64, shape=object_capacity)
        self.radii = ti.field(dtype=ti.f64, shape=object_capacity)
        self.normals = ti.Vector.field(3, dtype=ti.f64, shape=object_capacity)
        self.colors = ti.Vector.field(3, dtype=ti.f32, shape=object_capacity)
        self.albedos = ti.field(dtype=ti.f32, shape=object_capacity)

        # Light storage
        self.num_lights = ti.field(dtype=ti.i32, shape=())
        self.light_directions = ti.Vector.field(3, dtype=ti.f64, shape=light_capacity)
        self.light_colors = ti.Vector.field(3, dtype=ti.f32, shape=light_capacity)
        self.light_intensities = ti.field(dtype=ti.f32, shape=light_capacity)

        self.shadow_bias = ti.field(dtype=ti.f64, shape=())

        # Scratch fields for host-side queries
        self._query_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._query_direction = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._query_hit = ti.field(dtype=ti.i32, shape=())
        self._query_distance = ti.field(dtype=ti.f64, shape=())
        self._query_index = ti.field(dtype=ti.i32, shape=())
        self._query_normal = ti.Vector.field(3, dtype=ti.f64, shape=())

        self._upload(scene)

    def _upload(self, scene: Scene) -> None:
        for i, primitive in enumerate(scene.scene_objects):
            kind = primitive_kind(primitive)
            self.kinds[i] = int(kind)
            self.colors[i] = list(primitive.color.to_tuple())
            self.albedos[i] = primitive.albedo
            if kind == PrimitiveKind.SPHERE:
                self.positions[i] = list(primitive.center.to_tuple())
                self.radii[i] = primitive.radius
                self.normals[i] = [0.0, 0.0, 0.0]
            elif kind == PrimitiveKind.PLANE:
                self.positions[i] = list(primitive.origin.to_tuple())
                self.radii[i] = 0.0
                self.normals[i] = list(primitive.normal.to_tuple())
        self.num_objects[None] = len(scene.scene_objects)

        for j, light in enumerate(scene.lights):
            self.light_directions[j] = list((-light.direction.normalize()).to_tuple())
            self.light_colors[j] = list(light.color.to_tuple())
            self.light_intensities[j] = light.intensity
        self.num_lights[None] = len(scene.lights)

        self.shadow_bias[None] = scene.shadow_bias

        logger.debug(
            "Uploaded scene: %d objects, %d lights, %dx%d",
            len(scene.scene_objects),
            len(scene.lights),
            scene.width,
            scene.height,
        )

    # =========================================================================
    # Device-side queries
    # =========================================================================

    @ti.func
    def intersect_object(self, index: ti.i32, ray_origin: vec3, ray_direction: vec3):
        """Intersect a ray with one primitive.

        Returns:
            A tuple ``(hit, t)``; see ``intersect_sphere`` and
            ``intersect_plane``.
        """
        did_hit = 0
        t = ti.cast(0.0, ti.f64)

        kind = self.kinds[index]
        if kind == int(PrimitiveKind.SPHERE):
            did_hit, t = intersect_sphere(
                ray_origin, ray_direction, self.positions[index], self.radii[index]
            )
        elif kind == int(PrimitiveKind.PLANE):
            did_hit, t = intersect_plane(
                ray_origin, ray_direction, self.positions[index], self.normals[index]
            )

        return did_hit, t

    @ti.func
    def object_normal(self, index: ti.i32, hit_point: vec3) -> vec3:
        """Surface normal of a primitive at a point on its surface."""
        normal = vec3(0.0, 0.0, 0.0)

        kind = self.kinds[index]
        if kind == int(PrimitiveKind.SPHERE):
            normal = sphere_normal(self.positions[index], hit_point)
        elif kind == int(PrimitiveKind.PLANE):
            normal = plane_normal(self.normals[index], hit_point)

        return normal

    @ti.func
    def trace_ray(self, ray_origin: vec3, ray_direction: vec3):
        """Find the nearest primitive hit by a ray.

        Returns:
            A tuple ``(hit, t, index)``. ``t`` and ``index`` are only valid
            when ``hit`` is 1; ``index`` is -1 on a miss.
        """
        found = 0
        nearest_t = ti.cast(0.0, ti.f64)
        nearest_index = -1

        for i in range(self.num_objects[None]):
            did_hit, t = self.intersect_object(i, ray_origin, ray_direction)
            if did_hit == 1 and not tm.isnan(t):
                if found == 0 or t < nearest_t:
                    found = 1
                    nearest_t = t
                    nearest_index = i

        return found, nearest_t, nearest_index

    @ti.func
    def occluded(self, ray_origin: vec3, ray_direction: vec3) -> ti.i32:
        """Check whether a ray hits anything at all (shadow ray query).

        Any hit counts regardless of distance, since lights are directional.
        Stops testing primitives after the first hit.
        """
        hit_any = 0

        for i in range(self.num_objects[None]):
            if hit_any == 0:
                did_hit, t = self.intersect_object(i, ray_origin, ray_direction)
                if did_hit == 1 and not tm.isnan(t):
                    hit_any = 1

        return hit_any

    # =========================================================================
    # Host-side query kernels
    # =========================================================================

    @ti.kernel
    def _intersect_kernel(self, index: ti.i32):
        # Single-iteration outer loop keeps the inner scan serial
        for _ in range(1):
            did_hit, t = self.intersect_object(
                index, self._query_origin[None], self._query_direction[None]
            )
            self._query_hit[None] = did_hit
            self._query_distance[None] = t

    @ti.kernel
    def _normal_kernel(self, index: ti.i32):
        for _ in range(1):
            self._query_normal[None] = self.object_normal(index, self._query_origin[None])

    @ti.kernel
    def _trace_kernel(self):
        for _ in range(1):
            found, t, nearest_index = self.trace_ray(
                self._query_origin[None], self._query_direction[None]
            )
            self._query_hit[None] = found
            self._query_distance[None] = t
            self._query_index[None] = nearest_index

    # =========================================================================
    # Host-side query API
    # =========================================================================

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.scene.scene_objects):
            raise IndexError(
                f"Primitive index {index} out of range "
                f"(scene has {len(self.scene.scene_objects)} objects)"
            )

    def _set_query_ray(self, ray: Ray) -> None:
        self._query_origin[None] = list(ray.origin.to_tuple())
        self._query_direction[None] = list(ray.direction.to_tuple())

    def intersect(self, index: int, ray: Ray) -> "float | None":
        """Intersect a ray with a single primitive.

        Args:
            index: Position of the primitive in ``scene.scene_objects``.
            ray: The ray to test.

        Returns:
            The hit distance, or None on a miss.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        self._check_index(index)
        self._set_query_ray(ray)
        self._intersect_kernel(index)
        if self._query_hit[None] == 0:
            return None
        return float(self._query_distance[None])

    def normal_at(self, index: int, hit_point: Point) -> Vector3:
        """Surface normal of a primitive at a point.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        self._check_index(index)
        self._query_origin[None] = list(hit_point.to_tuple())
        self._normal_kernel(index)
        n = self._query_normal[None]
        return Vector3(float(n[0]), float(n[1]), float(n[2]))

    def trace(self, ray: Ray) -> "Intersection | None":
        """Find the nearest primitive hit by a ray.

        Args:
            ray: The ray to trace.

        Returns:
            The nearest intersection, or None if nothing is hit.
        """
        self._set_query_ray(ray)
        self._trace_kernel()
        if self._query_hit[None] == 0:
            return None
        return Intersection(
            distance=float(self._query_distance[None]),
            index=int(self._query_index[None]),
        )
