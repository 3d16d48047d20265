"""Scene-level primitive intersection testing.

The scene is an ordered list of primitives stored in Taichi fields:

- ``primitive_kinds[k]`` holds the HittableKind of the k-th primitive;
- ``primitive_indices[k]`` holds its index into the per-kind storage
  (``sphere_centers`` / ``sphere_radii`` for spheres).

``intersect_scene`` walks the list in insertion order, dispatching on the
kind, and shrinks the accepted interval to the closest hit found so far.
That makes the result the globally nearest hit regardless of insertion
order; order only affects how much work is done.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.scene.intersection import add_sphere, clear_scene, hit_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5)
    >>> hit_scene((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)).t
    0.5
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, vec3
from raycaster.geometry.hittable import HitRecord, HittableKind, make_miss_record
from raycaster.geometry.sphere import hit_sphere, make_sphere

# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_PRIMITIVES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Ordered primitive list: kind tag plus index into the per-kind storage
primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
primitive_indices = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())


@dataclass
class HitResult:
    """Python-side copy of a successful scene intersection.

    Attributes:
        t: The ray parameter of the intersection.
        point: The intersection point.
        normal: The unit surface normal, oriented against the ray.
        front_face: True if the ray hit the outside of the surface.
    """

    t: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    front_face: bool


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive counts to zero. The field data is not cleared but
    will be overwritten when new primitives are added.
    """
    num_spheres[None] = 0
    num_primitives[None] = 0


def _append_primitive(kind: HittableKind, index: int) -> int:
    """Append a primitive to the ordered list and return its position."""
    k = num_primitives[None]
    if k >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    primitive_kinds[k] = int(kind)
    primitive_indices[k] = index
    num_primitives[None] = k + 1
    return k


def add_sphere(center: Sequence[float], radius: float) -> int:
    """Add a sphere to the end of the scene.

    Args:
        center: The center point of the sphere (x, y, z).
        radius: The radius of the sphere.

    Returns:
        The index of the added sphere in the sphere storage.

    Raises:
        ValueError: If the radius is not positive.
        RuntimeError: If the maximum number of spheres or primitives is
            exceeded.
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if num_primitives[None] >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")

    sphere_centers[idx] = [float(center[0]), float(center[1]), float(center[2])]
    sphere_radii[idx] = float(radius)
    num_spheres[None] = idx + 1
    _append_primitive(HittableKind.SPHERE, idx)
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_primitive_count() -> int:
    """Get the number of primitives of any kind in the scene."""
    return int(num_primitives[None])


@ti.func
def _is_preferred_hit(ray: Ray, candidate: HitRecord, best: HitRecord) -> ti.i32:
    """Whether candidate should replace best as the scene's closest hit.

    A nearer hit always wins. At equal t a front-face hit beats a back-face
    one, then the normal more opposed to the ray wins.
    """
    preferred = 0
    if candidate.hit == 1:
        if best.hit == 0 or candidate.t < best.t:
            preferred = 1
        elif candidate.t == best.t:
            if candidate.front_face > best.front_face:
                preferred = 1
            elif candidate.front_face == best.front_face:
                if tm.dot(ray.direction, candidate.normal) < tm.dot(ray.direction, best.normal):
                    preferred = 1
    return preferred


@ti.func
def intersect_scene(ray: Ray, t_min: ti.f64, t_max: ti.f64) -> HitRecord:
    """Test ray against all primitives in the scene.

    Each primitive is tested against [t_min, closest_so_far], where
    closest_so_far starts at t_max and shrinks to the t of every accepted
    hit. Because the interval is closed, a later primitive can report a hit
    at exactly the current t; such ties are settled by _is_preferred_hit so
    the result does not depend on primitive order.

    Args:
        ray: The ray to test.
        t_min: Smallest accepted ray parameter (inclusive).
        t_max: Largest accepted ray parameter (inclusive).

    Returns:
        A HitRecord for the closest intersection, or a miss record if no
        primitive was hit.
    """
    closest_so_far = t_max
    result = make_miss_record()

    ti.loop_config(serialize=True)
    for k in range(num_primitives[None]):
        rec = make_miss_record()
        kind = primitive_kinds[k]
        idx = primitive_indices[k]

        if kind == int(HittableKind.SPHERE):
            sphere = make_sphere(sphere_centers[idx], sphere_radii[idx])
            rec = hit_sphere(ray, sphere, t_min, closest_so_far)

        if _is_preferred_hit(ray, rec, result) == 1:
            closest_so_far = rec.t
            result = rec

    return result


# =============================================================================
# Python-side Queries
# =============================================================================

_query_hit = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=ti.f64, shape=())
_query_point = ti.Vector.field(3, dtype=ti.f64, shape=())
_query_normal = ti.Vector.field(3, dtype=ti.f64, shape=())
_query_front_face = ti.field(dtype=ti.i32, shape=())


@ti.kernel
def _query_scene(origin: vec3, direction: vec3, t_min: ti.f64, t_max: ti.f64):
    """Run intersect_scene for one ray and store the record in query fields."""
    rec = intersect_scene(Ray(origin=origin, direction=direction), t_min, t_max)
    _query_hit[None] = rec.hit
    _query_t[None] = rec.t
    _query_point[None] = rec.point
    _query_normal[None] = rec.normal
    _query_front_face[None] = rec.front_face


def hit_scene(
    origin: Sequence[float],
    direction: Sequence[float],
    t_min: float = 0.0,
    t_max: float = math.inf,
) -> HitResult | None:
    """Find the closest scene intersection of a single ray.

    This is a Python-callable wrapper for testing and debugging. Rendering
    calls intersect_scene directly inside kernels.

    Args:
        origin: The ray origin (x, y, z).
        direction: The ray direction (x, y, z); must be nonzero.
        t_min: Smallest accepted ray parameter (inclusive).
        t_max: Largest accepted ray parameter (inclusive).

    Returns:
        A HitResult for the closest hit, or None if the ray hits nothing
        in [t_min, t_max].
    """
    _query_scene(
        vec3(float(origin[0]), float(origin[1]), float(origin[2])),
        vec3(float(direction[0]), float(direction[1]), float(direction[2])),
        float(t_min),
        float(t_max),
    )
    if _query_hit[None] == 0:
        return None

    point = _query_point[None]
    normal = _query_normal[None]
    return HitResult(
        t=float(_query_t[None]),
        point=(float(point[0]), float(point[1]), float(point[2])),
        normal=(float(normal[0]), float(normal[1]), float(normal[2])),
        front_face=bool(_query_front_face[None]),
    )
