"""Hit records and the hittable protocol.

Every shape that can be hit by a ray provides a Taichi function of the form

    hit_<kind>(ray, shape, t_min, t_max) -> HitRecord

and the scene provides ``intersect_scene(ray, t_min, t_max) -> HitRecord``
with the same contract:

- ``hit == 1`` iff the ray meets the shape at some t in the closed interval
  [t_min, t_max];
- the record then describes the smallest such t;
- the stored normal is unit length and always opposes the incoming ray.

A record with ``hit == 0`` is the "no intersection" value; its other fields
carry no meaning. Shapes are a closed set of kinds (see HittableKind) that
the scene dispatches on; adding a primitive means adding a kind, a
``hit_<kind>`` function and a branch in the scene's dispatch.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, vec3


class HittableKind(IntEnum):
    """Enumeration of primitive kinds stored in a scene.

    Used by the scene's intersection routine to dispatch to the matching
    ``hit_<kind>`` function.
    """

    SPHERE = 0


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: Whether the ray intersected the primitive (1 if hit, 0 if miss).
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: The unit surface normal, oriented against the ray direction.
            Only valid if hit == 1.
        front_face: 1 if the ray hit the outside of the surface, 0 if it hit
            from the inside. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f64
    point: vec3
    normal: vec3
    front_face: ti.i32


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
    )


@ti.func
def make_hit_record(ray: Ray, t: ti.f64, point: vec3, outward_normal: vec3) -> HitRecord:
    """Create a HitRecord with a front-facing normal.

    The front face is the side the outward normal points to. When the ray
    travels along the outward normal it is leaving the surface, so the
    stored normal is flipped to keep it opposed to the ray.

    Args:
        ray: The incoming ray.
        t: The ray parameter of the intersection.
        point: The intersection point.
        outward_normal: The unit normal pointing out of the surface.

    Returns:
        A HitRecord with hit == 1.
    """
    front_face = 0
    normal = -outward_normal
    if tm.dot(ray.direction, outward_normal) < 0.0:
        front_face = 1
        normal = outward_normal

    return HitRecord(
        hit=1,
        t=t,
        point=point,
        normal=normal,
        front_face=front_face,
    )
