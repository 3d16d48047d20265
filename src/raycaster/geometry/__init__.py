"""Geometry module for hit records and shape primitives.

Components:
    hittable: HitRecord, HittableKind and the front-face normal rule
    sphere: Sphere primitive with ray-sphere intersection

All intersection routines are Taichi functions (@ti.func) that return a
HitRecord:
    rec = hit_sphere(ray, sphere, t_min, t_max)
"""

from .hittable import HitRecord, HittableKind, make_hit_record, make_miss_record
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "HittableKind",
    "make_hit_record",
    "make_miss_record",
    "Sphere",
    "hit_sphere",
    "make_sphere",
]
