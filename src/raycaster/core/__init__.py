"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    ray: Ray data structure and vector utilities
    shading: The ray_color shading function (normal visualization and sky)
    renderer: Scanline render driver producing a row-major image

Note: shading and renderer are NOT imported here because they declare
Taichi fields through the scene and camera modules. Import them directly
from raycaster.core.shading or raycaster.core.renderer after ti.init().
"""

from .ray import (
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
]
