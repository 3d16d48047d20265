"""Shading: the color seen along a single ray.

A ray that hits the scene is colored by its surface normal, each component
mapped from [-1, 1] to [0, 1]. A ray that misses takes the sky gradient,
blending from white when looking straight down to sky blue when looking
straight up.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.scene.two_spheres import create_two_sphere_scene
    >>> from raycaster.core.shading import sample_ray_color
    >>> scene = create_two_sphere_scene()
    >>> sample_ray_color((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    (0.5, 0.5, 1.0)
"""

import math
from collections.abc import Sequence

import taichi as ti

from raycaster.core.ray import Ray, normalize, vec3
from raycaster.scene.intersection import intersect_scene

# Ray parameter interval for primary rays
T_MIN = 0.0
T_MAX = math.inf

# Sky gradient endpoints
WHITE = vec3(1.0, 1.0, 1.0)
SKY_BLUE = vec3(0.5, 0.7, 1.0)


@ti.func
def normal_color(normal: vec3) -> vec3:
    """Map a unit normal to a visible color in [0, 1]^3."""
    return 0.5 * (normal + vec3(1.0, 1.0, 1.0))


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Background color for a ray direction.

    Linear blend between white (a = 0) and sky blue (a = 1) where
    a = 0.5 * (normalize(direction).y + 1).
    """
    unit_direction = normalize(direction)
    a = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - a) * WHITE + a * SKY_BLUE


@ti.func
def ray_color(ray: Ray) -> vec3:
    """Compute the color seen along a ray.

    Args:
        ray: The primary ray.

    Returns:
        The normal-visualization color of the closest hit in [0, inf], or
        the sky color if the ray hits nothing.
    """
    rec = intersect_scene(ray, T_MIN, T_MAX)
    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        color = normal_color(rec.normal)
    else:
        color = sky_color(ray.direction)
    return color


@ti.kernel
def _ray_color_kernel(origin: vec3, direction: vec3) -> vec3:
    """Shade a single ray."""
    return ray_color(Ray(origin=origin, direction=direction))


def sample_ray_color(
    origin: Sequence[float],
    direction: Sequence[float],
) -> tuple[float, float, float]:
    """Compute the color of a single ray against the current scene.

    This is a Python-callable function for testing. For rendering, use the
    ScanlineRenderer which shades whole rows inside kernels.

    Args:
        origin: The ray origin (x, y, z).
        direction: The ray direction (x, y, z); must be nonzero.

    Returns:
        Tuple of (R, G, B) color values.
    """
    color = _ray_color_kernel(
        vec3(float(origin[0]), float(origin[1]), float(origin[2])),
        vec3(float(direction[0]), float(direction[1]), float(direction[2])),
    )
    return (float(color[0]), float(color[1]), float(color[2]))
