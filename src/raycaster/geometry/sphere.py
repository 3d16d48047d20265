"""Sphere primitive with ray-sphere intersection.

The intersection solves |O + tD - C|^2 = r^2 using the half-b form of the
quadratic formula. The ray direction does not need to be normalized: the
coefficient a = dot(D, D) absorbs its length, so the returned t is always a
parameter of the ray as given.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from raycaster.core.ray import Ray, dot, length_squared, ray_at, vec3
from raycaster.geometry.hittable import HitRecord, make_hit_record, make_miss_record


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f64


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f64, t_max: ti.f64) -> HitRecord:
    """Test for ray-sphere intersection within [t_min, t_max].

    Expanding |origin + t * direction - center|^2 = radius^2 gives

        a*t^2 + 2*h*t + c = 0

    where:
        oc = origin - center
        a = dot(direction, direction)
        h = dot(oc, direction)  (half of the traditional b)
        c = dot(oc, oc) - radius^2

    The nearer root (-h - sqrt(h^2 - ac)) / a is tried first; if it falls
    outside [t_min, t_max] the farther root is used instead, so a ray that
    starts inside the sphere reports its exit point.

    A zero-length direction makes a == 0. The roots are then NaN, every
    range comparison fails and the result is a miss. Callers must not rely
    on this; degenerate directions are outside the contract.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.
        t_min: Smallest accepted ray parameter (inclusive).
        t_max: Largest accepted ray parameter (inclusive).

    Returns:
        A HitRecord for the nearest intersection in range. Check the hit
        field to determine whether an intersection occurred.
    """
    oc = ray.origin - sphere.center
    a = length_squared(ray.direction)
    half_b = dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    result = make_miss_record()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        root = (-half_b - sqrt_d) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_d) / a

        if root >= t_min and root <= t_max:
            point = ray_at(ray, root)
            # |point - center| == radius, so this is unit length
            outward_normal = (point - sphere.center) / sphere.radius
            result = make_hit_record(ray, root, point, outward_normal)

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f64) -> Sphere:
    """Create a sphere from center and radius inside a Taichi kernel."""
    return Sphere(center=center, radius=radius)
