"""Scene module for scene storage and ray-scene queries.

Components:
    intersection: Taichi-field primitive storage and nearest-hit queries
    manager: Python-side scene owner tracking the added primitives
    two_spheres: The default two-sphere scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for each primitive kind
    - An ordered primitive list of (kind, index) pairs
"""

from .intersection import (
    MAX_PRIMITIVES,
    MAX_SPHERES,
    HitResult,
    add_sphere,
    clear_scene,
    get_primitive_count,
    get_sphere_count,
    hit_scene,
    intersect_scene,
)
from .manager import SceneManager, SphereInfo
from .two_spheres import (
    CENTER_SPHERE_CENTER,
    CENTER_SPHERE_RADIUS,
    GROUND_SPHERE_CENTER,
    GROUND_SPHERE_RADIUS,
    create_two_sphere_scene,
)

__all__ = [
    # Intersection module
    "HitResult",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "get_primitive_count",
    "hit_scene",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_PRIMITIVES",
    # Manager module
    "SceneManager",
    "SphereInfo",
    # Two-sphere scene
    "create_two_sphere_scene",
    "CENTER_SPHERE_CENTER",
    "CENTER_SPHERE_RADIUS",
    "GROUND_SPHERE_CENTER",
    "GROUND_SPHERE_RADIUS",
]
