"""Scene manager owning the primitives of a render.

The SceneManager is the Python-side owner of the scene: it adds primitives
to the Taichi storage in ``raycaster.scene.intersection`` and keeps a record
of each one so the scene can be inspected. The scene is built once before rendering and is read-only while kernels run.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5)
    >>> scene.add_sphere(center=(0, -100.5, -1), radius=100.0)
    >>> scene.hit((0, 0, 0), (0, 0, -1)).t
    0.5
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycaster.scene.intersection import (
    HitResult,
    add_sphere,
    clear_scene,
    get_primitive_count,
    get_sphere_count,
    hit_scene,
)


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        primitive_index: The position of the sphere in the scene's ordered
            primitive list.
        center: The center of the sphere.
        radius: The radius of the sphere.
    """

    sphere_index: int
    primitive_index: int
    center: tuple[float, float, float]
    radius: float


class SceneManager:
    """Owner of an ordered list of scene primitives.

    Only one scene is active at a time because primitive storage lives in
    module-level Taichi fields; creating a SceneManager clears it.

    Attributes:
        spheres: List of SphereInfo for all spheres in the scene, in the
            order they were added.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self.clear()

    def clear(self) -> None:
        """Remove every primitive from the scene."""
        clear_scene()
        self.spheres.clear()

    def add_sphere(self, center: Sequence[float], radius: float) -> int:
        """Add a sphere to the end of the scene.

        Args:
            center: The center of the sphere as (x, y, z).
            radius: The radius of the sphere.

        Returns:
            The index of the sphere in the sphere storage.

        Raises:
            ValueError: If the radius is not positive.
            RuntimeError: If the scene storage is full.
        """
        primitive_index = get_primitive_count()
        sphere_index = add_sphere(center, radius)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                primitive_index=primitive_index,
                center=(float(center[0]), float(center[1]), float(center[2])),
                radius=float(radius),
            )
        )
        return sphere_index

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_primitive_count(self) -> int:
        """Get the number of primitives of any kind in the scene."""
        return get_primitive_count()

    def hit(
        self,
        origin: Sequence[float],
        direction: Sequence[float],
        t_min: float = 0.0,
        t_max: float = math.inf,
    ) -> HitResult | None:
        """Find the closest intersection of a ray with the scene.

        Returns:
            A HitResult for the closest hit in [t_min, t_max], or None.
        """
        return hit_scene(origin, direction, t_min, t_max)

    def __repr__(self) -> str:
        """Return a string representation of the scene."""
        return f"SceneManager(spheres={len(self.spheres)})"
