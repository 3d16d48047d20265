"""Two-sphere scene configuration.

The default scene: a small sphere straight ahead of the camera resting on a
very large "ground" sphere whose top surface sits just below it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.scene.two_spheres import create_two_sphere_scene
    >>> scene = create_two_sphere_scene()
    >>> scene.get_sphere_count()
    2
"""

from raycaster.scene.manager import SceneManager

# Sphere one unit in front of the camera
CENTER_SPHERE_CENTER = (0.0, 0.0, -1.0)
CENTER_SPHERE_RADIUS = 0.5

# Ground: top of the sphere is at y = -0.5
GROUND_SPHERE_CENTER = (0.0, -100.5, -1.0)
GROUND_SPHERE_RADIUS = 100.0


def create_two_sphere_scene() -> SceneManager:
    """Create the default scene with a center sphere and a ground sphere.

    Returns:
        A SceneManager holding the center sphere followed by the ground
        sphere.
    """
    scene = SceneManager()
    scene.add_sphere(CENTER_SPHERE_CENTER, CENTER_SPHERE_RADIUS)
    scene.add_sphere(GROUND_SPHERE_CENTER, GROUND_SPHERE_RADIUS)
    return scene
