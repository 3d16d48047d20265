"""Taichi-based pinhole ray caster.

This package casts one ray per pixel through a pinhole camera into a scene
of spheres and writes the result as a plain-text PPM image:
- Ray/sphere intersection with front-facing normals
- Nearest-hit scene queries over an ordered list of primitives
- Normal-visualization shading with a sky gradient background
- Scanline rendering to a P3 pixel map

Subpackages:
    core: Ray type, vector utilities, shading and the render driver
    geometry: Hit records, the hittable protocol and the sphere primitive
    scene: Scene storage, nearest-hit queries and scene factories
    camera: Viewport geometry and per-pixel ray generation
    output: PPM (P3) pixel map writer
"""

__version__ = "0.1.0"
