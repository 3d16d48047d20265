"""Camera module for viewport geometry and ray generation.

Components:
    viewport: Pinhole camera viewport setup and per-pixel rays

Pixel coordinates are integer (i, j) with i growing left to right and j
growing top to bottom; every ray passes through a pixel center.
"""

from .viewport import (
    ASPECT_RATIO,
    CAMERA_CENTER,
    FOCAL_LENGTH,
    IMAGE_WIDTH,
    VIEWPORT_HEIGHT,
    ViewportConfig,
    ViewportGeometry,
    compute_image_height,
    compute_viewport,
    get_pixel_ray,
    get_viewport_info,
    setup_viewport,
)

__all__ = [
    "ViewportConfig",
    "ViewportGeometry",
    "compute_image_height",
    "compute_viewport",
    "setup_viewport",
    "get_pixel_ray",
    "get_viewport_info",
    "ASPECT_RATIO",
    "IMAGE_WIDTH",
    "VIEWPORT_HEIGHT",
    "FOCAL_LENGTH",
    "CAMERA_CENTER",
]
