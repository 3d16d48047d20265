"""Output module for rendered images.

Components:
    ppm: Plain-text P3 pixel map writer

Example:
    >>> from raycaster.output import write_ppm
    >>> write_ppm(image, sys.stdout)
"""

from raycaster.output.ppm import (
    COLOR_SCALE,
    MAX_COLOR_VALUE,
    color_to_rgb8,
    format_ppm_header,
    format_ppm_pixels,
    image_to_rgb8,
    save_ppm,
    write_ppm,
)

__all__ = [
    "write_ppm",
    "save_ppm",
    "format_ppm_header",
    "format_ppm_pixels",
    "color_to_rgb8",
    "image_to_rgb8",
    "COLOR_SCALE",
    "MAX_COLOR_VALUE",
]
