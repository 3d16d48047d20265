"""Plain-text PPM (P3) export for rendered images.

The pixel map format is:

    P3
    <width> <height>
    255
    <R> <G> <B>      (one line per pixel, row-major, top row first)

Each channel is quantized as floor(255.999 * c) after clamping c to
[0, 1], which maps 1.0 to 255 without a separate rounding step.

Example:
    >>> import sys
    >>> from raycaster.output.ppm import write_ppm
    >>> write_ppm(renderer.get_image_numpy(), sys.stdout)
"""

from collections.abc import Sequence
from typing import TextIO

import numpy as np
import numpy.typing as npt

# Largest channel value in the output
MAX_COLOR_VALUE = 255

# Scale applied before flooring a [0, 1] channel
COLOR_SCALE = 255.999


def color_to_rgb8(color: Sequence[float]) -> tuple[int, int, int]:
    """Quantize one linear color to 8-bit channels.

    Args:
        color: The (R, G, B) color. Out-of-range channels are clamped to
            [0, 1] first; NaN is treated as 0.

    Returns:
        Tuple of (R, G, B) integers in [0, 255].
    """
    r, g, b = image_to_rgb8(np.asarray(color, dtype=np.float64)).tolist()
    return r, g, b


def image_to_rgb8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.int64]:
    """Quantize a linear image to 8-bit channels.

    NaN channels quantize to 0 and infinities saturate.

    Args:
        image: Linear image array of any shape ending in 3 channels.

    Returns:
        Integer array of the same shape with values in [0, 255].
    """
    finite = np.nan_to_num(image.astype(np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    clamped = np.clip(finite, 0.0, 1.0)
    return np.floor(COLOR_SCALE * clamped).astype(np.int64)


def format_ppm_header(width: int, height: int) -> str:
    """Format the three header lines of a P3 pixel map."""
    return f"P3\n{width} {height}\n{MAX_COLOR_VALUE}\n"


def format_ppm_pixels(rgb: npt.NDArray[np.integer]) -> str:
    """Format quantized pixels as one "R G B" line each, row-major.

    Args:
        rgb: Integer array of shape (H, W, 3) or (W, 3).

    Returns:
        The pixel lines, each terminated by a newline.
    """
    pixels = rgb.reshape(-1, 3)
    return "".join(f"{r} {g} {b}\n" for r, g, b in pixels.tolist())


def write_ppm(image: npt.NDArray[np.floating], stream: TextIO) -> None:
    """Write a linear image to a text stream as a P3 pixel map.

    Args:
        image: Linear image array of shape (H, W, 3), row 0 at the top.
        stream: Destination text stream (e.g. sys.stdout).

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must have shape (H, W, 3), got {image.shape}")

    height, width = image.shape[:2]
    stream.write(format_ppm_header(width, height))
    stream.write(format_ppm_pixels(image_to_rgb8(image)))


def save_ppm(image: npt.NDArray[np.floating], filepath: str) -> None:
    """Save a linear image as a P3 pixel map file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .ppm).
    """
    with open(filepath, "w", encoding="ascii") as f:
        write_ppm(image, f)
