"""Scanline render driver.

Renders the image one row at a time, top row first. Each row is one kernel
launch that shades pixels left to right into a preallocated scanline
buffer; the row is then copied into a row-major NumPy image. Rendering row
by row keeps the output order fixed and lets callers report progress per
scanline.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.camera.viewport import ViewportConfig, compute_viewport
    >>> from raycaster.core.renderer import ScanlineRenderer
    >>> from raycaster.scene.two_spheres import create_two_sphere_scene
    >>>
    >>> scene = create_two_sphere_scene()
    >>> renderer = ScanlineRenderer(compute_viewport(ViewportConfig()))
    >>> renderer.render()
    >>> image = renderer.get_image_numpy()  # shape (225, 400, 3)
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt
import taichi as ti

from raycaster.camera.viewport import ViewportGeometry, get_pixel_ray, setup_viewport
from raycaster.core.shading import ray_color

# Type alias for progress callback
# Callback receives (remaining_scanlines, total_scanlines) after each row
ProgressCallback = Callable[[int, int], None]

# Maximum supported image width (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 4096

# One row of shaded pixels
_scanline = ti.Vector.field(3, dtype=ti.f64, shape=MAX_IMAGE_WIDTH)


@ti.kernel
def _render_scanline(j: ti.i32, width: ti.i32):
    """Shade every pixel of row j into the scanline buffer.

    Args:
        j: Row index (0 = top).
        width: Image width in pixels.
    """
    ti.loop_config(serialize=True)
    for i in range(width):
        _scanline[i] = ray_color(get_pixel_ray(i, j))


class ScanlineRenderer:
    """A renderer that shades the image one scanline at a time.

    The renderer uploads its viewport on construction and renders whatever
    scene is currently stored. The scene must not change while rendering.

    Attributes:
        geometry: The viewport geometry being rendered.
    """

    def __init__(self, geometry: ViewportGeometry) -> None:
        """Initialize the renderer.

        Args:
            geometry: The viewport to render through.

        Raises:
            ValueError: If the image width exceeds MAX_IMAGE_WIDTH.
        """
        if geometry.image_width > MAX_IMAGE_WIDTH:
            raise ValueError(
                f"Image width ({geometry.image_width}) exceeds maximum supported "
                f"({MAX_IMAGE_WIDTH})"
            )
        self.geometry = geometry
        self._image = np.zeros((geometry.image_height, geometry.image_width, 3), dtype=np.float64)
        self._rows_done = 0
        setup_viewport(geometry)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.geometry.image_width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.geometry.image_height

    @property
    def rows_done(self) -> int:
        """Number of scanlines rendered by the last render."""
        return self._rows_done

    def _render_row(self, j: int) -> npt.NDArray[np.float64]:
        """Render row j into the image and return it."""
        _render_scanline(j, self.width)
        row = _scanline.to_numpy()[: self.width]
        self._image[j] = row
        self._rows_done = j + 1
        return row

    def render_scanlines(self) -> Generator[tuple[int, npt.NDArray[np.float64]], None, None]:
        """Render rows top to bottom, yielding each finished row.

        This is a generator-based alternative to render() with callbacks.

        Yields:
            Tuple of (row_index, row) where row has shape (width, 3).
        """
        self._rows_done = 0
        for j in range(self.height):
            yield j, self._render_row(j)

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render the full image.

        Args:
            callback: Optional callback called after each row with
                (remaining_scanlines, total_scanlines), where remaining
                counts rows not yet rendered and reaches 0 on the last row.

        Example:
            >>> def progress(remaining, total):
            ...     print(f"Scanlines remaining: {remaining}")
            >>> renderer.render(callback=progress)
        """
        self._rows_done = 0
        for j in range(self.height):
            self._render_row(j)
            if callback is not None:
                callback(self.height - j - 1, self.height)

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Get the rendered image as a NumPy array.

        Returns:
            Array of shape (height, width, 3), row 0 at the top, with
            unclamped linear colors.
        """
        return self._image.copy()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return f"ScanlineRenderer(width={self.width}, height={self.height})"
