"""Pinhole camera viewport geometry and per-pixel ray generation.

The camera sits at ``camera_center`` looking down -z. The viewport is a
rectangle ``focal_length`` in front of it, ``viewport_height`` tall and as
wide as the image's actual (integer) aspect ratio allows. Pixel centers are
laid out on that rectangle starting at the top-left pixel:

    pixel_center(i, j) = pixel00_loc + i * pixel_delta_u + j * pixel_delta_v

where i is the column and j the row. ``viewport_v`` points down (-y) because
row indices grow downward while world y grows upward.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raycaster.camera.viewport import ViewportConfig, compute_viewport, setup_viewport
    >>> geometry = compute_viewport(ViewportConfig(image_width=400))
    >>> geometry.image_height
    225
    >>> setup_viewport(geometry)
    >>> # Use get_pixel_ray(i, j) within a Taichi kernel
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from raycaster.core.ray import Ray, make_ray

# =============================================================================
# Fixed Camera Constants
# =============================================================================

ASPECT_RATIO = 16.0 / 9.0
IMAGE_WIDTH = 400
VIEWPORT_HEIGHT = 2.0
FOCAL_LENGTH = 1.0
CAMERA_CENTER = (0.0, 0.0, 0.0)


# =============================================================================
# Viewport Data Structures
# =============================================================================


@dataclass
class ViewportConfig:
    """Configuration for the pinhole camera and its image.

    Attributes:
        image_width: Image width in pixels (at least 1).
        aspect_ratio: Nominal width / height ratio of the image.
        viewport_height: Height of the viewport rectangle in world units.
        focal_length: Distance from the camera center to the viewport.
        camera_center: Camera position in world space (x, y, z).
    """

    image_width: int = IMAGE_WIDTH
    aspect_ratio: float = ASPECT_RATIO
    viewport_height: float = VIEWPORT_HEIGHT
    focal_length: float = FOCAL_LENGTH
    camera_center: tuple[float, float, float] = CAMERA_CENTER


@dataclass
class ViewportGeometry:
    """Derived pixel-grid geometry of a viewport.

    Attributes:
        image_width: Image width in pixels.
        image_height: Image height in pixels (derived, at least 1).
        camera_center: Camera position.
        viewport_u: Vector across the full viewport width (left to right).
        viewport_v: Vector down the full viewport height (top to bottom).
        pixel_delta_u: Horizontal step between pixel centers.
        pixel_delta_v: Vertical step between pixel centers.
        viewport_upper_left: World position of the viewport's top-left corner.
        pixel00_loc: World position of the center of pixel (0, 0).
    """

    image_width: int
    image_height: int
    camera_center: npt.NDArray[np.float64]
    viewport_u: npt.NDArray[np.float64]
    viewport_v: npt.NDArray[np.float64]
    pixel_delta_u: npt.NDArray[np.float64]
    pixel_delta_v: npt.NDArray[np.float64]
    viewport_upper_left: npt.NDArray[np.float64]
    pixel00_loc: npt.NDArray[np.float64]

    def pixel_center(self, i: int, j: int) -> npt.NDArray[np.float64]:
        """World position of the center of pixel (i=column, j=row)."""
        return self.pixel00_loc + i * self.pixel_delta_u + j * self.pixel_delta_v


def compute_image_height(image_width: int, aspect_ratio: float) -> int:
    """Derive the image height from width and aspect ratio, clamped to 1.

    Raises:
        ValueError: If image_width is below 1 or aspect_ratio is not positive.
    """
    if image_width < 1:
        raise ValueError(f"Image width must be at least 1, got {image_width}")
    if not aspect_ratio > 0.0:
        raise ValueError(f"Aspect ratio must be positive, got {aspect_ratio}")
    return max(1, round(image_width / aspect_ratio))


def compute_viewport(config: ViewportConfig) -> ViewportGeometry:
    """Compute the viewport geometry for a camera configuration.

    The viewport width uses the rounded integer image height, so the real
    aspect ratio of the viewport can differ slightly from the nominal one.

    Args:
        config: Camera and image parameters.

    Returns:
        The derived ViewportGeometry.

    Raises:
        ValueError: If the image width or aspect ratio is invalid.
    """
    image_width = config.image_width
    image_height = compute_image_height(image_width, config.aspect_ratio)

    viewport_height = config.viewport_height
    viewport_width = viewport_height * (image_width / image_height)
    camera_center = np.array(config.camera_center, dtype=np.float64)

    # Vectors across the horizontal and down the vertical viewport edges
    viewport_u = np.array([viewport_width, 0.0, 0.0], dtype=np.float64)
    viewport_v = np.array([0.0, -viewport_height, 0.0], dtype=np.float64)

    pixel_delta_u = viewport_u / image_width
    pixel_delta_v = viewport_v / image_height

    viewport_upper_left = (
        camera_center
        - np.array([0.0, 0.0, config.focal_length], dtype=np.float64)
        - viewport_u / 2.0
        - viewport_v / 2.0
    )
    pixel00_loc = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

    return ViewportGeometry(
        image_width=image_width,
        image_height=image_height,
        camera_center=camera_center,
        viewport_u=viewport_u,
        viewport_v=viewport_v,
        pixel_delta_u=pixel_delta_u,
        pixel_delta_v=pixel_delta_v,
        viewport_upper_left=viewport_upper_left,
        pixel00_loc=pixel00_loc,
    )


# =============================================================================
# Taichi Fields for Viewport State
# =============================================================================

_camera_center = ti.Vector.field(3, dtype=ti.f64, shape=())
_pixel00_loc = ti.Vector.field(3, dtype=ti.f64, shape=())
_pixel_delta_u = ti.Vector.field(3, dtype=ti.f64, shape=())
_pixel_delta_v = ti.Vector.field(3, dtype=ti.f64, shape=())


def setup_viewport(geometry: ViewportGeometry) -> None:
    """Upload viewport geometry so kernels can generate pixel rays.

    This must be called from Python (not from within a Taichi kernel)
    before rendering.
    """
    _camera_center[None] = geometry.camera_center.tolist()
    _pixel00_loc[None] = geometry.pixel00_loc.tolist()
    _pixel_delta_u[None] = geometry.pixel_delta_u.tolist()
    _pixel_delta_v[None] = geometry.pixel_delta_v.tolist()


@ti.func
def get_pixel_ray(i: ti.i32, j: ti.i32) -> Ray:
    """Generate the ray through the center of pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).

    Returns:
        A Ray from the camera center through the pixel center. The
        direction is not normalized.
    """
    pixel_center = (
        _pixel00_loc[None]
        + ti.cast(i, ti.f64) * _pixel_delta_u[None]
        + ti.cast(j, ti.f64) * _pixel_delta_v[None]
    )
    origin = _camera_center[None]
    return make_ray(origin, pixel_center - origin)


def get_viewport_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded viewport state for debugging.

    Returns:
        Dictionary with camera_center, pixel00_loc, pixel_delta_u and
        pixel_delta_v as (x, y, z) tuples.
    """
    fields = {
        "camera_center": _camera_center,
        "pixel00_loc": _pixel00_loc,
        "pixel_delta_u": _pixel_delta_u,
        "pixel_delta_v": _pixel_delta_v,
    }
    info = {}
    for name, vector_field in fields.items():
        v = vector_field[None]
        info[name] = (float(v[0]), float(v[1]), float(v[2]))
    return info
