"""Render the two-sphere scene to standard output as a P3 pixel map.

Usage:
    python -m raycaster > image.ppm

The image data goes to stdout; viewport vectors, per-scanline progress and
the completion message go to stderr. All parameters are the fixed defaults
of ViewportConfig.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

import numpy as np
import taichi as ti

if TYPE_CHECKING:
    from raycaster.camera.viewport import ViewportConfig


def format_vector(v: np.ndarray) -> str:
    """Format a 3-vector as "x y z"."""
    return f"{v[0]} {v[1]} {v[2]}"


def render_two_spheres(
    config: ViewportConfig | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    quiet: bool = False,
) -> None:
    """Render the two-sphere scene and stream the pixel map.

    Taichi must already be initialized.

    Args:
        config: Optional ViewportConfig. If None, uses ViewportConfig().
        out: Stream receiving the P3 pixel map. Defaults to sys.stdout.
        err: Stream receiving diagnostics and progress. Defaults to
            sys.stderr.
        quiet: If True, suppress diagnostics and progress.
    """
    # Lazy imports so Taichi fields are declared after ti.init()
    from raycaster.camera.viewport import ViewportConfig, compute_viewport
    from raycaster.core.renderer import ScanlineRenderer
    from raycaster.output.ppm import format_ppm_header, format_ppm_pixels, image_to_rgb8
    from raycaster.scene.two_spheres import create_two_sphere_scene

    if config is None:
        config = ViewportConfig()
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr

    create_two_sphere_scene()
    geometry = compute_viewport(config)

    if not quiet:
        for v in (
            geometry.viewport_u,
            geometry.viewport_v,
            geometry.pixel_delta_u,
            geometry.pixel_delta_v,
        ):
            print(format_vector(v), file=err)

    renderer = ScanlineRenderer(geometry)
    out.write(format_ppm_header(geometry.image_width, geometry.image_height))

    for j, row in renderer.render_scanlines():
        if not quiet:
            print(f"\rScanlines remaining: {geometry.image_height - j - 1}", end="", file=err, flush=True)
        out.write(format_ppm_pixels(image_to_rgb8(row)))

    if not quiet:
        print("\nDone.", file=err)


def main() -> int:
    """Main entry point."""
    ti.init(arch=ti.cpu, default_fp=ti.f64)

    try:
        render_two_spheres()
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
