"""Rendering of a single band of the Mandelbrot set into a grayscale buffer."""

from __future__ import annotations

import numpy as np

from .escape import ESCAPE_LIMIT, escape_counts, escape_time
from .geometry import RasterBounds, pixel_grid, pixel_to_point

BACKENDS = ("python", "tensorflow")


class BufferSizeError(ValueError):
    """Raised when a pixel buffer does not match the raster it should hold."""


def check_buffer(pixels: np.ndarray, bounds: RasterBounds) -> None:
    if len(pixels) != bounds.size:
        raise BufferSizeError(
            f"buffer holds {len(pixels)} pixels but a {bounds.width}x{bounds.height} raster needs {bounds.size}"
        )


def shade(count) -> int:
    """Grayscale value for an escape count: black inside, brighter for fast escapes."""

    if count is None:
        return 0
    return 255 - count


def _render_python(pixels: np.ndarray, bounds: RasterBounds, upper_left: complex, lower_right: complex) -> None:
    for row in range(bounds.height):
        for column in range(bounds.width):
            point = pixel_to_point(bounds, (column, row), upper_left, lower_right)
            pixels[row * bounds.width + column] = shade(escape_time(point, ESCAPE_LIMIT))


def _render_tensorflow(pixels: np.ndarray, bounds: RasterBounds, upper_left: complex, lower_right: complex) -> None:
    counts = escape_counts(pixel_grid(bounds, upper_left, lower_right), ESCAPE_LIMIT)
    shaded = np.where(counts < 0, 0, 255 - counts)
    pixels[:] = shaded.reshape(-1).astype(np.uint8)


def render(
    pixels: np.ndarray,
    bounds: RasterBounds,
    upper_left: complex,
    lower_right: complex,
    *,
    backend: str = "python",
) -> None:
    """Render the rectangle between ``upper_left`` and ``lower_right`` into ``pixels``.

    ``pixels`` is a flat row-major ``uint8`` buffer holding exactly
    ``bounds.width * bounds.height`` grayscale values; it is written in place
    and nothing outside it is touched. ``backend`` selects the per-pixel
    Python loop or the vectorised TensorFlow loop, which produce identical
    bytes.
    """

    if backend not in BACKENDS:
        raise ValueError(f"unknown backend {backend!r}; choose one of {', '.join(BACKENDS)}")
    check_buffer(pixels, bounds)
    if bounds.size == 0:
        return

    if backend == "tensorflow":
        _render_tensorflow(pixels, bounds, upper_left, lower_right)
    else:
        _render_python(pixels, bounds, upper_left, lower_right)
