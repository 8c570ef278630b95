"""Public API for banded Mandelbrot rendering."""

from .bands import Band, partition, rows_per_band, split_buffer
from .escape import ESCAPE_LIMIT, escape_counts, escape_time
from .geometry import RasterBounds, ViewportRect, pixel_grid, pixel_to_point
from .output import to_image, write_image
from .parsing import parse_bounds, parse_complex, parse_pair
from .renderer import BACKENDS, BufferSizeError, render
from .scheduler import render_bands, render_full

__all__ = [
    "BACKENDS",
    "Band",
    "BufferSizeError",
    "ESCAPE_LIMIT",
    "RasterBounds",
    "ViewportRect",
    "escape_counts",
    "escape_time",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "partition",
    "pixel_grid",
    "pixel_to_point",
    "render",
    "render_bands",
    "render_full",
    "rows_per_band",
    "split_buffer",
    "to_image",
    "write_image",
]
