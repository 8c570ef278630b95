"""Partitioning of a raster into horizontal work bands."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .geometry import RasterBounds, ViewportRect, pixel_to_point


@dataclass(frozen=True)
class Band:
    """A contiguous run of raster rows together with the viewport it covers."""

    start_row: int
    row_count: int
    sub_bounds: RasterBounds
    sub_viewport: ViewportRect

    @property
    def stop_row(self) -> int:
        return self.start_row + self.row_count

    def byte_range(self, width: int) -> tuple[int, int]:
        return self.start_row * width, self.stop_row * width


def rows_per_band(height: int, worker_count: int) -> int:
    # Rounds up by at least one row so that the bands always cover the raster.
    return height // worker_count + 1


def partition(bounds: RasterBounds, upper_left: complex, lower_right: complex, worker_count: int) -> list[Band]:
    """Split ``bounds`` into ``worker_count`` bands ordered top to bottom.

    Every band is as tall as :func:`rows_per_band`, except the trailing ones,
    which are shorter or empty once the raster runs out of rows. Band corners
    are mapped against the full raster so that rendering the bands one after
    another reproduces a render of the whole viewport.
    """

    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")
    if bounds.width <= 0 or bounds.height <= 0:
        raise ValueError(f"cannot partition an empty raster {bounds.width}x{bounds.height}")

    step = rows_per_band(bounds.height, worker_count)
    bands = []
    for index in range(worker_count):
        top = min(index * step, bounds.height)
        count = min(step, bounds.height - top)
        band_upper_left = pixel_to_point(bounds, (0, top), upper_left, lower_right)
        band_lower_right = pixel_to_point(bounds, (bounds.width, top + count), upper_left, lower_right)
        bands.append(
            Band(
                start_row=top,
                row_count=count,
                sub_bounds=RasterBounds(bounds.width, count),
                sub_viewport=ViewportRect(band_upper_left, band_lower_right),
            )
        )
    return bands


def split_buffer(pixels: np.ndarray, bands: list[Band], width: int) -> list[np.ndarray]:
    """Lend out one disjoint view of ``pixels`` per band.

    The views share memory with ``pixels``; writing through view ``i`` fills
    exactly the rows of ``bands[i]``. Raises ``ValueError`` unless the bands
    tile the buffer without gaps or overlaps.
    """

    expected = 0
    regions = []
    for band in bands:
        start, stop = band.byte_range(width)
        if start != expected:
            raise ValueError(f"band starting at row {band.start_row} does not follow the previous band")
        regions.append(pixels[start:stop])
        expected = stop
    if expected != pixels.shape[0]:
        raise ValueError(f"bands cover {expected} bytes of a {pixels.shape[0]} byte buffer")
    return regions
