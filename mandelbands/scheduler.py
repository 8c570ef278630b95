"""Fork-join rendering of a full raster across worker threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .bands import Band, partition, split_buffer
from .geometry import RasterBounds
from .renderer import check_buffer, render


def render_bands(pixels: np.ndarray, bounds: RasterBounds, bands: list[Band], *, backend: str = "python") -> None:
    """Render every band into its own slice of ``pixels`` on a thread pool.

    One task is submitted per band and the call returns only after all of them
    finished. If any task failed, the error of the topmost failing band is
    raised; ``pixels`` must then be considered garbage.
    """

    check_buffer(pixels, bounds)
    regions = split_buffer(pixels, bands, bounds.width)

    with ThreadPoolExecutor(max_workers=max(len(bands), 1)) as executor:
        futures = [
            executor.submit(
                render,
                region,
                band.sub_bounds,
                band.sub_viewport.upper_left,
                band.sub_viewport.lower_right,
                backend=backend,
            )
            for band, region in zip(bands, regions)
        ]

    for future in futures:
        future.result()


def render_full(
    bounds: RasterBounds,
    upper_left: complex,
    lower_right: complex,
    worker_count: int,
    *,
    backend: str = "python",
) -> np.ndarray:
    """Render the viewport into a new flat ``uint8`` buffer of ``bounds.size`` pixels.

    The raster is cut into ``worker_count`` horizontal bands, each rendered by
    its own thread straight into a disjoint view of the result. The bytes do
    not depend on ``worker_count``.
    """

    pixels = np.zeros(bounds.size, dtype=np.uint8)
    bands = partition(bounds, upper_left, lower_right, worker_count)
    render_bands(pixels, bounds, bands, backend=backend)
    return pixels
