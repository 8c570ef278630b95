"""Mapping between raster pixels and points on the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RasterBounds:
    """Width and height of a pixel raster."""

    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ViewportRect:
    """Region of the complex plane covered by a raster."""

    upper_left: complex
    lower_right: complex


def pixel_to_point(bounds: RasterBounds, pixel: tuple[int, int], upper_left: complex, lower_right: complex) -> complex:
    """Return the point of the complex plane under ``pixel``.

    ``pixel`` is a ``(column, row)`` pair. Corner coordinates one past the last
    pixel (``column == width`` or ``row == height``) are valid and map onto the
    right and bottom edges of the viewport. Rows grow downwards while the
    imaginary part shrinks.
    """

    column, row = pixel
    x_width = lower_right.real - upper_left.real
    y_width = upper_left.imag - lower_right.imag
    return complex(
        upper_left.real + column * x_width / bounds.width,
        upper_left.imag - row * y_width / bounds.height,
    )


def pixel_grid(bounds: RasterBounds, upper_left: complex, lower_right: complex) -> np.ndarray:
    """Map every pixel of ``bounds`` at once.

    Element ``[row, column]`` of the returned ``(height, width)`` array equals
    ``pixel_to_point(bounds, (column, row), upper_left, lower_right)`` bit for
    bit: the arithmetic is carried out in float64 in the same order.
    """

    x_width = np.float64(lower_right.real) - np.float64(upper_left.real)
    y_width = np.float64(upper_left.imag) - np.float64(lower_right.imag)

    columns = np.arange(bounds.width, dtype=np.float64)
    rows = np.arange(bounds.height, dtype=np.float64)
    x = np.float64(upper_left.real) + columns * x_width / np.float64(bounds.width)
    y = np.float64(upper_left.imag) - rows * y_width / np.float64(bounds.height)

    X, Y = np.meshgrid(x, y)
    grid = np.empty(X.shape, dtype=np.complex128)
    grid.real = X
    grid.imag = Y
    return grid
