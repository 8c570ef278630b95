"""Encoding of finished pixel buffers as grayscale image files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import PIL.Image

from .geometry import RasterBounds
from .renderer import check_buffer


def _pil_format_name(ext: str) -> str:
    upper = ext.upper().lstrip(".")
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def to_image(pixels: np.ndarray, bounds: RasterBounds) -> PIL.Image.Image:
    """Wrap a flat row-major buffer as an 8-bit grayscale image."""

    check_buffer(pixels, bounds)
    raster = np.asarray(pixels, dtype=np.uint8).reshape(bounds.height, bounds.width)
    return PIL.Image.fromarray(raster)


def write_image(pixels: np.ndarray, bounds: RasterBounds, path: Path, image_format: Optional[str] = None) -> Path:
    """Write ``pixels`` to ``path`` as a single-channel 8-bit image.

    The format comes from ``image_format`` when given, otherwise from the
    suffix of ``path``, falling back to PNG.
    """

    path = Path(path)
    pil_format = _pil_format_name(image_format or path.suffix or "png")
    PIL.Image.init()
    if pil_format not in PIL.Image.SAVE:
        raise ValueError(f"unsupported image format {pil_format!r}")
    to_image(pixels, bounds).save(str(path), format=pil_format)
    return path
