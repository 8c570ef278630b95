"""Parsing of the textual pixel-size and coordinate tokens."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .geometry import RasterBounds

T = TypeVar("T")


def parse_pair(text: str, separator: str, cast: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Parse ``text`` of the form ``<left><separator><right>``, e.g. ``"400x600"``.

    The text is split at the first ``separator``; both halves go through
    ``cast``. Returns ``None`` if the separator is missing or either half does
    not convert.
    """

    index = text.find(separator)
    if index < 0:
        return None
    try:
        return cast(text[:index]), cast(text[index + 1:])
    except ValueError:
        return None


def parse_complex(text: str) -> Optional[complex]:
    """Parse ``"re,im"`` into a complex number."""

    pair = parse_pair(text, ",", float)
    if pair is None:
        return None
    return complex(*pair)


def parse_bounds(text: str) -> Optional[RasterBounds]:
    pair = parse_pair(text, "x", int)
    if pair is None:
        return None
    return RasterBounds(*pair)
