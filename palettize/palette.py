# palettize/palette.py
from __future__ import annotations

"""
Palette extraction.

Exports:
  brightness(colors) -> int64 array
  is_transparent(colors) -> bool array
  scan_pixels(image, order) -> (N,4) uint8 rows in scan order
  sort_by_brightness(colors) -> colours, stable ascending by r+g+b
  dedupe_first_occurrence(colors) -> colours with later repeats dropped
  extract_palette(image, order="column") -> Palette

Notes:
  - Alpha is only a binary test: alpha == 0 is transparent, anything else opaque.
  - Equal colours always share a brightness, so after the stable sort every copy
    of a colour sits in the same brightness run; keeping the first copy gives the
    same palette whatever the run's interleaving.
"""

import numpy as np
from numpy.typing import NDArray

from .constants import DEFAULT_SCAN_ORDER, SCAN_ORDERS, TRANSPARENT_ALPHA
from .core_types import (
    Palette,
    U8Colors,
    U8Image,
    assert_u8_image_rgba,
    pack_rgba,
)


def brightness(colors: np.ndarray) -> NDArray[np.int64]:
    """r + g + b for each RGBA row, as int64 (no uint8 overflow)."""
    return np.asarray(colors)[..., :3].astype(np.int64).sum(axis=-1)


def is_transparent(colors: np.ndarray) -> NDArray[np.bool_]:
    return np.asarray(colors)[..., 3] == TRANSPARENT_ALPHA


def scan_pixels(image: U8Image, order: str = DEFAULT_SCAN_ORDER) -> U8Colors:
    """
    Flatten an (H,W,4) image into (H*W,4) rows.

    "column" visits x outer / y inner, "row" visits y outer / x inner.
    """
    img = assert_u8_image_rgba(image)
    if order == "row":
        return img.reshape(-1, 4)
    if order == "column":
        return np.ascontiguousarray(img.transpose(1, 0, 2)).reshape(-1, 4)
    raise ValueError(f"unknown scan order {order!r}; expected one of {SCAN_ORDERS}")


def sort_by_brightness(colors: U8Colors) -> U8Colors:
    """Stable ascending sort by brightness; equal-brightness rows keep input order."""
    order = np.argsort(brightness(colors), kind="stable")
    return colors[order]


def dedupe_first_occurrence(colors: U8Colors) -> U8Colors:
    """Drop every repeat of a colour, keeping its first row; order is preserved."""
    if colors.shape[0] == 0:
        return colors
    _, first = np.unique(pack_rgba(colors), return_index=True)
    return colors[np.sort(first)]


def extract_palette(image: U8Image, order: str = DEFAULT_SCAN_ORDER) -> Palette:
    """
    Build the brightness-ordered, duplicate-free palette of an image's opaque pixels.

    An image with no opaque pixels gives an empty palette; callers that divide by
    the palette size must check for that (remap_image raises EmptyPaletteError).
    """
    pixels = scan_pixels(image, order)
    opaque = pixels[~is_transparent(pixels)]
    if opaque.shape[0] == 0:
        return Palette.empty()
    return Palette(dedupe_first_occurrence(sort_by_brightness(opaque)))


__all__ = [
    "brightness",
    "is_transparent",
    "scan_pixels",
    "sort_by_brightness",
    "dedupe_first_occurrence",
    "extract_palette",
]
