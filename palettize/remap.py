# palettize/remap.py
from __future__ import annotations

"""
Pixel remapping between two brightness-ordered palettes.

Each source pixel's rank in the source palette is rescaled into the target
palette's index range by ratio = len(new) / len(old), truncated, and clamped to
the last target entry. Pixels whose colour is not in the source palette
(transparent ones) are copied through untouched.
"""

from dataclasses import dataclass

import numpy as np

from .constants import DEFAULT_CLAMP, DEFAULT_SCAN_ORDER
from .core_types import (
    NOT_FOUND,
    IndexArray,
    Palette,
    U8Image,
    assert_u8_image_rgba,
)
from .errors import EmptyPaletteError, PaletteIndexError
from .palette import extract_palette


@dataclass(frozen=True, eq=False)
class RemapResult:
    """Output image plus the palettes and counts used to build it."""

    image: U8Image
    source_palette: Palette
    target_palette: Palette
    ratio: float
    recoloured: int
    passed_through: int


def palette_ratio(old_palette: Palette, new_palette: Palette) -> float:
    """len(new) / len(old) as a float; an empty old palette is an error."""
    if old_palette.is_empty:
        raise EmptyPaletteError(
            "empty palette: source image has no opaque pixels to rank"
        )
    return float(len(new_palette)) / float(len(old_palette))


def scale_indices(
    indices: IndexArray, ratio: float, new_size: int, clamp: bool = DEFAULT_CLAMP
) -> IndexArray:
    """
    Rescale source palette indices into [0, new_size).

    NOT_FOUND entries stay NOT_FOUND. Indices are non-negative so floor is the
    same as truncation toward zero. Without clamp, an index that lands on or past
    new_size raises PaletteIndexError.
    """
    idx = np.asarray(indices, dtype=np.int64)
    found = idx != NOT_FOUND
    scaled = np.floor(idx.astype(np.float64) * float(ratio)).astype(np.int64)
    if clamp:
        scaled = np.clip(scaled, 0, max(new_size - 1, 0))
    elif np.any(found & ((scaled < 0) | (scaled >= new_size))):
        worst = int(scaled[found].max())
        raise PaletteIndexError(
            f"rescaled index {worst} is outside a palette of {new_size} colours"
        )
    return np.where(found, scaled, NOT_FOUND).astype(np.int64)


def remap_image(
    image: U8Image,
    old_palette: Palette,
    new_palette: Palette,
    clamp: bool = DEFAULT_CLAMP,
) -> U8Image:
    """
    Recolour image by palette rank.

    Args:
      image       : uint8 [H,W,4], read only
      old_palette : palette extracted from image
      new_palette : palette whose colours are substituted
      clamp       : clamp rescaled indices to the last target entry

    Returns:
      uint8 [H,W,4], a new array of the same shape.

    Raises:
      EmptyPaletteError if either palette is empty.
    """
    return _remap(image, old_palette, new_palette, clamp)[0]


def _remap(
    image: U8Image, old_palette: Palette, new_palette: Palette, clamp: bool
) -> tuple[U8Image, float, int]:
    img = assert_u8_image_rgba(image)
    ratio = palette_ratio(old_palette, new_palette)
    if new_palette.is_empty:
        raise EmptyPaletteError(
            "empty palette: palette image has no opaque pixels to draw colours from"
        )

    src_idx = old_palette.lookup(img)  # (H, W)
    dst_idx = scale_indices(src_idx, ratio, len(new_palette), clamp=clamp)
    found = dst_idx != NOT_FOUND

    out = img.copy()
    out[found] = new_palette.colors[dst_idx[found]]
    return out, ratio, int(np.count_nonzero(found))


def palettize_image(
    value_image: U8Image,
    palette_image: U8Image,
    order: str = DEFAULT_SCAN_ORDER,
    clamp: bool = DEFAULT_CLAMP,
) -> RemapResult:
    """
    Full transform: extract both palettes, then remap value_image onto the
    colours of palette_image.
    """
    old_palette = extract_palette(value_image, order)
    new_palette = extract_palette(palette_image, order)
    out, ratio, recoloured = _remap(value_image, old_palette, new_palette, clamp)
    total = int(out.shape[0] * out.shape[1])
    return RemapResult(
        image=out,
        source_palette=old_palette,
        target_palette=new_palette,
        ratio=ratio,
        recoloured=recoloured,
        passed_through=total - recoloured,
    )


__all__ = [
    "RemapResult",
    "palette_ratio",
    "scale_indices",
    "remap_image",
    "palettize_image",
]
