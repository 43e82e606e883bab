# palettize/core_types.py
from __future__ import annotations

"""
Core type aliases, the Palette value object, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBATuple = Tuple[int, int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA
U8Colors = NDArray[np.uint8]  # (N, 4) RGBA rows
ColorKeys = NDArray[np.int64]  # (N,) packed RGBA
IndexArray = NDArray[np.int64]  # (...) palette indices, -1 = absent

NOT_FOUND = -1


# Small helpers


def rgba_to_hex(rgba: Sequence[int]) -> HexStr:
    """RGBA to '#rrggbb', or '#rrggbbaa' when not fully opaque."""
    r, g, b, a = (int(v) for v in rgba[:4])
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def pack_rgba(colors: np.ndarray) -> ColorKeys:
    """
    Pack (..., 4) uint8 RGBA rows into one int64 key per colour.
    Keys are equal exactly when all four channels are equal.
    """
    c = np.asarray(colors, dtype=np.int64)
    return (c[..., 0] << 24) | (c[..., 1] << 16) | (c[..., 2] << 8) | c[..., 3]


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) RGBA image")
    return image  # type: ignore[return-value]


def assert_u8_colors(colors: np.ndarray) -> U8Colors:
    """Validate a uint8 (N,4) colour table and return it typed as U8Colors."""
    if colors.dtype != np.uint8 or colors.ndim != 2 or colors.shape[-1] != 4:
        raise TypeError("expected uint8 (N,4) RGBA colour rows")
    return colors  # type: ignore[return-value]


# Value objects


@dataclass(frozen=True, eq=False)
class Palette:
    """
    Brightness-ordered, duplicate-free RGBA colours.

    colors is stored read-only. Lookups go through a sorted copy of the packed
    keys, so finding a colour's rank is a binary search instead of a scan.
    """

    colors: U8Colors  # (P, 4)
    _sorted_keys: ColorKeys = field(init=False, repr=False)
    _sorted_pos: IndexArray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        colors = np.array(assert_u8_colors(self.colors), dtype=np.uint8, copy=True)
        colors.setflags(write=False)
        keys = pack_rgba(colors)
        order = np.argsort(keys, kind="stable").astype(np.int64, copy=False)
        sorted_keys = keys[order]
        if sorted_keys.size > 1 and np.any(sorted_keys[1:] == sorted_keys[:-1]):
            raise ValueError("palette colours must be unique")
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "_sorted_keys", sorted_keys)
        object.__setattr__(self, "_sorted_pos", order)

    @classmethod
    def empty(cls) -> "Palette":
        return cls(np.zeros((0, 4), dtype=np.uint8))

    def __len__(self) -> int:
        return int(self.colors.shape[0])

    def __iter__(self) -> Iterator[RGBATuple]:
        for row in self.colors.tolist():
            yield (row[0], row[1], row[2], row[3])

    def __getitem__(self, index: int) -> RGBATuple:
        row = self.colors[index]
        return (int(row[0]), int(row[1]), int(row[2]), int(row[3]))

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def brightness(self) -> NDArray[np.int64]:
        """Per-entry r+g+b as int64."""
        return self.colors[:, :3].astype(np.int64).sum(axis=1)

    def lookup(self, colors: np.ndarray) -> IndexArray:
        """
        Palette index of each RGBA row in colors (any leading shape).
        Returns NOT_FOUND (-1) where a colour is absent.
        """
        keys = pack_rgba(colors)
        if len(self) == 0:
            return np.full(keys.shape, NOT_FOUND, dtype=np.int64)
        pos = np.searchsorted(self._sorted_keys, keys, side="left")
        pos = np.minimum(pos, self._sorted_keys.size - 1)
        found = self._sorted_keys[pos] == keys
        return np.where(found, self._sorted_pos[pos], NOT_FOUND).astype(np.int64)

    def index_of(self, color: Union[Sequence[int], np.ndarray]) -> int:
        """Index of a single RGBA colour, or NOT_FOUND."""
        row = np.asarray(color, dtype=np.uint8).reshape(1, 4)
        return int(self.lookup(row)[0])

    def to_hex(self) -> List[HexStr]:
        return [rgba_to_hex(c) for c in self]


__all__ = [
    # aliases / types
    "RGBATuple",
    "HexStr",
    "U8Image",
    "U8Colors",
    "ColorKeys",
    "IndexArray",
    "NOT_FOUND",
    # value objects
    "Palette",
    # helpers
    "rgba_to_hex",
    "pack_rgba",
    "assert_u8_image_rgba",
    "assert_u8_colors",
]
