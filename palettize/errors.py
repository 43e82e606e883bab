# palettize/errors.py
"""
Exception types raised by palettize.

Core functions raise these; only the CLI turns them into messages and exit codes.
"""
from __future__ import annotations


class PalettizeError(Exception):
    """Base class for all palettize failures."""


class ImageReadError(PalettizeError, OSError):
    """Source image missing or unreadable."""


class UnsupportedImageError(PalettizeError, ValueError):
    """Content not recognised by any decoder, or no encoder for the output suffix."""


class ImageWriteError(PalettizeError, OSError):
    """Destination could not be written."""


class EmptyPaletteError(PalettizeError, ValueError):
    """A palette with no opaque colours was used where at least one is required."""


class PaletteIndexError(PalettizeError, IndexError):
    """Rescaled palette index fell outside the target palette."""


__all__ = [
    "PalettizeError",
    "ImageReadError",
    "UnsupportedImageError",
    "ImageWriteError",
    "EmptyPaletteError",
    "PaletteIndexError",
]
