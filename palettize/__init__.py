# palettize/__init__.py
"""
palettize package.

Purpose:
  Recolour an image with the colours of another image. Both images are reduced
  to brightness-ordered palettes and each pixel's rank in the first palette is
  rescaled into the second. See palettize.cli for the command line.

Public API:
  extract_palette : image -> Palette (brightness-sorted, duplicate-free).
  remap_image     : recolour an image from one palette onto another.
  palettize_image : both steps at once, returns a RemapResult.
  load_image_rgba / save_image_rgba : Pillow-backed I/O.
  Palette         : palette value object.
  errors          : exception types (PalettizeError and subclasses).

Quick start:
  from palettize import load_image_rgba, palettize_image, save_image_rgba
  result = palettize_image(load_image_rgba(src), load_image_rgba(pal))
  save_image_rgba(out, result.image)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import utils

from .core_types import Palette
from .errors import (
    EmptyPaletteError,
    ImageReadError,
    ImageWriteError,
    PaletteIndexError,
    PalettizeError,
    UnsupportedImageError,
)
from .image_io import load_image_rgba, save_image_rgba
from .palette import extract_palette
from .remap import RemapResult, palettize_image, remap_image

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "utils",
    "Palette",
    "PalettizeError",
    "ImageReadError",
    "UnsupportedImageError",
    "ImageWriteError",
    "EmptyPaletteError",
    "PaletteIndexError",
    "load_image_rgba",
    "save_image_rgba",
    "extract_palette",
    "RemapResult",
    "remap_image",
    "palettize_image",
]
