# palettize/image_io.py
from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .constants import ALPHA_LESS_FORMATS
from .core_types import U8Image, assert_u8_image_rgba
from .errors import ImageReadError, ImageWriteError, UnsupportedImageError

"""
Image I/O helpers. Everything in and out of the core is uint8 RGBA (H,W,4).
"""


def _to_rgba_array(im: Image.Image) -> U8Image:
    if im.mode.startswith("I"):
        # 16/32-bit grey: keep the high byte, convert("RGBA") would clip at 255.
        grey = np.clip(np.asarray(im).astype(np.int64) >> 8, 0, 255).astype(np.uint8)
        im = Image.fromarray(grey)
    return np.array(im.convert("RGBA"), dtype=np.uint8)


def load_image_rgba(path: Path) -> U8Image:
    """
    Decode any Pillow-readable image and return it as uint8 (H,W,4).

    Pixel values are taken as stored; no EXIF rotation or ICC conversion, so
    colours stay exactly comparable between the two inputs.
    """
    path = Path(path)
    try:
        with Image.open(path) as im:
            im.load()
            return _to_rgba_array(im)
    except UnidentifiedImageError as e:
        raise UnsupportedImageError(f"unsupported file type: {path}") from e
    except OSError as e:
        raise ImageReadError(f"cannot read {path}: {e}") from e


def output_format_for(path: Path) -> str:
    """Pillow format name for a destination suffix, e.g. '.png' -> 'PNG'."""
    suffix = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(suffix)
    if fmt is None or fmt not in Image.SAVE:
        raise UnsupportedImageError(f"unsupported file type for output: {path}")
    return fmt


def encode_image_rgba(image: U8Image, fmt: str) -> bytes:
    """Encode an RGBA array in the given Pillow format. Alpha is dropped where the format has none."""
    im = Image.fromarray(assert_u8_image_rgba(image))
    if fmt in ALPHA_LESS_FORMATS:
        im = im.convert("RGB")
    buf = io.BytesIO()
    try:
        im.save(buf, format=fmt)
    except (OSError, ValueError) as e:
        raise UnsupportedImageError(f"cannot encode image as {fmt}: {e}") from e
    return buf.getvalue()


def save_image_rgba(path: Path, image: U8Image) -> Path:
    """
    Write image to path in the format implied by its suffix.

    The whole file is encoded in memory first, so nothing is written when
    encoding fails.
    """
    path = Path(path)
    data = encode_image_rgba(image, output_format_for(path))
    try:
        path.write_bytes(data)
    except OSError as e:
        raise ImageWriteError(f"cannot write {path}: {e}") from e
    return path


__all__ = [
    "load_image_rgba",
    "output_format_for",
    "encode_image_rgba",
    "save_image_rgba",
]
