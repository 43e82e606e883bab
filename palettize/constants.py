# palettize/constants.py
"""
Tunables and defaults used across the project.

- Transparency test (TRANSPARENT_ALPHA)
- Pixel scan orders for palette extraction
- Output format handling
- Debug report sizes
"""
from __future__ import annotations

from typing import FrozenSet, Tuple

# =========================
# Palette extraction
# =========================
# Only this exact alpha counts as transparent; every other value is opaque.
TRANSPARENT_ALPHA: int = 0

# "column": x outer, y inner. "row": y outer, x inner (numpy's native order).
SCAN_ORDERS: Tuple[str, ...] = ("column", "row")
DEFAULT_SCAN_ORDER: str = "column"

# =========================
# Remapping
# =========================
DEFAULT_CLAMP: bool = True

# =========================
# Image I/O
# =========================
# Pillow format names that cannot carry an alpha channel.
ALPHA_LESS_FORMATS: FrozenSet[str] = frozenset({"JPEG", "BMP", "PCX", "PPM", "EPS"})

# =========================
# Reporting
# =========================
REPORT_TOP_K: int = 8
