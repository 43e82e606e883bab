import numpy as np

from palettize.core_types import Palette, pack_rgba, rgba_to_hex
from palettize.utils import (
    colour_usage_report,
    format_seconds_compact,
    key_value_pairs_to_string,
    palette_preview,
)

from conftest import BLACK, CLEAR, GRAY, WHITE, rgba_image


def test_key_value_pairs_formatting() -> None:
    text = key_value_pairs_to_string([("Clamp", True), ("Pixels", 12345), ("Ratio", 0.25)])
    assert text == "Clamp: on  Pixels: 12,345  Ratio: 0.25"


def test_format_seconds_compact() -> None:
    assert format_seconds_compact(0.5) == "500.0ms"
    assert format_seconds_compact(2.0) == "2.000s"
    assert format_seconds_compact(61.0) == "1m 1.0s"


def test_palette_preview_truncates() -> None:
    pal = Palette(np.array([BLACK, GRAY, WHITE], dtype=np.uint8))
    assert palette_preview(pal, 2) == "#000000 #808080 ... (+1)"
    assert palette_preview(pal, 3) == "#000000 #808080 #ffffff"
    assert palette_preview(Palette.empty(), 3) == "(empty)"


def test_colour_usage_report_counts_opaque_pixels() -> None:
    img = rgba_image([[GRAY, GRAY, CLEAR], [WHITE, GRAY, CLEAR]])
    assert colour_usage_report(img) == [("#808080", 3), ("#ffffff", 1)]
    assert colour_usage_report(rgba_image([[CLEAR]])) == []


def test_hex_helpers() -> None:
    assert rgba_to_hex((1, 2, 3, 255)) == "#010203"
    assert rgba_to_hex((1, 2, 3, 0)) == "#01020300"
    keys = pack_rgba(np.array([(1, 2, 3, 4), (1, 2, 3, 5)], dtype=np.uint8))
    assert keys.tolist() == [0x01020304, 0x01020305]
