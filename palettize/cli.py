#!/usr/bin/env python3
"""
palettize CLI.
Recolour an image with another image's colours, matched by brightness rank.

Usage:
  palettize SOURCE PALETTE OUTPUT [--order column|row] [--no-clamp] [--debug]
  python -m palettize SOURCE PALETTE OUTPUT ...

Input:
  Any Pillow-readable images. Transparent pixels (alpha == 0) of SOURCE are
  copied through unchanged.

Output:
  Format chosen from the OUTPUT suffix. Formats without alpha get an RGB copy.

Exit status:
  0 on success, 1 on read/decode/write/palette errors, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from .constants import ALPHA_LESS_FORMATS, DEFAULT_SCAN_ORDER, REPORT_TOP_K, SCAN_ORDERS
from .errors import PalettizeError
from .image_io import load_image_rgba, output_format_for, save_image_rgba
from .remap import RemapResult, palettize_image
from .utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    palette_preview,
    print_banner,
    print_config_line,
    warn,
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palettize",
        description="Recolour SOURCE using the colours of PALETTE, matched by brightness rank.",
    )
    parser.add_argument("src", type=Path, help="Value image whose brightness is kept")
    parser.add_argument("palette", type=Path, help="Image whose colours are used")
    parser.add_argument("out", type=Path, help="Output image path")
    parser.add_argument(
        "--order",
        choices=list(SCAN_ORDERS),
        default=DEFAULT_SCAN_ORDER,
        help="Pixel scan order used to break ties between equally bright colours.",
    )
    parser.add_argument(
        "--no-clamp",
        dest="clamp",
        action="store_false",
        help="Fail instead of clamping a rescaled index past the last palette colour.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose mapping details")
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with src, palette, out (Paths), order, clamp, debug.
    Exits with status 2 on wrong arity or unknown flags.
    """
    return build_arg_parser().parse_args(argv)


def _debug_result(result: RemapResult, elapsed: float) -> None:
    h, w = result.image.shape[:2]
    debug_log(
        key_value_pairs_to_string(
            [
                ("Size", f"{w}x{h}"),
                ("Source palette", len(result.source_palette)),
                ("Target palette", len(result.target_palette)),
                ("Ratio", result.ratio),
                ("Recoloured", result.recoloured),
                ("Passed through", result.passed_through),
                ("Map time", format_seconds_compact(elapsed)),
            ]
        )
    )
    debug_log(f"source palette: {palette_preview(result.source_palette, REPORT_TOP_K)}")
    debug_log(f"target palette: {palette_preview(result.target_palette, REPORT_TOP_K)}")
    debug_log(f"colours used (top {REPORT_TOP_K}):")
    for hex_code, count in colour_usage_report(result.image)[:REPORT_TOP_K]:
        debug_log(f"  {hex_code}: {count:,}")


def run(args: argparse.Namespace) -> Path:
    """
    load both images -> extract palettes -> remap -> save.

    Raises PalettizeError subclasses; the caller decides how to report them.
    """
    t_start = time.perf_counter()
    print_banner(args.src.name)
    print_config_line(
        "run", [("Order", args.order), ("Clamp", bool(args.clamp))], debug=args.debug
    )

    # Resolve the output format first so a bad suffix fails before any work.
    out_fmt = output_format_for(args.out)

    value_rgba = load_image_rgba(args.src)
    palette_rgba = load_image_rgba(args.palette)
    t_loaded = time.perf_counter()
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", args.src.name),
                    ("Palette from", args.palette.name),
                    ("Load time", format_seconds_compact(t_loaded - t_start)),
                ]
            )
        )

    result = palettize_image(
        value_rgba, palette_rgba, order=args.order, clamp=args.clamp
    )
    t_mapped = time.perf_counter()
    if args.debug:
        _debug_result(result, t_mapped - t_loaded)

    if out_fmt in ALPHA_LESS_FORMATS and np.any(result.image[..., 3] != 255):
        warn(f"{out_fmt} has no alpha channel; transparency is dropped")

    written = save_image_rgba(args.out, result.image)
    t_saved = time.perf_counter()

    h, w = result.image.shape[:2]
    log(
        f"Wrote {written.name} | size={w}x{h} | palette={len(result.source_palette)}"
        f"->{len(result.target_palette)}"
    )
    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"map={format_seconds_compact(t_mapped - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_mapped)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}")
    return written


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point. Returns the process exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    try:
        run(args)
    except PalettizeError as e:
        error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
