# orbit_anim/cli.py
"""
Command line for the orbit animation.

Usage:
    orbit-anim                          # interactive window with Pause/Resume
    orbit-anim --export docs/orbit.gif  # render an animated GIF (or .mp4)
    orbit-anim --headless --frames 300  # run the loop without a display
"""
from __future__ import annotations

import argparse

from orbit_anim.config.settings import (
    DEFAULT_EXPORT_FRAMES,
    DEFAULT_EXPORT_FPS,
    DEFAULT_DPR,
)


def _positive_int(value: str) -> int:
    try:
        val = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if val <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return val


def _positive_float(value: str) -> float:
    try:
        val = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if val <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return val


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-anim",
        description="Satellite orbiting a shaded sphere, in pseudo-3D.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--export", metavar="PATH", default=None,
                      help="render to an animated .gif or .mp4 instead of opening a window")
    mode.add_argument("--headless", action="store_true",
                      help="run the frame loop without a display or output file")
    parser.add_argument("--frames", type=_positive_int, default=DEFAULT_EXPORT_FRAMES,
                        help=f"frames to render in export/headless mode (default {DEFAULT_EXPORT_FRAMES})")
    parser.add_argument("--fps", type=_positive_int, default=DEFAULT_EXPORT_FPS,
                        help=f"frames per second in export/headless mode (default {DEFAULT_EXPORT_FPS})")
    parser.add_argument("--dpr", type=_positive_float, default=DEFAULT_DPR,
                        help=f"device pixel ratio used for exports (default {DEFAULT_DPR})")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
