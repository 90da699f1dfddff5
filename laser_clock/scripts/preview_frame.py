#!/usr/bin/env python3
"""Frame preview tool for layout checks without a projector.

Renders one clock frame and rasterizes the beam path into a PNG: every
visible point is joined to its predecessor with a line in the point's
color, blanked transits are optionally shown in dark grey.

Usage:
    python -m laser_clock.scripts.preview_frame --time 12:34:56
    python -m laser_clock.scripts.preview_frame --time 08:00:00 -size 350 \
        --output outputs/preview/frame.png --points outputs/preview/frame.bin

Outputs:
    - PNG image, device y axis pointing up
    - optional raw frame bytes (x, y uint16 LE; r, g, b, i uint8 per point)
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from laser_clock.compose.frame import FrameComposer
from laser_clock.configs.loader import ConfigError
from laser_clock.path_ir.commands import COORD_MAX
from laser_clock.render.point_buffer import PointBuffer
from laser_clock.scripts.run_clock import add_render_options, resolve_config
from laser_clock.utils import fs
from laser_clock.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

BLANK_TRACE_RGB = (48, 48, 48)


def parse_time(text: str) -> datetime:
    """Parse ``HH:MM:SS`` into today's date at that time."""
    try:
        t = datetime.strptime(text, "%H:%M:%S").time()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"time must be HH:MM:SS, got {text!r}"
        ) from exc
    return datetime.combine(datetime.now().date(), t)


def rasterize(
    buffer: PointBuffer,
    resolution: int = 1024,
    show_blank: bool = False,
) -> np.ndarray:
    """Draw the beam path of *buffer* into an (H, W, 3) uint8 image.

    Parameters
    ----------
    buffer : PointBuffer
        Composed frame.
    resolution : int
        Output width and height in pixels.
    show_blank : bool
        Also draw blanked transits.
    """
    img = Image.new("RGB", (resolution, resolution), (0, 0, 0))
    draw = ImageDraw.Draw(img)
    scale = (resolution - 1) / COORD_MAX

    def to_px(x: int, y: int) -> tuple[float, float]:
        return x * scale, (COORD_MAX - y) * scale

    prev = None
    for p in buffer:
        cur = to_px(p.x, p.y)
        if prev is not None:
            if not p.is_blank:
                draw.line([prev, cur], fill=(p.r, p.g, p.b), width=2)
            elif show_blank:
                draw.line([prev, cur], fill=BLANK_TRACE_RGB, width=1)
        prev = cur
    return np.asarray(img)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Preview one laser clock frame as a PNG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_render_options(parser)
    parser.add_argument(
        "--time",
        type=parse_time,
        default=None,
        help="Time to render as HH:MM:SS (default: now)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("outputs/preview/frame.png"),
        help="PNG output path",
    )
    parser.add_argument(
        "--points",
        type=Path,
        default=None,
        help="Also write the raw frame bytes here",
    )
    parser.add_argument("--resolution", type=int, default=1024, help="Image size in pixels")
    parser.add_argument("--show-blank", action="store_true", help="Draw blanked moves")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging("INFO", context={"app": "preview"})

    try:
        cfg = resolve_config(args)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    moment = args.time or datetime.now()
    composer = FrameComposer(cfg.render)
    buffer = composer.compose_time(moment)
    stats = composer.stats()
    logger.info(
        "Frame %s: %d points, %d clipped, %d dropped",
        moment.strftime("%H:%M:%S"),
        stats.points,
        stats.clipped,
        stats.dropped,
    )

    image = rasterize(buffer, args.resolution, args.show_blank)
    fs.atomic_save_image(image, args.output)
    logger.info("Wrote preview to %s", args.output)

    if args.points is not None:
        fs.atomic_write_bytes(args.points, buffer.to_bytes())
        logger.info("Wrote %d point(s) to %s", len(buffer), args.points)
    return 0


if __name__ == "__main__":
    sys.exit(main())
