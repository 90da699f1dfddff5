#!/usr/bin/env python3
"""
Run Clock Script.

Display the wall-clock time on a laser projector as a six-digit
seven-segment readout.

Usage:
    laser-clock
    laser-clock -size 350 -xpos 0 -ypos 2000 -color 1
    python -m laser_clock.scripts.run_clock --dry-run --frames 3
    python -m laser_clock.scripts.run_clock --config my_clock.yaml

Render options accept the single-dash spelling (``-size``) as well as
``--size``.  Values given on the command line override the config file.

Colors:
    1 red, 2 green, 3 blue, 4 yellow, 5 magenta, 6 cyan, 7 white
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import signal
import sys
from typing import Sequence

from laser_clock.configs.loader import ClockConfig, ConfigError, load_config
from laser_clock.hardware.device import DeviceError, FrameSink, NoDeviceFound, RecordingSink
from laser_clock.hardware.frame_loop import ClockRunner
from laser_clock.hardware.helios_dac import HeliosDacSink
from laser_clock.utils.logging_config import install_excepthook, setup_logging

logger = logging.getLogger(__name__)

RENDER_OPTIONS = ("size", "dwell", "hidden_dwell", "xpos", "ypos", "color", "divider")


def add_render_options(parser: argparse.ArgumentParser) -> None:
    """Add the render overrides shared by all clock scripts."""
    group = parser.add_argument_group("render options")
    group.add_argument("-size", "--size", type=int, help="Digit width (default 250)")
    group.add_argument("-dwell", "--dwell", type=int, help="Visible end-point repeats (default 10)")
    group.add_argument(
        "-hidden_dwell",
        "--hidden-dwell",
        dest="hidden_dwell",
        type=int,
        help="Blanked end-point repeats (default 15)",
    )
    group.add_argument("-xpos", "--xpos", type=int, help="Left edge (default 0)")
    group.add_argument("-ypos", "--ypos", type=int, help="Top edge (default 2000)")
    group.add_argument("-color", "--color", type=int, help="Palette color 1-7 (default 1)")
    group.add_argument("-divider", "--divider", type=float, help="Max segment length (default 50.0)")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Configuration file path (default: shipped clock.yaml)",
    )


def resolve_config(args: argparse.Namespace) -> ClockConfig:
    """Load the config file and apply command-line render overrides."""
    cfg = load_config(args.config)
    render = cfg.render.with_overrides(
        **{name: getattr(args, name) for name in RENDER_OPTIONS}
    )
    return dataclasses.replace(cfg, render=render)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Laser projector wall clock",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_render_options(parser)
    parser.add_argument(
        "--library",
        type=str,
        help="Path to libHeliosDacAPI (overrides device.library)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render into memory instead of driving a DAC",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many composed frames (default: run forever)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override logging.level from the config",
    )
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    return parser.parse_args(argv)


def build_sink(args: argparse.Namespace, cfg: ClockConfig) -> FrameSink:
    if args.dry_run:
        return RecordingSink(max_frames=1)
    return HeliosDacSink(args.library or cfg.device.library)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level or "INFO", context={"app": "clock"})
    install_excepthook()

    try:
        cfg = resolve_config(args)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    log_cfg = cfg.logging
    setup_logging(
        args.log_level or log_cfg.level,
        args.log_file or log_cfg.file,
        json=log_cfg.json,
        color=log_cfg.color,
    )
    logger.info(
        "Render: size=%d xpos=%d ypos=%d color=%d divider=%.1f dwell=%d hidden_dwell=%d",
        cfg.render.size,
        cfg.render.xpos,
        cfg.render.ypos,
        cfg.render.color,
        cfg.render.divider,
        cfg.render.dwell,
        cfg.render.hidden_dwell,
    )

    runner = ClockRunner(build_sink(args, cfg), cfg)
    signal.signal(signal.SIGTERM, lambda signum, frame: runner.stop())

    try:
        runner.start()
        stats = runner.run(max_frames=args.frames)
        logger.info(
            "Stopped: %d frames composed, %d transmissions, %d timeouts",
            stats.frames_composed,
            stats.transmissions,
            stats.timeouts,
        )
    except NoDeviceFound as exc:
        logger.error("%s", exc)
        return 1
    except DeviceError as exc:
        logger.error("Device error: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        runner.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
