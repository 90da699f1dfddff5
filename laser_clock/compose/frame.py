"""Frame composer -- one ``HH:MM:SS`` frame per call.

Layout (``s = size``, all offsets from ``(xpos, ypos)``)::

    digit:   H1   H2   :   M1   M2   :   S1   S2
    x:       0    2s  3.5s 4s   6s  7.5s 8s   10s

Each colon is two squares of side ``s // 10`` stacked ``s`` apart, the
lower one ``s // 2`` under ``ypos``.  Digits are drawn first, left to
right, then the four separator squares.

The composer owns its point buffer and renderer.  Both are reset at the
start of every frame so nothing leaks between frames, and composing the
same time twice yields byte-identical buffers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time

from laser_clock.configs.loader import RenderConfig
from laser_clock.glyphs.digits import digit
from laser_clock.glyphs.markers import square
from laser_clock.path_ir.commands import Glyph
from laser_clock.render.path_renderer import PathRenderer
from laser_clock.render.point_buffer import PointBuffer

logger = logging.getLogger(__name__)

DIGIT_SLOTS = (0, 2, 4, 6, 8, 10)
"""Horizontal digit offsets in multiples of ``size``."""

SEPARATOR_SLOTS = (3.5, 7.5)


@dataclass(frozen=True)
class FrameStats:
    """Summary of the last composed frame."""

    points: int
    clipped: int
    dropped: int

    @property
    def truncated(self) -> bool:
        return self.dropped > 0


def _check_time(hour: int, minute: int, second: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in [0, 23], got {hour}")
    if not 0 <= minute <= 59:
        raise ValueError(f"minute must be in [0, 59], got {minute}")
    if not 0 <= second <= 59:
        raise ValueError(f"second must be in [0, 59], got {second}")


class FrameComposer:
    """Lay out six digits and two colons into a point buffer.

    Parameters
    ----------
    config : RenderConfig
        Layout and timing; read once per frame.
    buffer : PointBuffer | None
        Buffer to render into.  A new one of ``config.max_points`` is
        created when omitted.
    """

    def __init__(
        self,
        config: RenderConfig,
        buffer: PointBuffer | None = None,
    ) -> None:
        self.config = config
        self.buffer = buffer if buffer is not None else PointBuffer(config.max_points)
        self.renderer = PathRenderer(
            self.buffer,
            divider=config.divider,
            dwell=config.dwell,
            hidden_dwell=config.hidden_dwell,
        )

    def layout(self, hour: int, minute: int, second: int) -> list[Glyph]:
        """Ordered glyphs for one frame: six digits, then four squares."""
        _check_time(hour, minute, second)
        cfg = self.config
        s = cfg.size
        tens_ones = (
            hour // 10, hour % 10,
            minute // 10, minute % 10,
            second // 10, second % 10,
        )

        glyphs = [
            digit(n, cfg.xpos + slot * s, cfg.ypos, cfg.color, s)
            for n, slot in zip(tens_ones, DIGIT_SLOTS)
        ]

        lower = cfg.ypos - s // 2
        for slot in SEPARATOR_SLOTS:
            cx = cfg.xpos + int(slot * s)
            glyphs.append(square(cx, lower, cfg.color, s // 10))
            glyphs.append(square(cx, lower - s, cfg.color, s // 10))
        return glyphs

    def compose(self, hour: int, minute: int, second: int) -> PointBuffer:
        """Render one frame and return the (reused) point buffer.

        Raises
        ------
        ValueError
            If a time field is out of range.
        """
        glyphs = self.layout(hour, minute, second)

        self.buffer.reset()
        self.renderer.reset()
        for glyph in glyphs:
            self.renderer.run(glyph)

        if self.buffer.truncated:
            logger.warning(
                "Frame %02d:%02d:%02d truncated: %d point(s) dropped at "
                "capacity %d",
                hour,
                minute,
                second,
                self.buffer.dropped,
                self.buffer.capacity,
            )
        logger.debug(
            "Composed %02d:%02d:%02d: %d points, %d clipped",
            hour,
            minute,
            second,
            len(self.buffer),
            self.buffer.clipped,
        )
        return self.buffer

    def compose_time(self, moment: datetime | time) -> PointBuffer:
        """Render the time-of-day part of *moment*."""
        return self.compose(moment.hour, moment.minute, moment.second)

    def stats(self) -> FrameStats:
        return FrameStats(
            points=len(self.buffer),
            clipped=self.buffer.clipped,
            dropped=self.buffer.dropped,
        )
