"""Path renderer -- draw commands to beam points.

The renderer tracks the pen cursor and converts each ``line_to`` into
points appended to a ``PointBuffer``:

    1. ``n = ceil(d / divider)`` where ``d`` is the Euclidean distance
       from the cursor to the target.
    2. Visible strokes emit ``n`` points at ``k / n`` of the vector for
       ``k = 1 .. n``; the last one is the target itself.
    3. Blanked moves emit no intermediate points.  The galvos jump and
       the hidden dwell masks the transit.
    4. The target is then repeated ``dwell`` times (visible) or
       ``hidden_dwell`` times (blanked) so the beam settles.
    5. The cursor moves to the logical target unconditionally, even when
       the buffer clipped or rejected the points.

Point spacing is bounded by ``divider``.  Since every point is shown for
the same time, evenly spaced points give uniform brightness per unit of
stroke length.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from laser_clock.path_ir.commands import Color, DrawCommand
from laser_clock.render.point_buffer import PointBuffer

logger = logging.getLogger(__name__)


class PathRenderer:
    """Stateful pen that writes strokes into a point buffer.

    Parameters
    ----------
    buffer : PointBuffer
        Destination buffer, usually owned by the frame composer.
    divider : float
        Maximum chord length of one interpolated segment.
    dwell : int
        Repeats of the end point after a visible stroke.
    hidden_dwell : int
        Repeats of the end point after a blanked move.
    """

    def __init__(
        self,
        buffer: PointBuffer,
        divider: float = 50.0,
        dwell: int = 10,
        hidden_dwell: int = 15,
    ) -> None:
        if divider <= 0:
            raise ValueError(f"divider must be > 0, got {divider}")
        if dwell < 0 or hidden_dwell < 0:
            raise ValueError(
                f"dwell counts must be >= 0, got {dwell}/{hidden_dwell}"
            )
        self.buffer = buffer
        self.divider = float(divider)
        self.dwell = dwell
        self.hidden_dwell = hidden_dwell
        self.x_start = 0
        self.y_start = 0

    @property
    def cursor(self) -> tuple[int, int]:
        """Logical pen position (last commanded target)."""
        return self.x_start, self.y_start

    def reset(self, x: int = 0, y: int = 0) -> None:
        """Put the pen back at ``(x, y)`` without emitting anything."""
        self.x_start = x
        self.y_start = y

    def segment_count(self, x: int, y: int) -> int:
        """Number of interpolated segments from the cursor to ``(x, y)``."""
        length = math.hypot(x - self.x_start, y - self.y_start)
        return math.ceil(length / self.divider)

    def line_to(self, x: int, y: int, color: int) -> int | None:
        """Move the pen to ``(x, y)``, drawing if ``color`` is visible.

        Returns
        -------
        int | None
            Status of the last emission: the stored index, or ``None``
            once the buffer is full.
        """
        status: int | None = None
        x0, y0 = self.x_start, self.y_start
        dx = x - x0
        dy = y - y0
        blank = color == Color.BLANK

        if not blank:
            n = self.segment_count(x, y)
            for k in range(1, n + 1):
                if k == n:
                    status = self.buffer.emit(x, y, color)
                else:
                    status = self.buffer.emit(
                        x0 + dx * k / n, y0 + dy * k / n, color,
                    )

        repeats = self.hidden_dwell if blank else self.dwell
        for _ in range(repeats):
            status = self.buffer.emit(x, y, color)

        self.x_start = x
        self.y_start = y
        return status

    def run(self, commands: Iterable[DrawCommand]) -> int | None:
        """Execute a command list in order; return the last status."""
        status: int | None = None
        for cmd in commands:
            status = self.line_to(cmd.x, cmd.y, cmd.color)
        return status
