"""Capacity-bounded point buffer for one frame.

The buffer is the literal scan path of the beam: insertion order is
drawing order.  It never grows past its capacity; once full, every
further ``emit`` is rejected and counted, so a frame that overflows is
truncated instead of failing.

Coordinates are clamped into ``[COORD_MIN, COORD_MAX]`` per axis before
storage.  Clamping is reported through the logger so the operator can
shrink the digit size or move the layout.
"""

from __future__ import annotations

import logging
from typing import Iterator

import numpy as np

from laser_clock.path_ir.commands import (
    COORD_MAX,
    COORD_MIN,
    MAX_INTENSITY,
    BeamPoint,
    color_to_rgb,
)

logger = logging.getLogger(__name__)

MAX_POINTS = 10000

POINT_DTYPE = np.dtype(
    [
        ("x", "<u2"),
        ("y", "<u2"),
        ("r", "u1"),
        ("g", "u1"),
        ("b", "u1"),
        ("i", "u1"),
    ]
)
"""Wire layout of one point: ``x, y`` uint16 then ``r, g, b, i`` uint8."""


class PointBuffer:
    """Append-only beam point sequence with a hard capacity.

    Parameters
    ----------
    capacity : int
        Maximum number of stored points.  Defaults to ``MAX_POINTS``.
    """

    def __init__(self, capacity: int = MAX_POINTS) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._points: list[BeamPoint] = []
        self.clipped = 0
        self.dropped = 0

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[BeamPoint]:
        return iter(self._points)

    def __getitem__(self, index: int) -> BeamPoint:
        return self._points[index]

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def points(self) -> tuple[BeamPoint, ...]:
        return tuple(self._points)

    @property
    def is_full(self) -> bool:
        return len(self._points) >= self.capacity

    @property
    def truncated(self) -> bool:
        """``True`` once any emission was rejected for capacity."""
        return self.dropped > 0

    def reset(self) -> None:
        """Empty the buffer and clear the clip / drop counters."""
        self._points.clear()
        self.clipped = 0
        self.dropped = 0

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(self, x: float, y: float, color: int) -> int | None:
        """Append one point.

        Parameters
        ----------
        x, y : float
            Device coordinates.  Fractions are truncated toward zero,
            then each axis is clamped into ``[0, 4095]``.
        color : int
            Colour selector; ``0`` stores a blanked (black) point.

        Returns
        -------
        int | None
            Index of the stored point, or ``None`` when the buffer is
            full and nothing was stored.
        """
        if self.is_full:
            self.dropped += 1
            return None

        px = self._clamp(int(x), "x")
        py = self._clamp(int(y), "y")
        r, g, b = color_to_rgb(color)
        self._points.append(BeamPoint(px, py, r, g, b, MAX_INTENSITY))
        return len(self._points) - 1

    def _clamp(self, value: int, axis: str) -> int:
        if COORD_MIN <= value <= COORD_MAX:
            return value
        self.clipped += 1
        level = logging.WARNING if self.clipped == 1 else logging.DEBUG
        logger.log(
            level,
            "Clipping %s=%d into [%d, %d]. Reduce size and/or adjust %s position",
            axis,
            value,
            COORD_MIN,
            COORD_MAX,
            axis,
        )
        return COORD_MAX if value > COORD_MAX else COORD_MIN

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_array(self) -> np.ndarray:
        """Return the points as a structured array of ``POINT_DTYPE``."""
        return np.array(
            [(p.x, p.y, p.r, p.g, p.b, p.i) for p in self._points],
            dtype=POINT_DTYPE,
        )

    def to_bytes(self) -> bytes:
        """Raw little-endian frame bytes in device point order."""
        return self.to_array().tobytes()
