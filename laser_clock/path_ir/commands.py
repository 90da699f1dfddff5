"""Path IR -- the vocabulary between glyphs and the beam renderer.

A glyph is a flat list of ``DrawCommand`` objects.  Each command moves
the pen to an absolute device coordinate; the colour decides whether
the move is a visible stroke or a blanked transit.

Device space
------------
Coordinates are integer DAC units in ``[0, 4095]`` on both axes, with
``y`` decreasing downward.  Nothing in this module clamps: clipping is
the point buffer's job, so commands may legitimately point outside the
range.

Colours
-------
``0`` is the blanked (invisible) colour.  ``1`` to ``7`` select a fixed
palette entry.  Any other integer falls back to white.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# ---------------------------------------------------------------------------
# Device constants
# ---------------------------------------------------------------------------

COORD_MIN = 0
COORD_MAX = 4095

MAX_INTENSITY = 255
"""Intensity written for every point, blanked ones included."""


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------


class Color(IntEnum):
    """Closed set of beam colours."""

    BLANK = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


PALETTE: dict[Color, tuple[int, int, int]] = {
    Color.BLANK: (0, 0, 0),
    Color.RED: (255, 0, 0),
    Color.GREEN: (0, 255, 0),
    Color.BLUE: (0, 0, 255),
    Color.YELLOW: (255, 255, 0),
    Color.MAGENTA: (255, 0, 255),
    Color.CYAN: (0, 255, 255),
    Color.WHITE: (255, 255, 255),
}

FALLBACK_COLOR = Color.WHITE


def resolve_color(value: int) -> Color:
    """Map a raw colour selector onto the palette.

    Out-of-range selectors resolve to ``FALLBACK_COLOR``.
    """
    try:
        return Color(value)
    except ValueError:
        return FALLBACK_COLOR


def color_to_rgb(value: int) -> tuple[int, int, int]:
    """Return the ``(r, g, b)`` triple for a colour selector."""
    return PALETTE[resolve_color(value)]


# ---------------------------------------------------------------------------
# Commands and points
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DrawCommand:
    """Move the pen to ``(x, y)`` using colour selector ``color``.

    Parameters
    ----------
    x, y : int
        Target in device units.  May lie outside ``[0, 4095]``.
    color : int
        ``0`` for a blanked move, otherwise a palette selector.
    """

    x: int
    y: int
    color: int

    @property
    def is_blank(self) -> bool:
        return self.color == Color.BLANK


@dataclass(frozen=True, slots=True)
class BeamPoint:
    """One stored sample: clamped position, RGB and intensity."""

    x: int
    y: int
    r: int
    g: int
    b: int
    i: int = MAX_INTENSITY

    @property
    def is_blank(self) -> bool:
        return self.r == 0 and self.g == 0 and self.b == 0


Glyph = list[DrawCommand]
"""Ordered commands tracing one digit or marker."""


def blank_to(x: int, y: int) -> DrawCommand:
    """Blanked transit to ``(x, y)``."""
    return DrawCommand(x=x, y=y, color=Color.BLANK)


def line_to(x: int, y: int, color: int) -> DrawCommand:
    """Stroke to ``(x, y)`` in ``color``."""
    return DrawCommand(x=x, y=y, color=color)
