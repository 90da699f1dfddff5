"""Seven-segment digit glyphs.

Each function returns a ``Glyph`` (flat ``list[DrawCommand]``) tracing
one digit inside a box ``size`` wide and ``2 * size`` tall.  ``(x, y)``
is the anchor corner of the box; the glyph extends right to
``x + size`` and down to ``y - 2 * size``.  Row ``y - size`` is the
middle bar.

Every glyph starts with a blanked move to its first stroke point.  The
stroke order below is hand-tuned for the galvos: changing it changes
the rendered shape.

Common parameters:

    x, y : int
        Anchor corner in device units.
    color : int
        Stroke colour selector (``1`` to ``7``).
    size : int
        Digit width in device units.
"""

from __future__ import annotations

from typing import Callable

from laser_clock.path_ir.commands import Glyph, blank_to, line_to


def zero(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x, y),
        line_to(x + size, y, color),
        line_to(x + size, y - 2 * size, color),
        line_to(x, y - 2 * size, color),
        line_to(x, y, color),
    ]


def one(x: int, y: int, color: int, size: int) -> Glyph:
    """Single vertical stroke on the right edge.

    The blanked start is issued twice: the extra hidden dwell sharpens
    the top of the stroke.
    """
    return [
        blank_to(x + size, y),
        blank_to(x + size, y),
        line_to(x + size, y - 2 * size, color),
    ]


def two(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x, y),
        line_to(x + size, y, color),
        line_to(x + size, y - size, color),
        line_to(x, y - size, color),
        line_to(x, y - 2 * size, color),
        line_to(x + size, y - 2 * size, color),
    ]


def three(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x, y),
        line_to(x + size, y, color),
        line_to(x + size, y - 2 * size, color),
        line_to(x, y - 2 * size, color),
        blank_to(x, y - size),
        line_to(x + size, y - size, color),
    ]


def four(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x, y),
        line_to(x, y - size, color),
        line_to(x + size, y - size, color),
        blank_to(x + size, y),
        line_to(x + size, y - 2 * size, color),
    ]


def five(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x + size, y),
        line_to(x, y, color),
        line_to(x, y - size, color),
        line_to(x + size, y - size, color),
        line_to(x + size, y - 2 * size, color),
        line_to(x, y - 2 * size, color),
    ]


def six(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x + size, y),
        line_to(x, y, color),
        line_to(x, y - 2 * size, color),
        line_to(x + size, y - 2 * size, color),
        line_to(x + size, y - size, color),
        line_to(x, y - size, color),
    ]


def seven(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x, y),
        line_to(x + size, y, color),
        line_to(x + size, y - 2 * size, color),
    ]


def eight(x: int, y: int, color: int, size: int) -> Glyph:
    """Closed outline, then a blanked re-entry for the middle bar."""
    return [
        blank_to(x, y),
        line_to(x + size, y, color),
        line_to(x + size, y - 2 * size, color),
        line_to(x, y - 2 * size, color),
        line_to(x, y, color),
        blank_to(x, y - size),
        line_to(x + size, y - size, color),
    ]


def nine(x: int, y: int, color: int, size: int) -> Glyph:
    return [
        blank_to(x + size, y - 2 * size),
        line_to(x + size, y, color),
        line_to(x, y, color),
        line_to(x, y - size, color),
        line_to(x + size, y - size, color),
    ]


DIGIT_GLYPHS: dict[int, Callable[[int, int, int, int], Glyph]] = {
    0: zero,
    1: one,
    2: two,
    3: three,
    4: four,
    5: five,
    6: six,
    7: seven,
    8: eight,
    9: nine,
}


def digit(n: int, x: int, y: int, color: int, size: int) -> Glyph:
    """Glyph for decimal digit ``n``.

    Values outside ``0 .. 9`` produce an empty glyph, which draws
    nothing and leaves the pen where it was.
    """
    fn = DIGIT_GLYPHS.get(n)
    if fn is None:
        return []
    return fn(x, y, color, size)
