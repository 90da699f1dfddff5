"""Auxiliary marker glyphs: the separator square and a circle.

Unlike digits, markers are centred on ``(x, y)``.
"""

from __future__ import annotations

import math

from laser_clock.path_ir.commands import Glyph, blank_to, line_to


def square(x: int, y: int, color: int, size: int) -> Glyph:
    """Square of side ``size`` centred at ``(x, y)``.

    Starts blanked at the ``(-size/2, -size/2)`` corner and traces the
    four sides back to it.
    """
    offset = size // 2
    x0 = x - offset
    y0 = y - offset
    return [
        blank_to(x0, y0),
        line_to(x0 + size, y0, color),
        line_to(x0 + size, y0 + size, color),
        line_to(x0, y0 + size, color),
        line_to(x0, y0, color),
    ]


def circle(
    x: int,
    y: int,
    color: int,
    radius: float,
    step_deg: float = 10.0,
) -> Glyph:
    """Circle traced as a polyline sampled every ``step_deg`` degrees.

    Parameters
    ----------
    radius : float
        Radius in device units.
    step_deg : float
        Angular step.  Sampling runs from ``-step/2`` while below
        ``360 + step/2`` so the outline closes on itself.

    Raises
    ------
    ValueError
        If ``step_deg`` is not positive.
    """
    if step_deg <= 0:
        raise ValueError(f"step_deg must be > 0, got {step_deg}")

    glyph: Glyph = [blank_to(int(x + radius), y)]
    theta = -0.5 * step_deg
    while theta < 360.0 + 0.5 * step_deg:
        rad = math.radians(theta)
        px = int(radius * math.cos(rad)) + x
        py = int(radius * math.sin(rad)) + y
        glyph.append(line_to(px, py, color))
        theta += step_deg
    return glyph
