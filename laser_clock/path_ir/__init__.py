"""
Path intermediate representation.

Draw commands, the colour palette and the stored beam-point type shared
by the glyph library and the renderer.
"""

from laser_clock.path_ir.commands import (
    COORD_MAX,
    COORD_MIN,
    MAX_INTENSITY,
    PALETTE,
    BeamPoint,
    Color,
    DrawCommand,
    Glyph,
    blank_to,
    color_to_rgb,
    line_to,
    resolve_color,
)

__all__ = [
    "COORD_MAX",
    "COORD_MIN",
    "MAX_INTENSITY",
    "PALETTE",
    "BeamPoint",
    "Color",
    "DrawCommand",
    "Glyph",
    "blank_to",
    "color_to_rgb",
    "line_to",
    "resolve_color",
]
