"""
Glyph library.

Pure functions returning ``list[DrawCommand]`` for the ten digits, the
separator square and a circle.
"""

from laser_clock.glyphs.digits import DIGIT_GLYPHS, digit
from laser_clock.glyphs.markers import circle, square

__all__ = ["DIGIT_GLYPHS", "circle", "digit", "square"]
