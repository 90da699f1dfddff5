"""
Frame composition module.

Lays out the six clock digits and two colons for one wall-clock second.
"""

from laser_clock.compose.frame import FrameComposer, FrameStats

__all__ = ["FrameComposer", "FrameStats"]
