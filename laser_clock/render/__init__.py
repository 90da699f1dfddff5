"""
Beam rendering module.

Turns draw commands into a capacity-bounded, clamped sequence of beam
points ready for a frame sink.
"""

from laser_clock.render.path_renderer import PathRenderer
from laser_clock.render.point_buffer import MAX_POINTS, POINT_DTYPE, PointBuffer

__all__ = ["MAX_POINTS", "POINT_DTYPE", "PathRenderer", "PointBuffer"]
