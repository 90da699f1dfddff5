"""Helios laser DAC sink over the vendor C API.

Binds the four calls the clock needs from ``libHeliosDacAPI``::

    int OpenDevices();
    int GetStatus(unsigned int devNum);      // 1 ready, 0 busy, <0 error
    int WriteFrame(unsigned int devNum, int pps, int flags,
                   HeliosPoint *points, int numOfPoints);
    int CloseDevices();

``HeliosPoint`` is ``{uint16 x, y; uint8 r, g, b, i}`` -- the same
8-byte layout as ``POINT_DTYPE``, so frames are passed to the library
straight from the numpy buffer without copying point by point.

Build notes for the vendor library (Raspberry Pi)::

    g++ -Wall -fPIC -O2 -c HeliosDacClass.cpp HeliosDac.cpp HeliosDacAPI.cpp
    g++ -shared -o libHeliosDacAPI.so HeliosDacAPI.o HeliosDac.o \\
        HeliosDacClass.o -lusb-1.0
"""

from __future__ import annotations

import ctypes
import logging
from typing import Any

import numpy as np

from laser_clock.hardware.device import DeviceError, FrameSink
from laser_clock.render.point_buffer import POINT_DTYPE

logger = logging.getLogger(__name__)


class HeliosPoint(ctypes.Structure):
    """Vendor point struct; must match ``POINT_DTYPE`` byte for byte."""

    _fields_ = [
        ("x", ctypes.c_uint16),
        ("y", ctypes.c_uint16),
        ("r", ctypes.c_uint8),
        ("g", ctypes.c_uint8),
        ("b", ctypes.c_uint8),
        ("i", ctypes.c_uint8),
    ]


def load_library(path: str) -> Any:
    """Load the vendor shared library and declare the used signatures.

    Raises
    ------
    DeviceError
        If the library cannot be loaded.
    """
    try:
        lib = ctypes.CDLL(path)
    except OSError as exc:
        raise DeviceError(f"Cannot load Helios library {path!r}: {exc}") from exc

    lib.OpenDevices.restype = ctypes.c_int
    lib.OpenDevices.argtypes = []
    lib.CloseDevices.restype = ctypes.c_int
    lib.CloseDevices.argtypes = []
    lib.GetStatus.restype = ctypes.c_int
    lib.GetStatus.argtypes = [ctypes.c_uint]
    lib.WriteFrame.restype = ctypes.c_int
    lib.WriteFrame.argtypes = [
        ctypes.c_uint,
        ctypes.c_int,
        ctypes.c_int,
        ctypes.POINTER(HeliosPoint),
        ctypes.c_int,
    ]
    return lib


class HeliosDacSink(FrameSink):
    """Frame sink driving Helios DACs over USB.

    Parameters
    ----------
    library : str
        Path or soname of ``libHeliosDacAPI``.
    lib : Any
        Already-loaded library object.  Skips ``load_library`` (tests).

    Examples
    --------
    >>> with HeliosDacSink("libHeliosDacAPI.so") as sink:
    ...     count = sink.open_devices()
    """

    def __init__(self, library: str = "libHeliosDacAPI.so", lib: Any = None) -> None:
        self.library = library
        self._lib = lib
        self._opened = False

    @property
    def lib(self) -> Any:
        if self._lib is None:
            self._lib = load_library(self.library)
        return self._lib

    def open_devices(self) -> int:
        count = int(self.lib.OpenDevices())
        self._opened = True
        logger.info("Helios: %d device(s) found", max(count, 0))
        return count

    def is_ready(self, device_index: int) -> bool:
        status = int(self.lib.GetStatus(device_index))
        if status < 0:
            raise DeviceError(
                f"GetStatus({device_index}) failed with code {status}"
            )
        return status == 1

    def write_frame(
        self,
        device_index: int,
        points_per_second: int,
        flags: int,
        points: np.ndarray,
    ) -> None:
        if points.dtype != POINT_DTYPE:
            raise DeviceError(
                f"Expected point dtype {POINT_DTYPE}, got {points.dtype}"
            )
        frame = np.ascontiguousarray(points)
        ptr = frame.ctypes.data_as(ctypes.POINTER(HeliosPoint))
        result = int(
            self.lib.WriteFrame(
                device_index, points_per_second, flags, ptr, len(frame),
            )
        )
        if result < 0:
            raise DeviceError(
                f"WriteFrame({device_index}) failed with code {result}"
            )

    def close(self) -> None:
        if self._opened and self._lib is not None:
            self._lib.CloseDevices()
            self._opened = False
            logger.info("Helios: devices closed")
