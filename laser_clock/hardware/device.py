"""Frame sink interface and readiness handling.

A sink is anything that accepts whole frames of points: the Helios DAC
binding in production, ``RecordingSink`` for dry runs and tests.

Readiness
---------
Devices accept a new frame only after the previous one has been
scanned.  ``wait_until_ready`` polls ``is_ready`` until it reports
``True`` or a deadline passes, then raises ``DeviceNotReady``.  The
caller decides whether to retry.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from laser_clock.render.point_buffer import POINT_DTYPE

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DeviceError(Exception):
    """Base exception for all frame-sink errors."""

    pass


class NoDeviceFound(DeviceError):
    """No output device was discovered at startup."""

    pass


class DeviceNotReady(DeviceError):
    """Device did not become ready within the allotted time."""

    pass


# ---------------------------------------------------------------------------
# Sink interface
# ---------------------------------------------------------------------------


class FrameSink(ABC):
    """Output device that scans complete frames."""

    @abstractmethod
    def open_devices(self) -> int:
        """Discover and open devices; return how many were found."""

    @abstractmethod
    def is_ready(self, device_index: int) -> bool:
        """``True`` when *device_index* can take a new frame."""

    @abstractmethod
    def write_frame(
        self,
        device_index: int,
        points_per_second: int,
        flags: int,
        points: np.ndarray,
    ) -> None:
        """Transmit one frame of ``POINT_DTYPE`` points."""

    def close(self) -> None:
        """Release devices.  Default: nothing to release."""

    def __enter__(self) -> FrameSink:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def wait_until_ready(
    sink: FrameSink,
    device_index: int,
    timeout_s: float,
    poll_interval_s: float = 0.0005,
) -> None:
    """Block until *device_index* is ready.

    Raises
    ------
    DeviceNotReady
        If the device is still busy after *timeout_s* seconds.
    """
    deadline = time.monotonic() + timeout_s
    while not sink.is_ready(device_index):
        if time.monotonic() > deadline:
            raise DeviceNotReady(
                f"Device {device_index} not ready after {timeout_s}s"
            )
        if poll_interval_s > 0:
            time.sleep(poll_interval_s)


# ---------------------------------------------------------------------------
# In-memory sink
# ---------------------------------------------------------------------------


@dataclass
class WrittenFrame:
    """One frame captured by ``RecordingSink``."""

    device_index: int
    points_per_second: int
    flags: int
    points: np.ndarray


@dataclass
class RecordingSink(FrameSink):
    """Sink that keeps frames in memory instead of driving hardware.

    Parameters
    ----------
    device_count : int
        Value returned by ``open_devices``.  ``0`` simulates a missing
        device.
    busy_polls : int
        Number of ``is_ready`` calls answering ``False`` before each
        frame is accepted.  Negative means never ready.
    max_frames : int | None
        Keep only the most recent *max_frames* frames.
    """

    device_count: int = 1
    busy_polls: int = 0
    max_frames: int | None = None
    frames: list[WrittenFrame] = field(default_factory=list)
    writes: int = 0
    closed: bool = False
    _busy_left: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._busy_left = self.busy_polls

    def open_devices(self) -> int:
        self.closed = False
        return self.device_count

    def is_ready(self, device_index: int) -> bool:
        if self.busy_polls < 0:
            return False
        if self._busy_left > 0:
            self._busy_left -= 1
            return False
        return True

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
        self.frames.append(
            WrittenFrame(device_index, points_per_second, flags, points.copy())
        )
        if self.max_frames is not None and len(self.frames) > self.max_frames:
            del self.frames[0]
        self.writes += 1
        self._busy_left = self.busy_polls

    def close(self) -> None:
        self.closed = True
