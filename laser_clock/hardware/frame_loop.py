"""Clock runner -- compose a frame per second, replay it until rollover.

Loop
----
1. Read the wall clock and compose ``HH:MM:SS`` into a frame.
2. Until the clock second changes: wait for the device to be ready
   (bounded wait), then write the same frame again.  Replaying one
   frame at the DAC's native rate keeps the image persistent.
3. Recompose on rollover.

Everything runs on the calling thread.  ``stop()`` may be called from a
signal handler or another thread; the loop exits at the next frame
write.

Readiness timeouts are recoverable: the frame is retried.  After
``device.max_consecutive_timeouts`` timeouts in a row the runner gives
up and re-raises ``DeviceNotReady``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

import numpy as np

from laser_clock.compose.frame import FrameComposer
from laser_clock.configs.loader import ClockConfig
from laser_clock.hardware.device import (
    DeviceNotReady,
    FrameSink,
    NoDeviceFound,
    wait_until_ready,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


class RunnerState(Enum):
    """Current clock-runner state."""

    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()
    ERROR = auto()


@dataclass
class RunnerStats:
    """Counters since the runner was created."""

    frames_composed: int = 0
    transmissions: int = 0
    timeouts: int = 0
    last_frame_points: int = 0


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class ClockRunner:
    """Drive a frame sink with the current time.

    Parameters
    ----------
    sink : FrameSink
        Output device (Helios DAC or an in-memory sink).
    config : ClockConfig
        Render and device settings.
    clock : Callable[[], datetime]
        Wall-clock source; local time by default.
    """

    def __init__(
        self,
        sink: FrameSink,
        config: ClockConfig,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._sink = sink
        self._cfg = config
        self._clock = clock
        self._composer = FrameComposer(config.render)
        self._stop = threading.Event()
        self._state = RunnerState.IDLE
        self._consecutive_timeouts = 0
        self.stats = RunnerStats()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> RunnerState:
        return self._state

    def start(self) -> int:
        """Open the output devices.

        Returns
        -------
        int
            Number of devices found.

        Raises
        ------
        NoDeviceFound
            If no device is present.
        """
        count = self._sink.open_devices()
        if count < 1:
            self._state = RunnerState.ERROR
            raise NoDeviceFound("No laser DAC found")
        dev = self._cfg.device
        if dev.device_index >= count:
            self._state = RunnerState.ERROR
            raise NoDeviceFound(
                f"Device index {dev.device_index} requested, "
                f"only {count} device(s) found"
            )
        logger.info("Opened %d device(s), using index %d", count, dev.device_index)
        return count

    def stop(self) -> None:
        """Request the loop to exit after the current write."""
        self._stop.set()

    def close(self) -> None:
        """Release the sink."""
        self._sink.close()
        if self._state == RunnerState.RUNNING:
            self._state = RunnerState.STOPPED

    def __enter__(self) -> ClockRunner:
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def compose(self, moment: datetime) -> np.ndarray:
        """Compose *moment* and return a snapshot of the frame."""
        buffer = self._composer.compose_time(moment)
        frame = buffer.to_array()
        self.stats.frames_composed += 1
        self.stats.last_frame_points = len(frame)
        return frame

    def transmit(self, frame: np.ndarray) -> bool:
        """Wait for readiness and write *frame* once.

        Returns
        -------
        bool
            ``False`` if the device timed out and the frame was skipped.

        Raises
        ------
        DeviceNotReady
            When the consecutive-timeout limit is reached.
        """
        dev = self._cfg.device
        try:
            wait_until_ready(
                self._sink,
                dev.device_index,
                dev.ready_timeout_s,
                dev.ready_poll_interval_s,
            )
        except DeviceNotReady as exc:
            self.stats.timeouts += 1
            self._consecutive_timeouts += 1
            if self._consecutive_timeouts >= dev.max_consecutive_timeouts:
                self._state = RunnerState.ERROR
                logger.error(
                    "Giving up after %d consecutive readiness timeouts",
                    self._consecutive_timeouts,
                )
                raise
            logger.warning("%s; retrying", exc)
            return False

        self._consecutive_timeouts = 0
        self._sink.write_frame(
            dev.device_index, dev.points_per_second, dev.flags, frame,
        )
        self.stats.transmissions += 1
        return True

    def run(self, max_frames: int | None = None) -> RunnerStats:
        """Run the clock loop.

        Parameters
        ----------
        max_frames : int | None
            Stop after composing this many frames.  ``None`` runs until
            ``stop()`` is called.

        Returns
        -------
        RunnerStats
            Counters at exit.
        """
        self._stop.clear()
        self._state = RunnerState.RUNNING
        composed = 0

        while not self._stop.is_set():
            now = self._clock()
            frame = self.compose(now)
            composed += 1
            logger.info(
                "now: %d-%d-%d %02d:%02d:%02d (%d points)",
                now.year,
                now.month,
                now.day,
                now.hour,
                now.minute,
                now.second,
                len(frame),
            )

            second = now.second
            while second == now.second and not self._stop.is_set():
                now = self._clock()
                self.transmit(frame)

            if max_frames is not None and composed >= max_frames:
                break

        self._state = RunnerState.STOPPED
        return self.stats
