"""
Hardware communication module.

Provides the frame-sink interface, the Helios DAC binding and the
clock runner that replays frames on the device.
"""

from laser_clock.hardware.device import (
    DeviceError,
    DeviceNotReady,
    FrameSink,
    NoDeviceFound,
    RecordingSink,
    wait_until_ready,
)
from laser_clock.hardware.frame_loop import ClockRunner, RunnerState, RunnerStats
from laser_clock.hardware.helios_dac import HeliosDacSink

__all__ = [
    "ClockRunner",
    "DeviceError",
    "DeviceNotReady",
    "FrameSink",
    "HeliosDacSink",
    "NoDeviceFound",
    "RecordingSink",
    "RunnerState",
    "RunnerStats",
    "wait_until_ready",
]
