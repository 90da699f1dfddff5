"""Tests for the Helios DAC binding against a mocked vendor library."""

from __future__ import annotations

import ctypes
from unittest.mock import MagicMock

import numpy as np
import pytest

from laser_clock.hardware.device import DeviceError
from laser_clock.hardware.helios_dac import HeliosDacSink, HeliosPoint, load_library
from laser_clock.render.point_buffer import POINT_DTYPE, PointBuffer


@pytest.fixture()
def lib() -> MagicMock:
    mock = MagicMock()
    mock.OpenDevices.return_value = 1
    mock.GetStatus.return_value = 1
    mock.WriteFrame.return_value = 1
    mock.CloseDevices.return_value = 0
    return mock


class TestPointLayout:
    def test_struct_matches_dtype(self) -> None:
        assert ctypes.sizeof(HeliosPoint) == POINT_DTYPE.itemsize == 8

    def test_bytes_reinterpret_as_struct(self) -> None:
        buf = PointBuffer()
        buf.emit(4095, 17, 6)
        point = HeliosPoint.from_buffer_copy(buf.to_bytes())
        assert (point.x, point.y) == (4095, 17)
        assert (point.r, point.g, point.b, point.i) == (0, 255, 255, 255)


class TestHeliosDacSink:
    def test_open_devices(self, lib: MagicMock) -> None:
        lib.OpenDevices.return_value = 2
        assert HeliosDacSink(lib=lib).open_devices() == 2

    @pytest.mark.parametrize(("status", "ready"), [(1, True), (0, False)])
    def test_is_ready(self, lib: MagicMock, status: int, ready: bool) -> None:
        lib.GetStatus.return_value = status
        assert HeliosDacSink(lib=lib).is_ready(0) is ready
        lib.GetStatus.assert_called_with(0)

    def test_status_error(self, lib: MagicMock) -> None:
        lib.GetStatus.return_value = -1
        with pytest.raises(DeviceError, match="GetStatus"):
            HeliosDacSink(lib=lib).is_ready(0)

    def test_write_frame(self, lib: MagicMock) -> None:
        buf = PointBuffer()
        buf.emit(10, 20, 1)
        buf.emit(30, 40, 0)

        frame = buf.to_array()
        HeliosDacSink(lib=lib).write_frame(0, 30000, 0, frame)

        args = lib.WriteFrame.call_args.args
        assert args[:3] == (0, 30000, 0)
        assert args[4] == 2
        assert (args[3][1].x, args[3][1].y) == (30, 40)

    def test_write_frame_error(self, lib: MagicMock) -> None:
        lib.WriteFrame.return_value = -2
        with pytest.raises(DeviceError, match="WriteFrame"):
            HeliosDacSink(lib=lib).write_frame(0, 30000, 0, np.zeros(1, POINT_DTYPE))

    def test_write_frame_wrong_dtype(self, lib: MagicMock) -> None:
        with pytest.raises(DeviceError):
            HeliosDacSink(lib=lib).write_frame(0, 30000, 0, np.zeros(8, np.uint8))
        lib.WriteFrame.assert_not_called()

    def test_close_only_after_open(self, lib: MagicMock) -> None:
        sink = HeliosDacSink(lib=lib)
        sink.close()
        lib.CloseDevices.assert_not_called()

        sink.open_devices()
        sink.close()
        sink.close()
        lib.CloseDevices.assert_called_once()

    def test_context_manager(self, lib: MagicMock) -> None:
        with HeliosDacSink(lib=lib) as sink:
            sink.open_devices()
        lib.CloseDevices.assert_called_once()


class TestLoadLibrary:
    def test_missing_library(self, tmp_path) -> None:
        with pytest.raises(DeviceError, match="Cannot load"):
            load_library(str(tmp_path / "libmissing.so"))

    def test_lazy_load_error(self, tmp_path) -> None:
        sink = HeliosDacSink(str(tmp_path / "libmissing.so"))
        with pytest.raises(DeviceError):
            sink.open_devices()
