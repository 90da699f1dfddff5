"""Tests for the point buffer.

Validates clamping, capacity handling, colour resolution and the wire
format of exported frames.
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from laser_clock.render.point_buffer import MAX_POINTS, POINT_DTYPE, PointBuffer


class TestEmit:
    def test_returns_sequential_indices(self) -> None:
        buf = PointBuffer()
        assert buf.emit(10, 20, 1) == 0
        assert buf.emit(30, 40, 1) == 1
        assert len(buf) == 2

    def test_stores_color_and_intensity(self) -> None:
        buf = PointBuffer()
        buf.emit(100, 200, 4)
        p = buf[0]
        assert (p.x, p.y) == (100, 200)
        assert (p.r, p.g, p.b, p.i) == (255, 255, 0, 255)

    def test_blank_point_keeps_max_intensity(self) -> None:
        buf = PointBuffer()
        buf.emit(0, 2000, 0)
        p = buf[0]
        assert (p.r, p.g, p.b) == (0, 0, 0)
        assert p.i == 255

    def test_fractions_truncate_toward_zero(self) -> None:
        buf = PointBuffer()
        buf.emit(10.9, 20.2, 1)
        buf.emit(-0.5, 3.999, 1)
        assert (buf[0].x, buf[0].y) == (10, 20)
        assert (buf[1].x, buf[1].y) == (0, 3)
        assert buf.clipped == 0

    def test_default_capacity(self) -> None:
        assert PointBuffer().capacity == MAX_POINTS == 10000

    def test_invalid_capacity(self) -> None:
        with pytest.raises(ValueError):
            PointBuffer(0)


class TestClamping:
    def test_x_above_range(self, caplog: pytest.LogCaptureFixture) -> None:
        buf = PointBuffer()
        with caplog.at_level(logging.WARNING):
            buf.emit(5000, 100, 1)
        assert buf[0].x == 4095
        assert buf[0].y == 100
        assert buf.clipped == 1
        assert "Clipping x=5000" in caplog.text

    def test_negative_coordinates(self) -> None:
        buf = PointBuffer()
        buf.emit(-20, -1, 1)
        assert (buf[0].x, buf[0].y) == (0, 0)
        assert buf.clipped == 2

    def test_axes_clamped_independently(self) -> None:
        buf = PointBuffer()
        buf.emit(4095, 4096, 1)
        assert (buf[0].x, buf[0].y) == (4095, 4095)
        assert buf.clipped == 1

    def test_only_first_clip_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        buf = PointBuffer()
        with caplog.at_level(logging.WARNING):
            for _ in range(5):
                buf.emit(9999, 0, 1)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert buf.clipped == 5


class TestCapacity:
    def test_full_rejects_without_corruption(self) -> None:
        buf = PointBuffer(capacity=3)
        for i in range(3):
            assert buf.emit(i, i, 1) == i
        before = buf.points

        assert buf.is_full
        assert buf.emit(99, 99, 2) is None
        assert buf.emit(100, 100, 3) is None

        assert len(buf) == 3
        assert buf.points == before
        assert buf.dropped == 2
        assert buf.truncated

    def test_reset_clears_state(self) -> None:
        buf = PointBuffer(capacity=1)
        buf.emit(5000, 0, 1)
        buf.emit(0, 0, 1)
        buf.reset()
        assert len(buf) == 0
        assert buf.clipped == 0
        assert buf.dropped == 0
        assert not buf.truncated
        assert buf.emit(1, 1, 1) == 0


class TestExport:
    def test_dtype_layout(self) -> None:
        assert POINT_DTYPE.itemsize == 8
        assert POINT_DTYPE.names == ("x", "y", "r", "g", "b", "i")

    def test_to_array(self) -> None:
        buf = PointBuffer()
        buf.emit(1, 2, 1)
        buf.emit(4095, 0, 0)
        arr = buf.to_array()
        assert arr.dtype == POINT_DTYPE
        assert arr.shape == (2,)
        assert arr[1]["x"] == 4095
        assert arr[0]["r"] == 255

    def test_to_bytes_little_endian(self) -> None:
        buf = PointBuffer()
        buf.emit(1, 2, 1)
        assert buf.to_bytes() == b"\x01\x00\x02\x00\xff\x00\x00\xff"

    def test_empty_export(self) -> None:
        arr = PointBuffer().to_array()
        assert arr.dtype == POINT_DTYPE
        assert len(arr) == 0
        assert isinstance(arr, np.ndarray)
