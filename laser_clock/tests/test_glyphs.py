"""Tests for the digit and marker glyph tables."""

from __future__ import annotations

import pytest

from laser_clock.glyphs import DIGIT_GLYPHS, circle, digit, square
from laser_clock.glyphs.digits import eight, nine, one, zero
from laser_clock.path_ir.commands import DrawCommand, blank_to, line_to
from laser_clock.render.path_renderer import PathRenderer
from laser_clock.render.point_buffer import PointBuffer


class TestDigits:
    @pytest.mark.parametrize("n", range(10))
    def test_starts_with_blank_move(self, n: int) -> None:
        glyph = digit(n, 0, 2000, 1, 250)
        assert glyph[0].is_blank
        assert not glyph[-1].is_blank

    @pytest.mark.parametrize("n", range(10))
    def test_stays_inside_box(self, n: int) -> None:
        for cmd in digit(n, 100, 1000, 1, 250):
            assert 100 <= cmd.x <= 350
            assert 500 <= cmd.y <= 1000

    @pytest.mark.parametrize("n", range(10))
    def test_strokes_use_requested_color(self, n: int) -> None:
        glyph = digit(n, 0, 2000, 5, 250)
        assert {cmd.color for cmd in glyph if not cmd.is_blank} == {5}

    def test_zero_outline(self) -> None:
        assert zero(0, 2000, 1, 250) == [
            blank_to(0, 2000),
            line_to(250, 2000, 1),
            line_to(250, 1500, 1),
            line_to(0, 1500, 1),
            line_to(0, 2000, 1),
        ]

    def test_one_has_double_blank_start(self) -> None:
        glyph = one(0, 2000, 1, 250)
        assert glyph[0] == glyph[1] == blank_to(250, 2000)
        assert glyph[2] == line_to(250, 1500, 1)

    def test_eight_reenters_middle_bar(self) -> None:
        glyph = eight(0, 2000, 1, 250)
        assert glyph[-2] == blank_to(0, 1750)
        assert glyph[-1] == line_to(250, 1750, 1)

    def test_nine_starts_bottom_right(self) -> None:
        assert nine(0, 2000, 1, 250)[0] == blank_to(250, 1500)

    def test_eight_cursor_ends_on_middle_bar(self) -> None:
        r = PathRenderer(PointBuffer())
        r.run(digit(8, 0, 2000, 1, 250))
        assert r.cursor == (250, 1750)

    @pytest.mark.parametrize("n", [-1, 10, 42])
    def test_out_of_range_is_empty(self, n: int) -> None:
        assert digit(n, 0, 0, 1, 250) == []

    def test_table_complete(self) -> None:
        assert sorted(DIGIT_GLYPHS) == list(range(10))

    def test_deterministic(self) -> None:
        assert digit(6, 10, 20, 3, 99) == digit(6, 10, 20, 3, 99)


class TestSquare:
    def test_corners(self) -> None:
        assert square(875, 1875, 1, 25) == [
            blank_to(863, 1863),
            line_to(888, 1863, 1),
            line_to(888, 1888, 1),
            line_to(863, 1888, 1),
            line_to(863, 1863, 1),
        ]

    def test_closed(self) -> None:
        glyph = square(100, 100, 2, 10)
        assert (glyph[0].x, glyph[0].y) == (glyph[-1].x, glyph[-1].y)


class TestCircle:
    def test_quarter_steps(self) -> None:
        glyph = circle(500, 500, 1, 100, step_deg=90.0)

        # -45, 45, 135, 225, 315
        assert len(glyph) == 6
        assert glyph[0] == blank_to(600, 500)
        assert glyph[1] == line_to(570, 430, 1)
        assert glyph[2] == line_to(570, 570, 1)
        assert glyph[-1] == DrawCommand(570, 430, 1)

    def test_default_step_sample_count(self) -> None:
        # One blank move plus samples from -5 to 355 degrees
        assert len(circle(0, 0, 1, 50)) == 1 + 37

    def test_points_on_radius(self) -> None:
        for cmd in circle(1000, 1000, 2, 200)[1:]:
            d = ((cmd.x - 1000) ** 2 + (cmd.y - 1000) ** 2) ** 0.5
            assert 198 <= d <= 201

    def test_invalid_step(self) -> None:
        with pytest.raises(ValueError):
            circle(0, 0, 1, 10, step_deg=0)
