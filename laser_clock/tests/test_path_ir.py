"""Tests for the path IR: commands, beam points and the colour palette."""

from __future__ import annotations

import dataclasses

import pytest

from laser_clock.path_ir.commands import (
    PALETTE,
    BeamPoint,
    Color,
    DrawCommand,
    blank_to,
    color_to_rgb,
    line_to,
    resolve_color,
)


class TestPalette:
    @pytest.mark.parametrize(
        ("selector", "rgb"),
        [
            (0, (0, 0, 0)),
            (1, (255, 0, 0)),
            (2, (0, 255, 0)),
            (3, (0, 0, 255)),
            (4, (255, 255, 0)),
            (5, (255, 0, 255)),
            (6, (0, 255, 255)),
            (7, (255, 255, 255)),
        ],
    )
    def test_fixed_table(self, selector: int, rgb: tuple[int, int, int]) -> None:
        assert color_to_rgb(selector) == rgb

    @pytest.mark.parametrize("selector", [8, 42, -1, 255])
    def test_out_of_range_falls_back_to_white(self, selector: int) -> None:
        assert resolve_color(selector) is Color.WHITE
        assert color_to_rgb(selector) == (255, 255, 255)

    def test_palette_covers_every_color(self) -> None:
        assert set(PALETTE) == set(Color)


class TestDrawCommand:
    def test_blank_helper(self) -> None:
        cmd = blank_to(10, 20)
        assert cmd == DrawCommand(10, 20, 0)
        assert cmd.is_blank

    def test_line_helper(self) -> None:
        cmd = line_to(10, 20, Color.CYAN)
        assert cmd.color == 6
        assert not cmd.is_blank

    def test_immutable(self) -> None:
        cmd = line_to(1, 2, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cmd.x = 5  # type: ignore[misc]

    def test_coordinates_not_clamped(self) -> None:
        cmd = line_to(-50, 9000, 1)
        assert (cmd.x, cmd.y) == (-50, 9000)


class TestBeamPoint:
    def test_default_intensity_is_max(self) -> None:
        assert BeamPoint(0, 0, 0, 0, 0).i == 255

    def test_blank_detection(self) -> None:
        assert BeamPoint(1, 1, 0, 0, 0).is_blank
        assert not BeamPoint(1, 1, 0, 0, 255).is_blank
