"""Shared fixtures for the laser clock tests."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import pytest

from laser_clock.configs.loader import (
    ClockConfig,
    DeviceConfig,
    LoggingConfig,
    RenderConfig,
)
from laser_clock.utils import logging_config


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers and context left behind by setup_logging()."""
    yield
    root = logging.getLogger()
    for handler in list(logging_config._handlers):
        root.removeHandler(handler)
        handler.close()
    logging_config._handlers.clear()
    logging_config.pop_context()


class FakeClock:
    """Wall clock that advances by ``step`` on every call."""

    def __init__(self, start: datetime, step: timedelta) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        self.calls += 1
        return current


@pytest.fixture()
def render_config() -> RenderConfig:
    """Reference layout: size 250 at (0, 2000), red, divider 50."""
    return RenderConfig(
        size=250,
        dwell=10,
        hidden_dwell=15,
        xpos=0,
        ypos=2000,
        color=1,
        divider=50.0,
    )


@pytest.fixture()
def clock_config(render_config: RenderConfig) -> ClockConfig:
    return ClockConfig(
        render=render_config,
        device=DeviceConfig(
            ready_timeout_s=0.05,
            ready_poll_interval_s=0.0,
            max_consecutive_timeouts=3,
        ),
        logging=LoggingConfig(),
    )


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 18, 12, 0, 0), timedelta(milliseconds=250))
