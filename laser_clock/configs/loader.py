"""Configuration loader for the laser clock.

Loads ``clock.yaml``, validates it against the pydantic schema in
``laser_clock.utils.validators`` and returns typed, frozen dataclasses.
Every render and device parameter comes from the config; command-line
options override individual render fields through
``RenderConfig.with_overrides``.

Usage::

    from laser_clock.configs.loader import load_config
    cfg = load_config()                      # default path
    cfg = load_config("/custom/clock.yaml")  # explicit path
    render = cfg.render.with_overrides(size=300, color=None)
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from laser_clock.utils.validators import ClockConfigV1, load_clock_config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderConfig:
    """Per-frame render parameters.  Constant during one frame."""

    size: int = 250
    dwell: int = 10
    hidden_dwell: int = 15
    xpos: int = 0
    ypos: int = 2000
    color: int = 1
    divider: float = 50.0
    max_points: int = 10000

    def with_overrides(self, **overrides: Any) -> RenderConfig:
        """Return a copy with the non-``None`` *overrides* applied.

        Raises
        ------
        ConfigError
            On an unknown field or a value that fails validation.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(values) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"Unknown render option(s): {sorted(unknown)}")
        updated = dataclasses.replace(self, **values)
        _validate_render(updated)
        return updated


@dataclass(frozen=True)
class DeviceConfig:
    """Frame sink settings."""

    library: str = "libHeliosDacAPI.so"
    device_index: int = 0
    points_per_second: int = 30000
    flags: int = 0
    ready_timeout_s: float = 1.0
    ready_poll_interval_s: float = 0.0005
    max_consecutive_timeouts: int = 10


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings passed to ``setup_logging``."""

    level: str = "INFO"
    file: str | None = None
    json: bool = False
    color: bool = True


@dataclass(frozen=True)
class ClockConfig:
    """Complete clock configuration loaded from ``clock.yaml``."""

    render: RenderConfig
    device: DeviceConfig
    logging: LoggingConfig


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_render(cfg: RenderConfig) -> None:
    """Check the render fields that overrides can break.

    Raises
    ------
    ConfigError
        On any invalid value.
    """
    if cfg.size <= 0:
        raise ConfigError(f"size must be > 0, got {cfg.size}")
    if cfg.divider <= 0:
        raise ConfigError(f"divider must be > 0, got {cfg.divider}")
    if cfg.dwell < 0 or cfg.hidden_dwell < 0:
        raise ConfigError(
            f"dwell and hidden_dwell must be >= 0, "
            f"got {cfg.dwell}/{cfg.hidden_dwell}"
        )
    if cfg.max_points < 1:
        raise ConfigError(f"max_points must be >= 1, got {cfg.max_points}")

    # Rightmost digit edge and top of the digits
    right = cfg.xpos + 11 * cfg.size
    if right > 4095 or cfg.ypos > 4095 or cfg.ypos - 2 * cfg.size < 0:
        logger.warning(
            "Layout exceeds the 0..4095 field (x up to %d, y %d..%d); "
            "points will be clipped",
            right,
            cfg.ypos - 2 * cfg.size,
            cfg.ypos,
        )


def _from_schema(model: ClockConfigV1) -> ClockConfig:
    r = model.render
    d = model.device
    lg = model.logging
    render = RenderConfig(
        size=r.size,
        dwell=r.dwell,
        hidden_dwell=r.hidden_dwell,
        xpos=r.xpos,
        ypos=r.ypos,
        color=r.color,
        divider=float(r.divider),
        max_points=r.max_points,
    )
    _validate_render(render)
    return ClockConfig(
        render=render,
        device=DeviceConfig(
            library=d.library,
            device_index=d.device_index,
            points_per_second=d.points_per_second,
            flags=d.flags,
            ready_timeout_s=float(d.ready_timeout_s),
            ready_poll_interval_s=float(d.ready_poll_interval_s),
            max_consecutive_timeouts=d.max_consecutive_timeouts,
        ),
        logging=LoggingConfig(
            level=lg.level,
            file=lg.file,
            json=lg.json_format,
            color=lg.color,
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_config_path() -> Path:
    """Path of the ``clock.yaml`` shipped alongside this module."""
    return Path(__file__).parent / "clock.yaml"


def load_config(path: str | Path | None = None) -> ClockConfig:
    """Load and validate the clock configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``clock.yaml``.  ``None`` loads the shipped default.

    Returns
    -------
    ClockConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = default_config_path() if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        model = load_clock_config(path)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigError(str(exc)) from exc

    config = _from_schema(model)
    logger.info("Configuration loaded successfully")
    return config
