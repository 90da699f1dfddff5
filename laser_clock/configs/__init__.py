"""Clock configuration loading and validation."""

from laser_clock.configs.loader import (
    ClockConfig,
    ConfigError,
    DeviceConfig,
    LoggingConfig,
    RenderConfig,
    default_config_path,
    load_config,
)

__all__ = [
    "ClockConfig",
    "ConfigError",
    "DeviceConfig",
    "LoggingConfig",
    "RenderConfig",
    "default_config_path",
    "load_config",
]
