"""YAML schema validation for the clock configuration.

Validates ``clock.yaml`` with pydantic before the loader turns it into
frozen dataclasses, so bad values fail fast with the offending key and
the expected range.

Units:
    - Geometry: DAC units, [0, 4095] per axis (layout may exceed it;
      the point buffer clamps)
    - Rate: points per second
    - Time: seconds

Usage:
    from laser_clock.utils import validators
    cfg = validators.load_clock_config("clock.yaml")
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# CLOCK SCHEMA V1
# ============================================================================

class RenderSection(BaseModel):
    """Digit layout and beam timing."""
    model_config = ConfigDict(extra="forbid")

    size: int = Field(250, gt=0, description="Digit width; height is 2 * size")
    dwell: int = Field(10, ge=0, description="End-point repeats for visible strokes")
    hidden_dwell: int = Field(15, ge=0, description="End-point repeats for blanked moves")
    xpos: int = Field(0, description="Left edge of the first digit")
    ypos: int = Field(2000, description="Top edge of the digits")
    color: int = Field(1, description="Palette selector 1-7; other values draw white")
    divider: float = Field(50.0, gt=0.0, description="Max chord length per segment")
    max_points: int = Field(10000, ge=1, description="Point budget per frame")


class DeviceSection(BaseModel):
    """Frame sink parameters."""
    model_config = ConfigDict(extra="forbid")

    library: str = Field("libHeliosDacAPI.so", description="Vendor shared library")
    device_index: int = Field(0, ge=0)
    points_per_second: int = Field(30000, gt=0, description="DAC scan rate")
    flags: int = Field(0, ge=0)
    ready_timeout_s: float = Field(1.0, gt=0.0, description="Bound on each readiness wait")
    ready_poll_interval_s: float = Field(0.0005, ge=0.0)
    max_consecutive_timeouts: int = Field(10, ge=1)


class LoggingSection(BaseModel):
    """Console / file logging."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    level: str = Field("INFO")
    file: Optional[str] = Field(None, description="Log file path; None disables")
    json_format: bool = Field(False, alias="json")
    color: bool = Field(True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log level must be one of {sorted(allowed)}, got '{v}'")
        return v.upper()


class ClockConfigV1(BaseModel):
    """Complete clock configuration (clock.v1.yaml schema)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field("clock.v1", alias="schema")
    render: RenderSection = Field(default_factory=RenderSection)
    device: DeviceSection = Field(default_factory=DeviceSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "clock.v1":
            raise ValueError(f"Expected schema 'clock.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_clock_config(path: Union[str, Path]) -> ClockConfigV1:
    """Load and validate clock config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to clock.yaml

    Returns
    -------
    ClockConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Clock config not found: {path}")

    data = fs.load_yaml(path)
    if data is None:
        raise ValueError(f"Empty clock config: {path}")
    try:
        return ClockConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Clock config validation failed at {path}: {e}") from e
