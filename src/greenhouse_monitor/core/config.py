"""Pydantic configuration models for a greenhouse monitoring session.

Configuration can be loaded from YAML or JSON files and replaces the
interactive setup questions of ``ghmon run``.

The configuration hierarchy:
- MonitorConfig (top-level)
  - ThresholdSettings (optional override of the soil preset)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from greenhouse_monitor.core.settings import SoilType, ThresholdSettings
from greenhouse_monitor.simulation.engine import DEFAULT_TICK_DELAY
from greenhouse_monitor.simulation.presets import get_preset


class MonitorConfig(BaseModel):
    """Top-level session configuration."""

    model_config = ConfigDict(extra="forbid")

    user_name: str = Field(default="Grower")
    greenhouse_name: str = Field(default="Greenhouse")
    soil_type: SoilType = Field(default=SoilType.LOAMY)
    thresholds: ThresholdSettings | None = Field(
        default=None, description="Overrides the soil preset when set"
    )
    tick_delay: float = Field(
        default=DEFAULT_TICK_DELAY,
        ge=0,
        description="Real-time pause per tick in seconds",
    )
    seed: int | None = Field(default=None, description="Sensor RNG seed")

    @field_validator("soil_type", mode="before")
    @classmethod
    def normalize_soil_type(cls, v: Any) -> Any:
        """Accept soil names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def resolve_thresholds(self) -> ThresholdSettings:
        """Thresholds in effect: the override, or the soil preset."""
        if self.thresholds is not None:
            return self.thresholds.model_copy()
        return get_preset(self.soil_type)


def load_config(path: str | Path) -> MonitorConfig:
    """Load session configuration from YAML or JSON file.

    Args:
        path: Path to configuration file.

    Returns:
        Validated MonitorConfig object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If configuration is invalid.
    """
    path = Path(path)

    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    return MonitorConfig.model_validate(data or {})


def save_config(config: MonitorConfig, path: str | Path) -> None:
    """Save session configuration to YAML or JSON file.

    Args:
        config: Configuration to save.
        path: Output file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("w") as f:
        if path.suffix in (".yaml", ".yml"):
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def validate_config(data: dict[str, Any]) -> MonitorConfig:
    """Validate configuration data without loading from file.

    Args:
        data: Configuration dictionary.

    Returns:
        Validated MonitorConfig object.

    Raises:
        ValueError: If configuration is invalid.
    """
    return MonitorConfig.model_validate(data)
