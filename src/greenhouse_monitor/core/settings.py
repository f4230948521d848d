"""Threshold settings and plant climate requirements.

- SoilType: Soil categories offered when setting up a greenhouse
- ThresholdSettings: Temperature and humidity ranges used by the policy
- Plant: Climate requirements of a recommended crop
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SoilType(str, Enum):
    """Supported soil types."""

    LOAMY = "loamy"
    SANDY = "sandy"
    CLAY = "clay"
    SILT = "silt"

    @property
    def label(self) -> str:
        """Human-readable soil name."""
        return self.value.capitalize()

    @classmethod
    def from_choice(cls, choice: str) -> SoilType:
        """Resolve a menu number (1-4) or soil name.

        Args:
            choice: "1".."4" or a soil name in any case.

        Returns:
            The matching soil type.

        Raises:
            ValueError: If the choice matches no soil type.
        """
        text = choice.strip().lower()
        members = list(cls)
        if text.isdigit() and 1 <= int(text) <= len(members):
            return members[int(text) - 1]
        try:
            return cls(text)
        except ValueError:
            msg = "Invalid choice. Please enter a number between 1 and 4."
            raise ValueError(msg) from None


class ThresholdSettings(BaseModel):
    """Climate thresholds read by the control loop.

    Ranges are not checked for min <= max. An inverted range is accepted
    and makes the corresponding actuator fire on every tick.
    """

    model_config = ConfigDict(validate_assignment=True)

    min_temp: int = Field(description="Lower temperature bound in °C")
    max_temp: int = Field(description="Upper temperature bound in °C")
    min_humidity: int = Field(description="Lower relative humidity bound in %")
    max_humidity: int = Field(description="Upper relative humidity bound in %")

    @property
    def temperature_inverted(self) -> bool:
        """Whether min_temp exceeds max_temp."""
        return self.min_temp > self.max_temp

    @property
    def humidity_inverted(self) -> bool:
        """Whether min_humidity exceeds max_humidity."""
        return self.min_humidity > self.max_humidity

    def describe(self) -> list[str]:
        """Range lines as shown to the user."""
        return [
            f"Temperature Range: {self.min_temp}-{self.max_temp}°C",
            f"Humidity Range: {self.min_humidity}-{self.max_humidity}%",
        ]


class Plant(BaseModel):
    """Climate requirements of a crop."""

    model_config = ConfigDict(frozen=True)

    name: str
    min_temp: int
    max_temp: int
    min_humidity: int
    max_humidity: int

    def describe(self) -> str:
        """Single-line summary, e.g. "Tomato: Temp 18-30°C, Humidity 60-70%"."""
        return (
            f"{self.name}: Temp {self.min_temp}-{self.max_temp}°C, "
            f"Humidity {self.min_humidity}-{self.max_humidity}%"
        )
