"""Threshold decision policy.

Maps one tick's readings and the current settings to the actuators that
must be activated. Each rule is independent, so several actuators may
fire in the same tick:

- Fan when temperature is outside [min_temp, max_temp]
- Sprinkler when humidity is outside [min_humidity, max_humidity]
- Pump when soil moisture is below 30 %

Bounds are exclusive: a reading equal to a threshold does not fire.
"""

from __future__ import annotations

from typing import NamedTuple

from greenhouse_monitor.components.actuators import ActuatorKind
from greenhouse_monitor.core.settings import ThresholdSettings

# Fixed irrigation threshold, not part of ThresholdSettings
SOIL_MOISTURE_THRESHOLD: float = 30.0


class Readings(NamedTuple):
    """Sensor values for one tick.

    Attributes:
        temperature: Air temperature in °C.
        humidity: Relative humidity in %.
        soil_moisture: Soil moisture in %.
    """

    temperature: float
    humidity: float
    soil_moisture: float


def _outside(value: float, low: float, high: float) -> bool:
    return value < low or value > high


def evaluate(
    readings: Readings, settings: ThresholdSettings
) -> tuple[ActuatorKind, ...]:
    """Select the actuators to activate for one tick.

    Args:
        readings: Current sensor values.
        settings: Threshold configuration.

    Returns:
        Actuator kinds to activate, always ordered Fan, Sprinkler, Pump.
    """
    selected: list[ActuatorKind] = []

    if _outside(readings.temperature, settings.min_temp, settings.max_temp):
        selected.append(ActuatorKind.FAN)

    if _outside(readings.humidity, settings.min_humidity, settings.max_humidity):
        selected.append(ActuatorKind.SPRINKLER)

    if readings.soil_moisture < SOIL_MOISTURE_THRESHOLD:
        selected.append(ActuatorKind.PUMP)

    return tuple(selected)


class ThresholdPolicy:
    """Threshold policy bound to a settings object.

    The settings are read on every evaluation, so changes made between
    cycles take effect on the next cycle.

    Attributes:
        settings: Threshold configuration in use.
    """

    def __init__(self, settings: ThresholdSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> ThresholdSettings:
        """Threshold configuration in use."""
        return self._settings

    @settings.setter
    def settings(self, value: ThresholdSettings) -> None:
        self._settings = value

    def evaluate(
        self, temperature: float, humidity: float, soil_moisture: float
    ) -> tuple[ActuatorKind, ...]:
        """Select actuators for the given readings.

        Returns:
            Actuator kinds to activate, ordered Fan, Sprinkler, Pump.
        """
        return evaluate(Readings(temperature, humidity, soil_moisture), self._settings)
