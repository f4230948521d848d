"""Simulated greenhouse sensors.

Sensor kinds form a closed set. Every kind shares the same ``Sensor``
class; the measurement range for each kind lives in ``SENSOR_RANGES`` and
``Sensor.read()`` dispatches on it.

| Kind          | Range     | Unit |
|---------------|-----------|------|
| temperature   | [20, 35)  | °C   |
| humidity      | [40, 70)  | %    |
| soil_moisture | [30, 70)  | %    |
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from greenhouse_monitor.core.base import Component

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


class SensorKind(str, Enum):
    """Measurement variants supported by the simulated hardware."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    SOIL_MOISTURE = "soil_moisture"

    @property
    def label(self) -> str:
        """Human-readable sensor name."""
        return _LABELS[self]

    @property
    def unit(self) -> str:
        """Unit of the reported value."""
        return "°C" if self is SensorKind.TEMPERATURE else "%"


_LABELS: dict[SensorKind, str] = {
    SensorKind.TEMPERATURE: "Temperature",
    SensorKind.HUMIDITY: "Humidity",
    SensorKind.SOIL_MOISTURE: "Soil Moisture",
}

# Half-open [low, high) ranges; a property of the simulated device, not config.
SENSOR_RANGES: dict[SensorKind, tuple[float, float]] = {
    SensorKind.TEMPERATURE: (20.0, 35.0),
    SensorKind.HUMIDITY: (40.0, 70.0),
    SensorKind.SOIL_MOISTURE: (30.0, 70.0),
}


class Sensor(Component):
    """Simulated sensor producing uniformly distributed readings.

    Attributes:
        kind: Which quantity this sensor measures.
        current_value: Most recent reading (0.0 before the first read).
        rng: Random number generator used for readings.
    """

    def __init__(
        self,
        kind: SensorKind,
        *,
        name: str | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize sensor.

        Args:
            kind: Quantity measured by this sensor.
            name: Display name. Defaults to the kind's label.
            rng: NumPy random generator for reproducible simulations.
                If None and seed is provided, creates a new generator.
                If both None, creates a default generator (non-deterministic).
            seed: Seed for creating a new random generator if rng is None.
        """
        super().__init__(name or kind.label)
        self._kind = kind
        self._last_value = 0.0

        if rng is not None:
            self._rng = rng
        elif seed is not None:
            self._rng = np.random.default_rng(seed)
        else:
            self._rng = np.random.default_rng()

    @property
    def kind(self) -> SensorKind:
        """Quantity measured by this sensor."""
        return self._kind

    @property
    def value_range(self) -> tuple[float, float]:
        """Half-open (low, high) range of readings."""
        return SENSOR_RANGES[self._kind]

    @property
    def current_value(self) -> float:
        """Most recent reading."""
        return self._last_value

    @property
    def rng(self) -> Generator:
        """Random number generator for readings."""
        return self._rng

    def read(self) -> float:
        """Take a new reading and remember it as the current value.

        Returns:
            Reading drawn uniformly from the kind's range.
        """
        low, high = SENSOR_RANGES[self._kind]
        value = float(self._rng.uniform(low, high))
        # uniform() may round up to the upper bound
        if value >= high:
            value = float(np.nextafter(high, low))
        self._last_value = value
        logger.debug("Sensor '%s' read %.2f%s", self.name, value, self._kind.unit)
        return value

    def status_report(self) -> str:
        """Operational status line for the hardware check."""
        return f"{self.name} sensor operational."

    def reset(self) -> None:
        """Forget the last reading."""
        self._last_value = 0.0


def create_sensors(
    *,
    rng: Generator | None = None,
    seed: int | None = None,
) -> dict[SensorKind, Sensor]:
    """Create one sensor per kind sharing a single random generator.

    Args:
        rng: Generator shared by all sensors.
        seed: Seed used to build a generator when rng is None.

    Returns:
        Mapping of kind to sensor, in SensorKind order.
    """
    shared = rng if rng is not None else np.random.default_rng(seed)
    return {kind: Sensor(kind, rng=shared) for kind in SensorKind}
