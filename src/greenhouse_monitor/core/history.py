"""Event log data model.

One ``LogEntry`` is produced per tick of the control loop. ``History``
keeps every entry of the session in the order it was produced; entries
are never modified or removed.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

# Simulated day: 24 hours sampled every 10 minutes
TICKS_PER_HOUR = 6
HOURS_PER_CYCLE = 24
TICKS_PER_CYCLE = TICKS_PER_HOUR * HOURS_PER_CYCLE
MINUTES_PER_TICK = 60 // TICKS_PER_HOUR


def format_timestamp(tick: int) -> str:
    """Simulated time of day for a tick index.

    Args:
        tick: Tick index within a cycle (0-143).

    Returns:
        Time as "H:MM", e.g. tick 0 -> "0:00", tick 75 -> "12:30".

    Raises:
        ValueError: If tick is outside the cycle.
    """
    if not 0 <= tick < TICKS_PER_CYCLE:
        msg = f"Tick {tick} outside cycle (0-{TICKS_PER_CYCLE - 1})"
        raise ValueError(msg)
    hour, slot = divmod(tick, TICKS_PER_HOUR)
    return f"{hour}:{slot * MINUTES_PER_TICK:02d}"


@dataclass(frozen=True)
class LogEntry:
    """Readings and triggered actions for one tick.

    Attributes:
        timestamp: Simulated time of day, "H:MM".
        temperature: Temperature reading in °C.
        humidity: Relative humidity reading in %.
        soil_moisture: Soil moisture reading in %.
        actions: Descriptions of activated actuators, in activation order.
    """

    timestamp: str
    temperature: float
    humidity: float
    soil_moisture: float
    actions: tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> str:
        """Console line for this entry."""
        actions = "; ".join(self.actions) if self.actions else "None"
        return (
            f"[{self.timestamp}] Temp: {self.temperature:.1f}°C, "
            f"Humidity: {self.humidity:.1f}%, "
            f"Soil Moisture: {self.soil_moisture:.1f}%, "
            f"Actions: {actions}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            "timestamp": self.timestamp,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "soil_moisture": self.soil_moisture,
            "actions": list(self.actions),
        }


class History:
    """Append-only ordered store of log entries, oldest first."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def append(self, entry: LogEntry) -> None:
        """Add an entry at the end of the history."""
        self._entries.append(entry)

    def all(self) -> tuple[LogEntry, ...]:
        """Read-only snapshot of all entries, oldest first."""
        return tuple(self._entries)

    def to_records(self) -> list[dict[str, Any]]:
        """All entries as plain dictionaries."""
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))
