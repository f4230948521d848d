"""Tests for the event log data model."""

from __future__ import annotations

import dataclasses
import re

import pytest

from greenhouse_monitor.core.history import (
    TICKS_PER_CYCLE,
    History,
    LogEntry,
    format_timestamp,
)

TIMESTAMP = re.compile(r"^(\d{1,2}):(\d{2})$")


class TestFormatTimestamp:
    """Tests for format_timestamp()."""

    @pytest.mark.parametrize(
        ("tick", "expected"),
        [(0, "0:00"), (1, "0:10"), (5, "0:50"), (6, "1:00"), (75, "12:30"), (143, "23:50")],
    )
    def test_known_ticks(self, tick: int, expected: str) -> None:
        """Hour is tick // 6, minute is (tick % 6) * 10."""
        assert format_timestamp(tick) == expected

    def test_every_tick_well_formed(self) -> None:
        """All ticks of a cycle give H:MM with padded minutes."""
        stamps = [format_timestamp(t) for t in range(TICKS_PER_CYCLE)]

        for stamp in stamps:
            match = TIMESTAMP.match(stamp)
            assert match is not None
            assert 0 <= int(match.group(1)) < 24
            assert int(match.group(2)) in {0, 10, 20, 30, 40, 50}

        assert len(set(stamps)) == TICKS_PER_CYCLE

    @pytest.mark.parametrize("tick", [-1, TICKS_PER_CYCLE, 150])
    def test_rejects_tick_outside_cycle(self, tick: int) -> None:
        """Ticks outside 0-143 have no time of day."""
        with pytest.raises(ValueError, match="outside cycle"):
            format_timestamp(tick)

    def test_cycle_length(self) -> None:
        """A simulated day has 144 ticks."""
        assert TICKS_PER_CYCLE == 144


class TestLogEntry:
    """Tests for LogEntry."""

    def test_render_with_actions(self) -> None:
        """Actions are joined in order."""
        entry = LogEntry(
            timestamp="3:20",
            temperature=32.0,
            humidity=65.0,
            soil_moisture=25.0,
            actions=("Fan activated", "Pump activated for irrigation"),
        )
        assert entry.render() == (
            "[3:20] Temp: 32.0°C, Humidity: 65.0%, Soil Moisture: 25.0%, "
            "Actions: Fan activated; Pump activated for irrigation"
        )

    def test_render_without_actions(self) -> None:
        """No actions renders as None."""
        entry = LogEntry("0:00", 25.0, 65.0, 50.0)
        assert entry.render().endswith("Actions: None")

    def test_immutable(self) -> None:
        """Entries cannot be modified after creation."""
        entry = LogEntry("0:00", 25.0, 65.0, 50.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.temperature = 30.0  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """Serializable dictionary."""
        entry = LogEntry("1:10", 21.5, 44.0, 31.0, ("Sprinkler activated",))
        assert entry.to_dict() == {
            "timestamp": "1:10",
            "temperature": 21.5,
            "humidity": 44.0,
            "soil_moisture": 31.0,
            "actions": ["Sprinkler activated"],
        }


class TestHistory:
    """Tests for History."""

    def test_empty(self) -> None:
        """New history has no entries."""
        history = History()
        assert len(history) == 0
        assert history.all() == ()

    def test_append_preserves_order(self) -> None:
        """Entries are returned oldest first."""
        history = History()
        entries = [LogEntry(format_timestamp(t), 20.0 + t, 50.0, 40.0) for t in range(5)]
        for entry in entries:
            history.append(entry)

        assert history.all() == tuple(entries)
        assert list(history) == entries
        assert len(history) == 5

    def test_snapshot_is_read_only(self) -> None:
        """all() returns a tuple unaffected by later appends."""
        history = History()
        history.append(LogEntry("0:00", 25.0, 65.0, 50.0))
        snapshot = history.all()

        history.append(LogEntry("0:10", 26.0, 65.0, 50.0))

        assert isinstance(snapshot, tuple)
        assert len(snapshot) == 1
        assert len(history) == 2

    def test_to_records(self) -> None:
        """Records are plain dictionaries in order."""
        history = History()
        history.append(LogEntry("0:00", 25.0, 65.0, 50.0))
        history.append(LogEntry("0:10", 26.0, 66.0, 51.0, ("Fan activated",)))

        records = history.to_records()
        assert [r["timestamp"] for r in records] == ["0:00", "0:10"]
        assert records[1]["actions"] == ["Fan activated"]
