"""Tests for the threshold decision policy."""

from __future__ import annotations

import pytest

from greenhouse_monitor.components.actuators import ActuatorKind
from greenhouse_monitor.controllers import (
    SOIL_MOISTURE_THRESHOLD,
    Readings,
    ThresholdPolicy,
    evaluate,
)
from greenhouse_monitor.core.settings import ThresholdSettings

FAN = ActuatorKind.FAN
SPRINKLER = ActuatorKind.SPRINKLER
PUMP = ActuatorKind.PUMP


class TestEvaluate:
    """Tests for evaluate()."""

    def test_fan_on_upper_bound_and_pump(self, loamy_settings: ThresholdSettings) -> None:
        """Hot and dry soil fires fan and pump, not sprinkler."""
        result = evaluate(Readings(32.0, 65.0, 25.0), loamy_settings)
        assert result == (FAN, PUMP)

    def test_nothing_in_range(self, loamy_settings: ThresholdSettings) -> None:
        """All readings in range fire nothing."""
        assert evaluate(Readings(25.0, 65.0, 50.0), loamy_settings) == ()

    def test_fan_on_lower_bound(self, loamy_settings: ThresholdSettings) -> None:
        """Too cold also fires the fan."""
        assert evaluate(Readings(17.9, 65.0, 50.0), loamy_settings) == (FAN,)

    @pytest.mark.parametrize("humidity", [59.0, 71.0])
    def test_sprinkler_outside_humidity(
        self, loamy_settings: ThresholdSettings, humidity: float
    ) -> None:
        """Sprinkler fires below and above the humidity range."""
        assert evaluate(Readings(25.0, humidity, 50.0), loamy_settings) == (SPRINKLER,)

    def test_all_three_in_order(self, loamy_settings: ThresholdSettings) -> None:
        """Order is always Fan, Sprinkler, Pump."""
        assert evaluate(Readings(10.0, 90.0, 5.0), loamy_settings) == (
            FAN,
            SPRINKLER,
            PUMP,
        )

    @pytest.mark.parametrize(
        "readings",
        [
            Readings(30.0, 65.0, 50.0),
            Readings(18.0, 65.0, 50.0),
            Readings(25.0, 60.0, 50.0),
            Readings(25.0, 70.0, 50.0),
            Readings(25.0, 65.0, 30.0),
        ],
    )
    def test_bounds_are_exclusive(
        self, loamy_settings: ThresholdSettings, readings: Readings
    ) -> None:
        """A reading equal to a threshold does not fire."""
        assert evaluate(readings, loamy_settings) == ()

    def test_pump_threshold_fixed(self) -> None:
        """Pump threshold does not depend on settings."""
        settings = ThresholdSettings(
            min_temp=0, max_temp=100, min_humidity=0, max_humidity=100
        )
        assert SOIL_MOISTURE_THRESHOLD == 30.0
        assert evaluate(Readings(25.0, 50.0, 29.99), settings) == (PUMP,)

    def test_deterministic(self, loamy_settings: ThresholdSettings) -> None:
        """Repeated evaluation gives the same answer."""
        readings = Readings(31.0, 55.0, 20.0)
        first = evaluate(readings, loamy_settings)
        assert all(evaluate(readings, loamy_settings) == first for _ in range(10))

    def test_inverted_range_always_fires(
        self, inverted_settings: ThresholdSettings
    ) -> None:
        """Inverted ranges are used as configured."""
        for temp in (15.0, 25.0, 35.0):
            result = evaluate(Readings(temp, 55.0, 50.0), inverted_settings)
            assert result == (FAN, SPRINKLER)


class TestThresholdPolicy:
    """Tests for ThresholdPolicy."""

    def test_evaluate(self, loamy_settings: ThresholdSettings) -> None:
        """Policy delegates to evaluate() with its settings."""
        policy = ThresholdPolicy(loamy_settings)
        assert policy.evaluate(32.0, 65.0, 25.0) == (FAN, PUMP)

    def test_reads_current_settings(self, loamy_settings: ThresholdSettings) -> None:
        """Settings changes are seen on the next evaluation."""
        policy = ThresholdPolicy(loamy_settings)
        assert policy.evaluate(32.0, 65.0, 50.0) == (FAN,)

        loamy_settings.max_temp = 35
        assert policy.evaluate(32.0, 65.0, 50.0) == ()

    def test_replace_settings(self, loamy_settings: ThresholdSettings) -> None:
        """Settings can be swapped."""
        policy = ThresholdPolicy(loamy_settings)
        wide = ThresholdSettings(min_temp=0, max_temp=50, min_humidity=0, max_humidity=100)
        policy.settings = wide
        assert policy.settings is wide
        assert policy.evaluate(32.0, 65.0, 50.0) == ()
