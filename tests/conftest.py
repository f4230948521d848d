"""Shared pytest fixtures for greenhouse_monitor tests."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from greenhouse_monitor.core.events import reset_event_bus
from greenhouse_monitor.core.settings import ThresholdSettings
from greenhouse_monitor.simulation.engine import ControlLoop, LoopConfig

# =============================================================================
# Autouse fixtures for test isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_state() -> None:
    """Reset the global event bus before each test for isolation."""
    reset_event_bus()


# =============================================================================
# Random number generator fixtures
# =============================================================================


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random generator for reproducible tests."""
    return np.random.default_rng(42)


# =============================================================================
# Settings fixtures
# =============================================================================


@pytest.fixture
def loamy_settings() -> ThresholdSettings:
    """Loamy-soil preset thresholds (18-30°C, 60-70%)."""
    return ThresholdSettings(min_temp=18, max_temp=30, min_humidity=60, max_humidity=70)


@pytest.fixture
def inverted_settings() -> ThresholdSettings:
    """Thresholds with both ranges inverted."""
    return ThresholdSettings(min_temp=30, max_temp=20, min_humidity=70, max_humidity=40)


# =============================================================================
# Loop fixtures
# =============================================================================


class SleepRecorder:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    """Fake sleep collecting every delay instead of pausing."""
    return SleepRecorder()


@pytest.fixture
def make_loop(
    loamy_settings: ThresholdSettings, sleep_recorder: SleepRecorder
) -> Callable[..., ControlLoop]:
    """Factory for control loops that never pause in real time."""

    def factory(
        settings: ThresholdSettings | None = None,
        *,
        tick_delay: float = 0.1,
        seed: int | None = 42,
        emit_events: bool = True,
    ) -> ControlLoop:
        return ControlLoop(
            settings or loamy_settings,
            config=LoopConfig(tick_delay=tick_delay, emit_events=emit_events),
            sleep=sleep_recorder,
            seed=seed,
        )

    return factory
