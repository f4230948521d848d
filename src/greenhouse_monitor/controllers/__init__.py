"""Control policies for the greenhouse loop."""

from greenhouse_monitor.controllers.threshold import (
    SOIL_MOISTURE_THRESHOLD,
    Readings,
    ThresholdPolicy,
    evaluate,
)

__all__ = [
    "SOIL_MOISTURE_THRESHOLD",
    "Readings",
    "ThresholdPolicy",
    "evaluate",
]
