"""Control loop and soil presets."""

from greenhouse_monitor.simulation.engine import (
    DEFAULT_TICK_DELAY,
    ControlLoop,
    CycleStats,
    LoopConfig,
    LoopStatus,
    UserDecision,
    parse_decision,
)
from greenhouse_monitor.simulation.presets import (
    PLANT_RECOMMENDATIONS,
    SOIL_PRESETS,
    PresetThresholds,
    get_preset,
    recommend_plants,
)

__all__ = [
    # Loop
    "DEFAULT_TICK_DELAY",
    "ControlLoop",
    "CycleStats",
    "LoopConfig",
    "LoopStatus",
    "UserDecision",
    "parse_decision",
    # Presets
    "PLANT_RECOMMENDATIONS",
    "SOIL_PRESETS",
    "PresetThresholds",
    "get_preset",
    "recommend_plants",
]
