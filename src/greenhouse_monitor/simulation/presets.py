"""Soil-type presets and plant recommendations.

Each soil type maps to a default set of climate thresholds and to the
crops that grow well in it. The table itself is read-only; get_preset
returns a fresh, editable ThresholdSettings.
"""

from __future__ import annotations

from pydantic import ConfigDict

from greenhouse_monitor.core.settings import Plant, SoilType, ThresholdSettings


class PresetThresholds(ThresholdSettings):
    """Read-only thresholds stored in the preset table."""

    model_config = ConfigDict(frozen=True)


SOIL_PRESETS: dict[SoilType, PresetThresholds] = {
    SoilType.LOAMY: PresetThresholds(
        min_temp=18, max_temp=30, min_humidity=60, max_humidity=70
    ),
    SoilType.SANDY: PresetThresholds(
        min_temp=10, max_temp=25, min_humidity=40, max_humidity=60
    ),
    SoilType.CLAY: PresetThresholds(
        min_temp=15, max_temp=25, min_humidity=60, max_humidity=80
    ),
    SoilType.SILT: PresetThresholds(
        min_temp=15, max_temp=24, min_humidity=60, max_humidity=70
    ),
}

PLANT_RECOMMENDATIONS: dict[SoilType, tuple[Plant, ...]] = {
    soil: tuple(
        Plant(
            name=name,
            min_temp=min_temp,
            max_temp=max_temp,
            min_humidity=min_humidity,
            max_humidity=max_humidity,
        )
        for name, min_temp, max_temp, min_humidity, max_humidity in rows
    )
    for soil, rows in {
        SoilType.LOAMY: [
            ("Tomato", 18, 30, 60, 70),
            ("Bell Pepper", 18, 30, 60, 70),
            ("Basil", 18, 30, 60, 70),
        ],
        SoilType.SANDY: [
            ("Onion", 10, 25, 40, 60),
            ("Carrot", 10, 25, 40, 60),
        ],
        SoilType.CLAY: [
            ("Potato", 15, 25, 60, 80),
            ("Spinach", 10, 24, 60, 80),
        ],
        SoilType.SILT: [
            ("Lettuce", 15, 24, 60, 70),
            ("Cucumber", 18, 30, 65, 75),
        ],
    }.items()
}


def get_preset(soil_type: SoilType | str) -> ThresholdSettings:
    """Get default thresholds for a soil type.

    Args:
        soil_type: Soil type or its name.

    Returns:
        A new ThresholdSettings the caller may modify.
    """
    preset = SOIL_PRESETS[SoilType(soil_type)]
    return ThresholdSettings.model_validate(preset.model_dump())


def recommend_plants(soil_type: SoilType | str) -> list[Plant]:
    """List crops suited to a soil type.

    Args:
        soil_type: Soil type or its name.

    Returns:
        Recommended plants, in display order.
    """
    return list(PLANT_RECOMMENDATIONS[SoilType(soil_type)])
