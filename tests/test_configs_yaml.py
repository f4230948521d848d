"""Tests for the example configuration files."""

from __future__ import annotations

from pathlib import Path

import pytest

from greenhouse_monitor.core.config import load_config
from greenhouse_monitor.core.settings import SoilType
from greenhouse_monitor.simulation.engine import ControlLoop, LoopConfig, UserDecision


def get_configs_dir() -> Path:
    """Get the examples/configs directory."""
    current = Path(__file__).parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            configs_dir = current / "examples" / "configs"
            if configs_dir.exists():
                return configs_dir
        current = current.parent

    return Path("examples/configs")


CONFIGS_DIR = get_configs_dir()


class TestExampleConfigs:
    """Tests for bundled example configurations."""

    @pytest.mark.skipif(
        not (CONFIGS_DIR / "tomato-house.yaml").exists(),
        reason="Config file not found",
    )
    def test_tomato_house(self) -> None:
        """tomato-house.yaml loads with explicit thresholds."""
        config = load_config(CONFIGS_DIR / "tomato-house.yaml")

        assert config.greenhouse_name == "Tomato House"
        assert config.soil_type is SoilType.LOAMY
        assert config.seed == 42
        assert config.resolve_thresholds().max_temp == 30

    @pytest.mark.skipif(
        not (CONFIGS_DIR / "sandy-beds.yaml").exists(),
        reason="Config file not found",
    )
    def test_sandy_beds_uses_preset(self) -> None:
        """sandy-beds.yaml relies on the soil preset."""
        config = load_config(CONFIGS_DIR / "sandy-beds.yaml")

        assert config.thresholds is None
        assert config.resolve_thresholds().min_temp == 10

    @pytest.mark.parametrize(
        "name",
        ["tomato-house.yaml", "sandy-beds.yaml"],
    )
    def test_config_runs_a_cycle(self, name: str) -> None:
        """Each example drives a full cycle."""
        path = CONFIGS_DIR / name
        if not path.exists():
            pytest.skip(f"{name} not found")

        config = load_config(path)
        loop = ControlLoop(
            config.resolve_thresholds(),
            config=LoopConfig(tick_delay=0.0),
            seed=config.seed,
        )
        stats = loop.run_cycle()
        loop.decide(UserDecision.EXIT)

        assert stats.ticks_completed == 144
        assert len(loop.history) == 144
