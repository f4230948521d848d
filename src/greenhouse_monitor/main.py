"""CLI interface for greenhouse-monitor.

This module provides the interactive session that sets up a greenhouse
and runs the control loop, plus helpers for configuration files.

Usage:
    ghmon run
    ghmon run --config my-greenhouse.yaml --cycles 2
    ghmon presets
    ghmon init "My Greenhouse" -o my-greenhouse.yaml
    ghmon validate my-greenhouse.yaml
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from greenhouse_monitor.components.actuators import ActuatorKind
from greenhouse_monitor.core.config import MonitorConfig, load_config, save_config
from greenhouse_monitor.core.errors import InvalidUserDecision
from greenhouse_monitor.core.events import EventType, get_event_bus
from greenhouse_monitor.core.history import TICKS_PER_CYCLE
from greenhouse_monitor.core.settings import SoilType, ThresholdSettings
from greenhouse_monitor.simulation.engine import (
    ControlLoop,
    LoopConfig,
    LoopStatus,
    UserDecision,
    parse_decision,
)
from greenhouse_monitor.simulation.presets import (
    PLANT_RECOMMENDATIONS,
    SOIL_PRESETS,
    get_preset,
    recommend_plants,
)

if TYPE_CHECKING:
    from greenhouse_monitor.core.events import Event
    from greenhouse_monitor.core.history import History
    from greenhouse_monitor.simulation.engine import CycleStats

app = typer.Typer(
    name="ghmon",
    help="Simulated greenhouse climate-control loop.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def run(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="YAML/JSON session configuration"),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Sensor random seed"),
    ] = None,
    delay: Annotated[
        float | None,
        typer.Option(
            "--delay", "-d", min=0.0, help="Override pause per tick in seconds"
        ),
    ] = None,
    cycles: Annotated[
        int | None,
        typer.Option(
            "--cycles", "-n", min=1, help="Run N cycles without prompting, then exit"
        ),
    ] = None,
    show_history: Annotated[
        bool,
        typer.Option(
            "--show-history", help="With --cycles, print the event log before exiting"
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Set up a greenhouse and run the climate-control loop."""
    _configure_logging(verbose)

    if show_history and cycles is None:
        console.print("[red]Error:[/] --show-history requires --cycles")
        raise typer.Exit(1)

    if config_path is not None:
        config = _load_or_exit(config_path)
        settings = config.resolve_thresholds()
    else:
        config = _prompt_config()
        settings = config.resolve_thresholds()

    updates: dict[str, object] = {}
    if seed is not None:
        updates["seed"] = seed
    if delay is not None:
        updates["tick_delay"] = delay
    if updates:
        config = config.model_copy(update=updates)

    loop = ControlLoop(
        settings,
        config=LoopConfig(tick_delay=config.tick_delay),
        seed=config.seed,
    )

    console.print(
        f"\nWelcome, [bold]{config.user_name}[/]! "
        f"Greenhouse [bold]{config.greenhouse_name}[/] ({config.soil_type.label} soil)"
    )
    _print_recommendations(config.soil_type)
    _print_hardware_check(loop)

    if config_path is None:
        _prompt_modify_settings(settings)
    else:
        _print_settings(settings)

    _print_cycle_summary(_run_with_progress(loop, loop.run_cycle))

    if cycles is not None:
        for _ in range(cycles - 1):
            _print_cycle_summary(
                _run_with_progress(loop, lambda: loop.decide(UserDecision.CONTINUE))
            )
        if show_history:
            _print_history(loop.history)
        loop.decide(UserDecision.EXIT)
    else:
        _decision_loop(loop)

    console.print(
        f"\nExiting after {loop.cycles_completed} cycle(s), "
        f"{len(loop.history)} log entries recorded."
    )


def _decision_loop(loop: ControlLoop) -> None:
    """Prompt for end-of-cycle decisions until the user exits."""
    while loop.status != LoopStatus.TERMINATED:
        console.print("\nEnd of 24-hour cycle. Please choose an option:")
        console.print("1. Continue for another 24 hours")
        console.print("2. View history of events")
        console.print("3. Exit program")
        raw = typer.prompt("Enter your choice (1-3)")

        try:
            decision = parse_decision(raw)
        except InvalidUserDecision:
            console.print("[red]Invalid choice.[/] Please select 1, 2, or 3.")
            continue

        if decision is UserDecision.VIEW_HISTORY:
            loop.decide(decision)
            _print_history(loop.history)
        elif decision is UserDecision.CONTINUE:
            stats = _run_with_progress(loop, lambda: loop.decide(decision))
            _print_cycle_summary(stats)
        else:
            loop.decide(decision)


def _run_with_progress(
    loop: ControlLoop, start: Callable[[], CycleStats | None]
) -> CycleStats | None:
    """Run one cycle while showing a progress bar fed by tick events.

    Args:
        loop: The control loop.
        start: Zero-argument callable that runs the cycle and returns its stats.

    Returns:
        Statistics of the completed cycle.
    """
    bus = get_event_bus()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(
            f"Simulating day {loop.cycles_completed + 1}...",
            total=TICKS_PER_CYCLE,
        )

        def on_tick(event: Event) -> None:
            progress.update(
                task,
                advance=1,
                description=f"Simulating {event.data.get('timestamp', '')}",
            )

        bus.subscribe(EventType.TICK, on_tick)
        try:
            stats = start()
        finally:
            bus.unsubscribe(EventType.TICK, on_tick)

    return stats


def _prompt_config() -> MonitorConfig:
    """Ask the setup questions of an interactive session."""
    user_name = typer.prompt("Enter your name")
    greenhouse_name = typer.prompt("Enter greenhouse name")

    while True:
        console.print("\nSelect soil type:")
        for index, soil in enumerate(SoilType, start=1):
            console.print(f"{index}. {soil.label}")
        choice = typer.prompt("Choose (1-4)")
        try:
            soil_type = SoilType.from_choice(choice)
            break
        except ValueError as e:
            console.print(f"[red]{e}[/]")

    return MonitorConfig(
        user_name=user_name,
        greenhouse_name=greenhouse_name,
        soil_type=soil_type,
    )


def _prompt_modify_settings(settings: ThresholdSettings) -> None:
    """Offer a one-time override of the thresholds, modifying them in place."""
    _print_settings(settings)
    if not typer.confirm("\nModify settings?", default=False):
        return

    settings.min_temp = typer.prompt("Enter new min temperature (°C)", type=int)
    settings.max_temp = typer.prompt("Enter new max temperature (°C)", type=int)
    settings.min_humidity = typer.prompt("Enter new min humidity (%)", type=int)
    settings.max_humidity = typer.prompt("Enter new max humidity (%)", type=int)
    console.print("[green]Settings updated.[/]")
    logger.info("Thresholds overridden: %s", settings.model_dump())


def _print_settings(settings: ThresholdSettings) -> None:
    console.print("\n[bold]Current Settings:[/]")
    for line in settings.describe():
        console.print(line)


def _print_recommendations(soil_type: SoilType) -> None:
    console.print("\n[bold]Recommended plants based on soil type:[/]")
    for plant in recommend_plants(soil_type):
        console.print(plant.describe())


def _print_hardware_check(loop: ControlLoop) -> None:
    console.print("\n[bold]Hardware status check:[/]")
    for line in loop.hardware_check():
        console.print(line)


def _print_cycle_summary(stats: CycleStats | None) -> None:
    if stats is None:
        return
    if stats.activations:
        fired = ", ".join(
            f"{kind.label} x{stats.activations[kind]}"
            for kind in ActuatorKind
            if stats.activations[kind]
        )
    else:
        fired = "none"
    console.print(
        f"[green]Day {stats.cycle} complete:[/] {stats.ticks_completed} readings, "
        f"activations: {fired}"
    )


def _print_history(history: History) -> None:
    console.print("\n[bold]--- Daily Event Log ---[/]")
    for entry in history:
        console.print(
            entry.render(), markup=False, highlight=False, emoji=False, soft_wrap=True
        )


@app.command()
def presets() -> None:
    """List soil presets and recommended plants."""
    table = Table(title="Soil Presets")
    table.add_column("Soil", style="cyan")
    table.add_column("Temperature")
    table.add_column("Humidity")
    table.add_column("Recommended plants")

    for soil, settings in SOIL_PRESETS.items():
        table.add_row(
            soil.label,
            f"{settings.min_temp}-{settings.max_temp}°C",
            f"{settings.min_humidity}-{settings.max_humidity}%",
            ", ".join(plant.name for plant in PLANT_RECOMMENDATIONS[soil]),
        )

    console.print(table)


@app.command()
def init(
    name: Annotated[str, typer.Argument(help="Greenhouse name")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
    soil: Annotated[
        SoilType,
        typer.Option("--soil", "-s", help="Soil type"),
    ] = SoilType.LOAMY,
    user: Annotated[
        str,
        typer.Option("--user", "-u", help="Grower name"),
    ] = "Grower",
) -> None:
    """Generate a starter YAML configuration file."""
    config = MonitorConfig(
        user_name=user,
        greenhouse_name=name,
        soil_type=soil,
        thresholds=get_preset(soil),
    )

    if output is None:
        # "My Greenhouse" -> "my-greenhouse.yaml"
        output = Path(name.lower().replace(" ", "-") + ".yaml")

    save_config(config, output)
    console.print(f"[green]Created:[/] {output}")
    console.print("\nEdit this file to customize your greenhouse, then run:")
    console.print(f"  ghmon run --config {output}")


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to YAML configuration")],
) -> None:
    """Validate a configuration file without running."""
    config = _load_or_exit(config_path)
    settings = config.resolve_thresholds()

    console.print(f"[green]Valid:[/] {config.greenhouse_name}")
    console.print(f"  Grower: {config.user_name}")
    console.print(f"  Soil: {config.soil_type.label}")
    for line in settings.describe():
        console.print(f"  {line}")
    console.print(f"  Tick delay: {config.tick_delay} seconds")
    if settings.temperature_inverted or settings.humidity_inverted:
        console.print("[yellow]Warning:[/] inverted threshold range")


def _load_or_exit(config_path: Path) -> MonitorConfig:
    """Load a config file, turning errors into a CLI exit."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/] Config file not found: {config_path}")
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid:[/] {e}")
        raise typer.Exit(1) from None


def main() -> int:
    """Application entry point.

    Returns:
        Exit code (0 for success).
    """
    try:
        app()
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
