#!/usr/bin/env python3
"""Basic control-loop example.

Runs two simulated days for a loamy-soil greenhouse without real-time
pacing and prints how often each actuator fired.

Run with: python examples/basic_cycle.py
"""

from greenhouse_monitor.core.events import EventType, get_event_bus
from greenhouse_monitor.simulation import (
    ControlLoop,
    LoopConfig,
    UserDecision,
    get_preset,
)


def main() -> None:
    """Run two cycles and summarize them."""
    settings = get_preset("loamy")
    loop = ControlLoop(settings, config=LoopConfig(tick_delay=0.0), seed=42)

    print("=" * 60)
    print("LOAMY SOIL: Tomato / Bell Pepper / Basil")
    print("=" * 60)
    for line in settings.describe():
        print(line)
    print()

    fan_runs: list[str] = []

    def on_activation(event: object) -> None:
        message = getattr(event, "message", "")
        if message.startswith("Fan"):
            fan_runs.append(getattr(event, "data", {}).get("timestamp", "?"))

    get_event_bus().subscribe(EventType.ACTUATOR_ACTIVATED, on_activation)

    for stats in (loop.run_cycle(), loop.decide(UserDecision.CONTINUE)):
        assert stats is not None
        print(f"Day {stats.cycle}: {stats.ticks_completed} ticks")
        for kind, count in stats.activations.items():
            print(f"  {kind.label:<10} {count:>4} activations")

    print()
    print(f"Fan ran {len(fan_runs)} times; first five at {', '.join(fan_runs[:5])}")
    print()
    print("Last three entries:")
    for entry in loop.history.all()[-3:]:
        print(entry.render())

    loop.decide(UserDecision.EXIT)


if __name__ == "__main__":
    main()
