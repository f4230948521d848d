"""Greenhouse control loop.

The loop orchestrates one simulated day (a cycle) at a time:
1. Read all sensors
2. Evaluate the threshold policy
3. Activate the selected actuators
4. Append a log entry to the history
5. Pause for the configured real-time delay

Between cycles the loop waits for a user decision: run another cycle,
view the history, or exit.

States::

    IDLE --run_cycle()--> RUNNING_CYCLE --144 ticks--> AWAITING_DECISION
    AWAITING_DECISION --CONTINUE--> RUNNING_CYCLE
    AWAITING_DECISION --VIEW_HISTORY--> AWAITING_DECISION
    AWAITING_DECISION --EXIT--> TERMINATED
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING

from greenhouse_monitor.components.actuators import (
    Actuator,
    ActuatorKind,
    create_actuators,
)
from greenhouse_monitor.components.sensors import Sensor, SensorKind, create_sensors
from greenhouse_monitor.controllers.threshold import ThresholdPolicy
from greenhouse_monitor.core.errors import InvalidStateTransition, InvalidUserDecision
from greenhouse_monitor.core.events import Event, EventType, get_event_bus
from greenhouse_monitor.core.history import (
    TICKS_PER_CYCLE,
    History,
    LogEntry,
    format_timestamp,
)

if TYPE_CHECKING:
    from numpy.random import Generator

    from greenhouse_monitor.core.settings import ThresholdSettings

logger = logging.getLogger(__name__)

DEFAULT_TICK_DELAY = 0.1  # seconds of real time per tick


class LoopStatus(str, Enum):
    """Control loop states."""

    IDLE = "idle"
    RUNNING_CYCLE = "running_cycle"
    AWAITING_DECISION = "awaiting_decision"
    TERMINATED = "terminated"


class UserDecision(int, Enum):
    """Choices offered at the end of a cycle, numbered as in the menu."""

    CONTINUE = 1
    VIEW_HISTORY = 2
    EXIT = 3


_DECISION_ALIASES: dict[str, UserDecision] = {
    "continue": UserDecision.CONTINUE,
    "history": UserDecision.VIEW_HISTORY,
    "view_history": UserDecision.VIEW_HISTORY,
    "exit": UserDecision.EXIT,
}


def parse_decision(raw: str | int) -> UserDecision:
    """Convert menu input into a decision.

    Args:
        raw: Menu number (1-3, as int or string) or a decision name
            ("continue", "history", "exit").

    Returns:
        The matching decision.

    Raises:
        InvalidUserDecision: If the input matches no decision.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return UserDecision(raw)
        except ValueError:
            raise InvalidUserDecision(raw) from None

    text = str(raw).strip().lower()
    if text.isdigit():
        return parse_decision(int(text))
    if text in _DECISION_ALIASES:
        return _DECISION_ALIASES[text]
    raise InvalidUserDecision(raw)


@dataclass
class LoopConfig:
    """Configuration for the control loop.

    A cycle is always TICKS_PER_CYCLE ticks long.

    Attributes:
        tick_delay: Real-time pause after each tick in seconds.
        emit_events: Whether to emit events to the event bus.
    """

    tick_delay: float = DEFAULT_TICK_DELAY
    emit_events: bool = True


@dataclass
class CycleStats:
    """Statistics from one completed cycle.

    Attributes:
        cycle: 1-based cycle number within the session.
        ticks_completed: Number of ticks run.
        activations: Activation count per actuator kind.
        wall_time: Actual elapsed time.
    """

    cycle: int
    ticks_completed: int = 0
    activations: Counter[ActuatorKind] = field(default_factory=Counter)
    wall_time: timedelta = field(default_factory=timedelta)

    @property
    def total_activations(self) -> int:
        """Activations of all actuators during the cycle."""
        return sum(self.activations.values())


class ControlLoop:
    """Greenhouse climate-control loop.

    The loop exclusively owns one sensor and one actuator per kind for its
    whole lifetime. Each cycle evaluates a snapshot of the settings taken
    when the cycle starts, so edits made while it runs apply to the next
    cycle.
    """

    def __init__(
        self,
        settings: ThresholdSettings,
        *,
        config: LoopConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize control loop.

        Args:
            settings: Threshold configuration.
            config: Loop configuration.
            sleep: Delay function called after each tick with the tick
                delay in seconds. Tests pass a no-op.
            rng: Random generator shared by the sensors.
            seed: Seed for the sensors' generator if rng is None.
        """
        self._settings = settings
        self._policy = ThresholdPolicy(settings.model_copy())
        self._config = config or LoopConfig()
        self._sleep = sleep

        self._sensors: dict[SensorKind, Sensor] = create_sensors(rng=rng, seed=seed)
        self._actuators: dict[ActuatorKind, Actuator] = create_actuators()
        self._history = History()

        self._status = LoopStatus.IDLE
        self._cycles_completed = 0
        self._last_stats: CycleStats | None = None

        self._event_bus = get_event_bus()

    @property
    def status(self) -> LoopStatus:
        """Current loop state."""
        return self._status

    @property
    def settings(self) -> ThresholdSettings:
        """Threshold configuration applied from the next cycle on."""
        return self._settings

    @settings.setter
    def settings(self, value: ThresholdSettings) -> None:
        """Replace thresholds; not allowed during a cycle."""
        if self._status == LoopStatus.RUNNING_CYCLE:
            raise InvalidStateTransition("change settings", self._status.value)
        self._settings = value

    @property
    def config(self) -> LoopConfig:
        """Loop configuration."""
        return self._config

    @property
    def history(self) -> History:
        """Every log entry produced in this session."""
        return self._history

    @property
    def sensors(self) -> tuple[Sensor, ...]:
        """Owned sensors, in SensorKind order."""
        return tuple(self._sensors.values())

    @property
    def actuators(self) -> tuple[Actuator, ...]:
        """Owned actuators, in ActuatorKind order."""
        return tuple(self._actuators.values())

    @property
    def cycles_completed(self) -> int:
        """Number of cycles completed in this session."""
        return self._cycles_completed

    @property
    def last_stats(self) -> CycleStats | None:
        """Statistics of the most recent cycle."""
        return self._last_stats

    def hardware_check(self) -> list[str]:
        """Status line for every owned device, sensors first."""
        return [device.status_report() for device in (*self.sensors, *self.actuators)]

    def step(self, tick: int) -> LogEntry:
        """Execute one tick and record it.

        Args:
            tick: Tick index within the cycle; sets the entry timestamp.

        Returns:
            The log entry appended to the history.

        Raises:
            InvalidStateTransition: If the loop has been terminated.
            ValueError: If tick is outside the cycle.
        """
        if self._status == LoopStatus.TERMINATED:
            raise InvalidStateTransition("run a tick", self._status.value)
        if not 0 <= tick < TICKS_PER_CYCLE:
            msg = f"Tick {tick} outside cycle (0-{TICKS_PER_CYCLE - 1})"
            raise ValueError(msg)
        if self._status != LoopStatus.RUNNING_CYCLE:
            self._policy.settings = self._settings.model_copy()

        for sensor in self._sensors.values():
            sensor.read()

        temperature = self._sensors[SensorKind.TEMPERATURE].current_value
        humidity = self._sensors[SensorKind.HUMIDITY].current_value
        soil_moisture = self._sensors[SensorKind.SOIL_MOISTURE].current_value

        selected = self._policy.evaluate(temperature, humidity, soil_moisture)
        actions = tuple(self._actuators[kind].activate() for kind in selected)

        entry = LogEntry(
            timestamp=format_timestamp(tick),
            temperature=temperature,
            humidity=humidity,
            soil_moisture=soil_moisture,
            actions=actions,
        )
        self._history.append(entry)

        if self._config.emit_events:
            for kind, action in zip(selected, actions, strict=True):
                self._event_bus.emit_simple(
                    EventType.ACTUATOR_ACTIVATED,
                    source=self._actuators[kind].name,
                    message=action,
                    timestamp=entry.timestamp,
                )
            self._event_bus.emit(
                Event(
                    event_type=EventType.TICK,
                    source="loop",
                    data=entry.to_dict(),
                    message=entry.render(),
                )
            )

        return entry

    def run_cycle(self) -> CycleStats:
        """Run the first cycle of the session.

        Later cycles are started with ``decide(UserDecision.CONTINUE)``.

        Returns:
            Statistics of the completed cycle.

        Raises:
            InvalidStateTransition: If the loop is not idle.
        """
        if self._status != LoopStatus.IDLE:
            raise InvalidStateTransition("start a cycle", self._status.value)
        return self._run_cycle()

    def _run_cycle(self) -> CycleStats:
        """Run all ticks of one simulated day."""
        self._status = LoopStatus.RUNNING_CYCLE
        self._policy.settings = self._settings.model_copy()
        stats = CycleStats(cycle=self._cycles_completed + 1)
        self._warn_inverted_ranges()

        logger.info("Starting cycle %d (%d ticks)", stats.cycle, TICKS_PER_CYCLE)
        self._emit(
            EventType.CYCLE_START, f"Cycle {stats.cycle} started", cycle=stats.cycle
        )

        counts_before = {
            kind: actuator.activation_count
            for kind, actuator in self._actuators.items()
        }

        start_wall = time.perf_counter()
        for tick in range(TICKS_PER_CYCLE):
            self.step(tick)
            stats.ticks_completed += 1

            if self._config.tick_delay > 0:
                self._sleep(self._config.tick_delay)
        stats.wall_time = timedelta(seconds=time.perf_counter() - start_wall)

        for kind, actuator in self._actuators.items():
            fired = actuator.activation_count - counts_before[kind]
            if fired:
                stats.activations[kind] = fired

        self._cycles_completed += 1
        self._last_stats = stats
        self._status = LoopStatus.AWAITING_DECISION

        logger.info(
            "Cycle %d complete: %d ticks, %d activations",
            stats.cycle,
            stats.ticks_completed,
            stats.total_activations,
        )
        self._emit(
            EventType.CYCLE_STOP,
            f"Cycle {stats.cycle} completed after {stats.ticks_completed} ticks",
            cycle=stats.cycle,
            ticks=stats.ticks_completed,
            activations={k.value: v for k, v in stats.activations.items()},
        )
        return stats

    def decide(self, decision: UserDecision | str | int) -> CycleStats | None:
        """Apply the user's end-of-cycle decision.

        Args:
            decision: Decision, or raw menu input accepted by parse_decision.

        Returns:
            Statistics of the new cycle for CONTINUE, otherwise None.

        Raises:
            InvalidUserDecision: If raw input matches no decision.
            InvalidStateTransition: If the loop is not awaiting a decision.
        """
        if not isinstance(decision, UserDecision):
            decision = parse_decision(decision)

        if self._status != LoopStatus.AWAITING_DECISION:
            raise InvalidStateTransition(
                f"apply decision {decision.name}", self._status.value
            )

        logger.debug("User decision: %s", decision.name)
        self._emit(EventType.DECISION, decision.name, decision=decision.name)

        if decision is UserDecision.CONTINUE:
            return self._run_cycle()
        if decision is UserDecision.EXIT:
            self.terminate()
        return None

    def terminate(self) -> None:
        """Stop the loop and release all devices.

        Raises:
            InvalidStateTransition: If a cycle is running.
        """
        if self._status == LoopStatus.TERMINATED:
            return
        if self._status == LoopStatus.RUNNING_CYCLE:
            raise InvalidStateTransition("terminate", self._status.value)

        for device in (*self._sensors.values(), *self._actuators.values()):
            device.reset()
        self._sensors.clear()
        self._actuators.clear()

        self._status = LoopStatus.TERMINATED
        logger.info(
            "Loop terminated after %d cycles (%d entries)",
            self._cycles_completed,
            len(self._history),
        )
        self._emit(
            EventType.TERMINATED,
            "Loop terminated",
            cycles=self._cycles_completed,
            entries=len(self._history),
        )

    def _warn_inverted_ranges(self) -> None:
        """Log inverted threshold ranges; they are used as configured."""
        settings = self._policy.settings
        if settings.temperature_inverted:
            logger.warning(
                "Temperature range is inverted (%d > %d); fan will run every tick",
                settings.min_temp,
                settings.max_temp,
            )
        if settings.humidity_inverted:
            logger.warning(
                "Humidity range is inverted (%d > %d); sprinkler will run every tick",
                settings.min_humidity,
                settings.max_humidity,
            )

    def _emit(self, event_type: EventType, message: str, **data: object) -> None:
        if self._config.emit_events:
            self._event_bus.emit_simple(
                event_type, source="loop", message=message, **data
            )

