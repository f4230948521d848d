"""Event system for the greenhouse control loop.

This module provides a simple pub/sub event system for notifying
observers about control-loop activity.

Events can be used for:
- Logging cycle lifecycle changes
- Progress reporting in the CLI
- Reacting to actuator activations
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Standard event types emitted by the control loop."""

    CYCLE_START = "cycle.start"
    CYCLE_STOP = "cycle.stop"
    TICK = "loop.tick"
    ACTUATOR_ACTIVATED = "actuator.activated"
    DECISION = "loop.decision"
    TERMINATED = "loop.terminated"


@dataclass
class Event:
    """An event in the control loop.

    Attributes:
        event_type: Type of event.
        timestamp: Wall-clock time the event occurred.
        source: Name of the component/system that generated the event.
        data: Event-specific data payload.
        message: Human-readable description of the event.
    """

    event_type: EventType | str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    source: str = "system"
    data: dict[str, Any] = field(default_factory=dict)
    message: str = ""

    @property
    def key(self) -> str:
        """Event type as a plain string."""
        if isinstance(self.event_type, EventType):
            return self.event_type.value
        return self.event_type

    def __str__(self) -> str:
        """String representation of the event."""
        return f"[{self.timestamp.isoformat()}] {self.key} from {self.source}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.key,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "data": self.data,
            "message": self.message,
        }


EventHandler = Callable[[Event], None]


def _key(event_type: EventType | str) -> str:
    return event_type.value if isinstance(event_type, EventType) else event_type


class EventBus:
    """Central event bus for pub/sub messaging.

    Not thread-safe; the control loop is single-threaded.
    """

    def __init__(self, *, max_history: int = 1000) -> None:
        """Initialize event bus.

        Args:
            max_history: Maximum number of events to keep in history.
        """
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._history: deque[Event] = deque(maxlen=max_history)

    def subscribe(self, event_type: EventType | str, handler: EventHandler) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: Type of events to subscribe to.
            handler: Callback function to invoke when event occurs.
        """
        handlers = self._handlers[_key(event_type)]
        if handler not in handlers:
            handlers.append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        self.subscribe("*", handler)

    def unsubscribe(self, event_type: EventType | str, handler: EventHandler) -> bool:
        """Unsubscribe from events.

        Returns:
            True if handler was found and removed.
        """
        handlers = self._handlers[_key(event_type)]
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def emit(self, event: Event) -> None:
        """Emit an event to all subscribers.

        Handler exceptions are logged but do not prevent other handlers from
        being called.

        Args:
            event: The event to emit.
        """
        self._history.append(event)

        for handler in [*self._handlers[event.key], *self._handlers["*"]]:
            try:
                handler(event)
            except Exception:
                handler_name = getattr(handler, "__name__", str(handler))
                logger.exception(
                    "Event handler '%s' failed processing %s event from %s",
                    handler_name,
                    event.key,
                    event.source,
                )

    def emit_simple(
        self,
        event_type: EventType | str,
        source: str,
        message: str = "",
        **data: Any,
    ) -> Event:
        """Emit an event with simpler syntax.

        Returns:
            The emitted event.
        """
        event = Event(event_type=event_type, source=source, message=message, data=data)
        self.emit(event)
        return event

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """Get event history with optional filtering.

        Args:
            event_type: Filter by event type.
            limit: Maximum number of events to return.

        Returns:
            List of events matching filters (most recent last).
        """
        if event_type is None:
            events = list(self._history)
        else:
            wanted = _key(event_type)
            events = [e for e in self._history if e.key == wanted]

        if limit is not None:
            return events[-limit:]
        return events

    def clear(self) -> None:
        """Clear both history and handlers."""
        self._history.clear()
        self._handlers.clear()


_global_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the global event bus, creating it on first call."""
    global _global_bus
    if _global_bus is None:
        _global_bus = EventBus()
    return _global_bus


def reset_event_bus() -> None:
    """Reset the global event bus.

    Primarily useful for testing.
    """
    global _global_bus
    _global_bus = None
