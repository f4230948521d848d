"""Simulated greenhouse actuators.

Actuator kinds form a closed set. Activation has no modelled physical
effect: it returns a description of the action taken, which the control
loop collects into the tick's log entry.
"""

from __future__ import annotations

import logging
from enum import Enum

from greenhouse_monitor.core.base import Component

logger = logging.getLogger(__name__)


class ActuatorKind(str, Enum):
    """Corrective devices driven by the threshold policy."""

    FAN = "fan"
    SPRINKLER = "sprinkler"
    PUMP = "pump"

    @property
    def label(self) -> str:
        """Human-readable actuator name."""
        return self.value.capitalize()


ACTUATOR_ACTIONS: dict[ActuatorKind, str] = {
    ActuatorKind.FAN: "Fan activated",
    ActuatorKind.SPRINKLER: "Sprinkler activated",
    ActuatorKind.PUMP: "Pump activated for irrigation",
}


class Actuator(Component):
    """Stateless corrective device.

    Only an activation counter is tracked, for status reporting.

    Attributes:
        kind: Which device this is.
        activation_count: Number of activations since creation or reset.
    """

    def __init__(self, kind: ActuatorKind, *, name: str | None = None) -> None:
        """Initialize actuator.

        Args:
            kind: Device variant.
            name: Display name. Defaults to the kind's label.
        """
        super().__init__(name or kind.label)
        self._kind = kind
        self._activation_count = 0

    @property
    def kind(self) -> ActuatorKind:
        """Device variant."""
        return self._kind

    @property
    def activation_count(self) -> int:
        """Number of activations since creation or reset."""
        return self._activation_count

    def activate(self) -> str:
        """Activate the device.

        Returns:
            Description of the action taken, e.g. "Fan activated".
        """
        self._activation_count += 1
        description = ACTUATOR_ACTIONS[self._kind]
        logger.debug("Actuator '%s': %s", self.name, description)
        return description

    def status_report(self) -> str:
        """Operational status line for the hardware check."""
        return f"{self.name} actuator operational."

    def reset(self) -> None:
        """Reset the activation counter."""
        self._activation_count = 0


def create_actuators() -> dict[ActuatorKind, Actuator]:
    """Create one actuator per kind, in ActuatorKind order."""
    return {kind: Actuator(kind) for kind in ActuatorKind}
