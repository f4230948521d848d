"""Base class for greenhouse devices.

Sensors and actuators are both devices owned by the control loop for the
whole process lifetime. Each device has a display name and can report
whether it is operational for the startup hardware check.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Component(ABC):
    """Base class for all greenhouse devices.

    Attributes:
        name: Display name for this device (e.g. "Soil Moisture").
    """

    def __init__(self, name: str) -> None:
        """Initialize component.

        Args:
            name: Display name for this device.
        """
        self._name = name

    @property
    def name(self) -> str:
        """Display name for this device."""
        return self._name

    @abstractmethod
    def status_report(self) -> str:
        """One-line operational status used by the hardware check."""

    def reset(self) -> None:  # noqa: B027
        """Reset device to its initial state.

        Override in subclasses that maintain internal state.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
