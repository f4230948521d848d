"""Core module for the greenhouse control loop.

This module provides the foundational pieces shared by the loop:
- Base class for devices (sensors, actuators)
- Threshold settings and plant requirements
- Event log entries and the history store
- Event system for loop notifications
- Exceptions

Configuration loading lives in ``greenhouse_monitor.core.config``.
"""

from greenhouse_monitor.core.base import Component
from greenhouse_monitor.core.errors import InvalidStateTransition, InvalidUserDecision
from greenhouse_monitor.core.events import Event, EventBus, EventType
from greenhouse_monitor.core.history import History, LogEntry, format_timestamp
from greenhouse_monitor.core.settings import Plant, SoilType, ThresholdSettings

__all__ = [
    # Devices
    "Component",
    # Settings
    "Plant",
    "SoilType",
    "ThresholdSettings",
    # History
    "History",
    "LogEntry",
    "format_timestamp",
    # Events
    "Event",
    "EventBus",
    "EventType",
    # Errors
    "InvalidStateTransition",
    "InvalidUserDecision",
]
