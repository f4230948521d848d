"""Greenhouse devices.

This module provides the simulated sensors and corrective actuators
driven by the control loop.
"""

from greenhouse_monitor.components.actuators import (
    ACTUATOR_ACTIONS,
    Actuator,
    ActuatorKind,
    create_actuators,
)
from greenhouse_monitor.components.sensors import (
    SENSOR_RANGES,
    Sensor,
    SensorKind,
    create_sensors,
)

__all__ = [
    # Sensors
    "SENSOR_RANGES",
    "Sensor",
    "SensorKind",
    "create_sensors",
    # Actuators
    "ACTUATOR_ACTIONS",
    "Actuator",
    "ActuatorKind",
    "create_actuators",
]
