"""greenhouse-monitor: a simulated greenhouse climate-control loop.

Samples synthetic sensor readings, compares them against threshold
settings, drives corrective actuators, and keeps a time-stamped event
log over simulated 24-hour cycles.
"""

__version__ = "0.1.0"
