"""Closed-loop control simulation: setpoint source, PID controller, ARX plant, validation and chart data."""

__version__ = "0.1.0"
__all__ = ["regulator", "simulator", "service", "charts"]