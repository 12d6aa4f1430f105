"""PID controller with error accumulation and separately inspectable terms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PIDController:
    """Discrete PID controller.

    ``ki`` is an integration time constant: the integral term is the running
    error sum divided by ``ki``. A zero ``ki`` disables integration entirely.
    """

    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0
    setpoint: float = 0.0
    error: float = 0.0
    previous_error: float = 0.0
    error_sum: float = 0.0
    last_output: float = 0.0
    p_term: float = 0.0
    i_term: float = 0.0
    d_term: float = 0.0

    def update_error(self, measured: float) -> None:
        """Record a new error from the measured process value."""
        self.previous_error = self.error
        self.error = self.setpoint - measured
        if self.ki != 0:
            self.error_sum += self.error

    def compute(self) -> float:
        """Compute the control signal from the current error state."""
        self.p_term = self.kp * self.error
        self.i_term = self.error_sum / self.ki if self.ki != 0 else 0.0
        self.d_term = self.kd * (self.error - self.previous_error)
        self.last_output = self.p_term + self.i_term + self.d_term
        return self.last_output

    def clear_integral(self) -> None:
        """Reset the accumulated error and the integral term."""
        self.error_sum = 0.0
        self.i_term = 0.0

    def clear_terms(self) -> None:
        """Reset the integral and derivative terms."""
        self.i_term = 0.0
        self.d_term = 0.0