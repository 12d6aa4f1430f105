"""Validation of simulator settings before they are handed to the control loop."""

from __future__ import annotations

import copy

from uarsim.regulator import PIDController
from uarsim.simulator import Plant, SetpointSource, SignalKind, Simulator


class InvalidConfigurationError(ValueError):
    """Raised when generator, controller or plant settings are not usable."""


def generator_is_valid(generator: SetpointSource) -> bool:
    """Return whether the setpoint source parameters suit its signal kind."""
    if generator.amplitude <= 0:
        return False
    if generator.kind is SignalKind.STEP:
        return True
    if generator.period <= 0:
        return False
    if generator.kind is SignalKind.SINE:
        return True
    return 0 < generator.duty <= 1


def controller_is_valid(controller: PIDController) -> bool:
    """Return whether all gains are non-negative and at least one is positive."""
    gains = (controller.kp, controller.ki, controller.kd)
    return all(g >= 0 for g in gains) and any(g > 0 for g in gains)


def plant_is_valid(plant: Plant) -> bool:
    """Return whether neither polynomial is all zeros and the delay is non-negative."""
    zeros_a = sum(1 for coeff in plant.a if coeff == 0)
    zeros_b = sum(1 for coeff in plant.b if coeff == 0)
    return zeros_a != 3 and zeros_b != 3 and plant.delay >= 0


class ServiceLayer:
    """Checks user settings and installs the valid ones into a simulator."""

    def __init__(self, simulator: Simulator | None = None) -> None:
        self.simulator = simulator if simulator is not None else Simulator()

    def check_generator(self, generator: SetpointSource) -> None:
        """Install a copy of ``generator`` or raise if it is invalid."""
        if not generator_is_valid(generator):
            raise InvalidConfigurationError(f"invalid generator: {generator!r}")
        self.simulator.generator = copy.deepcopy(generator)

    def check_controller(self, controller: PIDController) -> None:
        """Install a copy of ``controller`` or raise if it is invalid."""
        if not controller_is_valid(controller):
            raise InvalidConfigurationError(f"invalid controller: {controller!r}")
        self.simulator.controller = copy.deepcopy(controller)

    def check_plant(self, plant: Plant) -> None:
        """Install a copy of ``plant`` or raise if it is invalid."""
        if not plant_is_valid(plant):
            raise InvalidConfigurationError(f"invalid plant: {plant!r}")
        self.simulator.plant = copy.deepcopy(plant)

    def check_all(self) -> Simulator:
        """Return the simulator if every installed component is valid, else raise."""
        problems = [
            name
            for name, valid in (
                ("generator", generator_is_valid(self.simulator.generator)),
                ("controller", controller_is_valid(self.simulator.controller)),
                ("plant", plant_is_valid(self.simulator.plant)),
            )
            if not valid
        ]
        if problems:
            raise InvalidConfigurationError("invalid settings: " + ", ".join(problems))
        return self.simulator