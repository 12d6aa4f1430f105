"""Closed-loop simulation of a setpoint source, a PID controller and an ARX plant."""

from __future__ import annotations

import enum
import math
import random
from collections import deque
from dataclasses import dataclass, field

from uarsim.regulator import PIDController


class SignalKind(enum.Enum):
    """Shape of the setpoint signal."""

    STEP = "step"
    SINE = "sine"
    SQUARE = "square"


@dataclass
class SetpointSource:
    """Produces the setpoint value for a given time."""

    kind: SignalKind = SignalKind.STEP
    amplitude: float = 0.0
    period: float = 0.0
    duty: float = 0.0

    def generate(self, time: float) -> float:
        """Return the setpoint at ``time``."""
        if self.kind is SignalKind.STEP:
            return self.amplitude if time >= 0 else 0.0
        if self.period <= 0:
            return 0.0
        if self.kind is SignalKind.SINE:
            return self.amplitude * math.sin(2 * math.pi * time / self.period)
        phase = math.fmod(time, self.period)
        if phase < 0:
            phase += self.period
        return self.amplitude if phase < self.duty * self.period else 0.0


@dataclass
class Plant:
    """ARX process model with three-term A and B polynomials and a transport delay."""

    a: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    b: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    delay: float = 0.0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)
    disturbance: float = 0.0
    _inputs: deque = field(default_factory=deque, init=False, repr=False, compare=False)
    _outputs: deque = field(default_factory=deque, init=False, repr=False, compare=False)

    @property
    def _lag(self) -> int:
        return max(0, int(self.delay))

    def compute_output(self, control: float) -> float:
        """Feed one control sample and return the plant output."""
        lag = self._lag
        self._inputs.appendleft(control)
        while len(self._inputs) > lag + len(self.b):
            self._inputs.pop()
        inputs = list(self._inputs)
        outputs = list(self._outputs)
        forced = sum(
            coeff * inputs[lag + offset]
            for offset, coeff in enumerate(self.b)
            if lag + offset < len(inputs)
        )
        free = sum(coeff * past for coeff, past in zip(self.a, outputs))
        output = forced - free + self.disturbance
        self._outputs.appendleft(output)
        while len(self._outputs) > len(self.a):
            self._outputs.pop()
        return output

    def set_disturbance(self, low: float, high: float) -> float:
        """Draw a new disturbance uniformly from ``[low, high]`` and keep it."""
        self.disturbance = self.rng.uniform(low, high)
        return self.disturbance

    def reset(self) -> None:
        """Forget the input and output history and the disturbance."""
        self._inputs.clear()
        self._outputs.clear()
        self.disturbance = 0.0


@dataclass
class Simulator:
    """Runs the control loop one step at a time."""

    generator: SetpointSource = field(default_factory=SetpointSource)
    controller: PIDController = field(default_factory=PIDController)
    plant: Plant = field(default_factory=Plant)
    output: float = 0.0
    previous_output: float = 0.0
    last_controller_value: float = 0.0
    last_plant_output: float = 0.0

    def step(self, time: float) -> float:
        """Advance the loop by one sample at ``time`` and return the plant output."""
        self.controller.setpoint = self.generator.generate(time)
        self.previous_output = self.output
        self.output = self.plant.compute_output(self.controller.last_output)
        self.last_controller_value = self.controller.last_output
        self.last_plant_output = self.output
        self.controller.update_error(self.output)
        self.plant.set_disturbance(0.1, 0.3)
        self.controller.compute()
        return self.output

    @property
    def setpoint(self) -> float:
        return self.controller.setpoint

    @property
    def disturbance(self) -> float:
        return self.plant.disturbance

    @property
    def last_output(self) -> float:
        return self.controller.last_output