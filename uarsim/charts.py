"""Rolling chart data for the setpoint, error, PID terms and control signal."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterator

from uarsim.simulator import SignalKind, Simulator

WINDOW = 30


@dataclass
class AxisRange:
    """Visible range of one chart axis."""

    min: float
    max: float


@dataclass
class RollingSeries:
    """A named series that keeps only the newest ``max_points`` points."""

    name: str
    max_points: int = WINDOW
    points: deque = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.points = deque(maxlen=self.max_points)

    def append(self, x: float, y: float) -> None:
        """Add a point, dropping the oldest one when the window is full."""
        self.points.append((x, y))

    @property
    def xs(self) -> list[float]:
        return [x for x, _ in self.points]

    @property
    def ys(self) -> list[float]:
        return [y for _, y in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(self.points)


class ChartSet:
    """Steps a simulator and keeps the data and axis ranges of four charts."""

    def __init__(self, simulator: Simulator | None = None) -> None:
        self.simulator = simulator if simulator is not None else Simulator()
        self.time = 0.0
        self.output_series = RollingSeries("Controlled value")
        self.setpoint_series = RollingSeries("Setpoint")
        self.error_series = RollingSeries("Error")
        self.p_series = RollingSeries("Proportional")
        self.i_series = RollingSeries("Integral")
        self.d_series = RollingSeries("Derivative")
        self.control_series = RollingSeries("Control value")
        sim = self.simulator
        self.x_axes = {
            name: AxisRange(0.0, float(WINDOW))
            for name in ("setpoint", "error", "pid", "control")
        }
        self.y_axes = {
            "setpoint": AxisRange(0.0, sim.setpoint),
            "error": AxisRange(0.0, sim.controller.error),
            "pid": AxisRange(0.0, sim.controller.last_output),
            "control": AxisRange(0.0, sim.controller.last_output),
        }

    def _shift_x(self, chart: str) -> None:
        if self.time > WINDOW:
            self.x_axes[chart] = AxisRange(self.time - WINDOW, self.time)

    def update_setpoint_chart(self) -> None:
        """Step once and plot the plant output against the setpoint."""
        output = self.simulator.step(self.time)
        self.output_series.append(self.time, output)
        self.setpoint_series.append(self.time, self.simulator.setpoint)
        self._shift_x("setpoint")

        generator = self.simulator.generator
        setpoint = self.simulator.setpoint
        low, high = 0.0, 0.0
        if generator.kind is SignalKind.SINE:
            low, high = -generator.amplitude, generator.amplitude
        elif generator.kind in (SignalKind.STEP, SignalKind.SQUARE):
            low, high = 0.0, setpoint
        margin = 2.0
        self.y_axes["setpoint"] = AxisRange(low - margin, high + margin)
        self.time += 1

    def update_error_chart(self) -> None:
        """Step once and plot the control error."""
        self.simulator.step(self.time)
        error = self.simulator.controller.error
        self.error_series.append(self.time, error)
        self._shift_x("error")
        self.y_axes["error"] = self._padded_range(self.error_series.ys + [error])
        self.time += 1

    def update_pid_chart(self) -> None:
        """Step once and plot the three PID terms."""
        self.simulator.step(self.time)
        controller = self.simulator.controller
        self.p_series.append(self.time, controller.p_term)
        self.i_series.append(self.time, controller.i_term)
        self.d_series.append(self.time, controller.d_term)
        self._shift_x("pid")
        values = self.p_series.ys + self.i_series.ys + self.d_series.ys
        margin = 5.0
        self.y_axes["pid"] = AxisRange(min(values) - margin, max(values) + margin)
        self.time += 1

    def update_control_chart(self) -> None:
        """Step once and plot the control signal."""
        self.simulator.step(self.time)
        control = self.simulator.controller.last_output
        self.control_series.append(self.time, control)
        self._shift_x("control")
        self.y_axes["control"] = self._padded_range(self.control_series.ys + [control])
        self.time += 1

    def update_all(self) -> None:
        """Update every chart in turn; each one advances the loop by one step."""
        self.update_setpoint_chart()
        self.update_error_chart()
        self.update_pid_chart()
        self.update_control_chart()

    @staticmethod
    def _padded_range(values: list[float]) -> AxisRange:
        low, high = min(values), max(values)
        margin = 0.1 * (high - low)
        return AxisRange(low - margin, high + margin)