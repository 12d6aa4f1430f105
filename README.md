# uarsim

A small library for simulating a closed control loop. A setpoint
source drives a PID controller, and the controller drives a discrete
ARX plant. Each step of the loop yields values that are collected into
rolling chart series ready for plotting.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building blocks

### `uarsim.regulator`

`PIDController` is a dataclass with the gains `kp`, `ki` and `kd`,
along with its state: `setpoint`, `error`, `previous_error`,
`error_sum`, `last_output`, `p_term`, `i_term` and `d_term`.

- `update_error(measured)` sets `error = setpoint - measured` and keeps
  the previous error. When `ki` is not zero it also adds the error to
  `error_sum`.
- `compute()` returns the control value `p_term + i_term + d_term`
  and stores it in `last_output`. The terms are:
  - `p_term = kp * error`;
  - `i_term = error_sum / ki`, or 0 when `ki` is zero;
  - `d_term = kd * (error - previous_error)`.
- `clear_integral()` resets `error_sum` and `i_term`.
- `clear_terms()` resets `i_term` and `d_term`.

### `uarsim.simulator`

- `SignalKind` has three members, `STEP`, `SINE` and `SQUARE`.
- `SetpointSource(kind, amplitude, period, duty)` has a
  `generate(time)` method, which returns the setpoint for that kind of
  signal:
  - a step of `amplitude` from time 0 onwards;
  - a sine wave with the given `period`;
  - a rectangular wave that is high for the `duty` fraction of each
    period.
- `Plant(a, b, delay)` is an ARX model with three-term `a` and `b`
  polynomials and a whole-sample transport delay. Each call to
  `compute_output(control)` feeds in one control sample and returns the
  output. `set_disturbance(low, high)` draws an additive disturbance
  uniformly from the plant's `rng`. Pass `rng=random.Random(seed)` to
  make runs repeatable. `reset()` clears the history and the
  disturbance.
- `Simulator(generator, controller, plant)` ties the loop together.
  `step(time)` does the following, in order:
  1. sets the controller's setpoint;
  2. feeds the previous control value into the plant;
  3. updates the controller error;
  4. draws a new disturbance in `[0.1, 0.3]`;
  5. computes the next control value;
  6. returns the plant output.

  The `setpoint`, `disturbance` and `last_output` properties expose the
  current values.

### `uarsim.service`

- `generator_is_valid`, `controller_is_valid` and `plant_is_valid`
  check one component each:
  - a generator needs a positive amplitude. Sine and square signals
    also need a positive period, and a square signal needs a duty cycle
    in `(0, 1]`;
  - a controller's gains must all be non-negative, with at least one of
    them positive;
  - a plant must have a non-negative delay, and neither of its
    polynomials may be all zeros.
- `ServiceLayer(simulator=None)` holds a `Simulator`. Its methods
  `check_generator`, `check_controller` and `check_plant` install a copy
  of a valid component. For an invalid one they raise
  `InvalidConfigurationError`, which is a `ValueError`.
- `check_all()` returns the simulator when every installed component
  is valid. Otherwise it raises `InvalidConfigurationError` and names
  the components that failed.

### `uarsim.charts`

`ChartSet(simulator=None)` keeps the data for four charts:

- plant output against setpoint (`output_series`, `setpoint_series`);
- error (`error_series`);
- the P, I and D terms (`p_series`, `i_series`, `d_series`);
- the control signal (`control_series`).

Each series is a `RollingSeries`, which keeps the newest 30 points.
Axis ranges are held as `AxisRange(min, max)` values in `x_axes` and
`y_axes`, keyed by `"setpoint"`, `"error"`, `"pid"` and `"control"`.
Once the time passes 30, the x axes slide along with it.

Each `update_*_chart()` method advances the simulator by one step,
appends to its own series, updates its axis ranges and increments
`time` by 1. `update_all()` calls all four of them in turn, so one call
advances the loop by four steps.

## Example

```python
import random

from uarsim.charts import ChartSet
from uarsim.regulator import PIDController
from uarsim.service import ServiceLayer
from uarsim.simulator import Plant, SetpointSource, SignalKind

service = ServiceLayer()
service.check_generator(SetpointSource(SignalKind.STEP, amplitude=1.0))
service.check_controller(PIDController(kp=0.5, ki=10.0, kd=0.1))
service.check_plant(Plant(a=[-0.4, 0.0, 0.0], b=[0.6, 0.0, 0.0], delay=1, rng=random.Random(1)))

charts = ChartSet(service.check_all())
for _ in range(50):
    charts.update_all()

print(charts.output_series.ys[-5:])
print(charts.y_axes["error"])
```

## What it does not do

This is a library only. It has no graphical interface, no plotting and
no command-line program. It produces the series and axis ranges, and
drawing them and driving the steps on a timer are left to the caller.
Settings are not saved to or loaded from files.