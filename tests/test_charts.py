import random

import pytest

from uarsim.charts import AxisRange, ChartSet, RollingSeries
from uarsim.regulator import PIDController
from uarsim.simulator import Plant, SetpointSource, SignalKind, Simulator


def make_charts(kind=SignalKind.STEP, amplitude=1.0, period=10.0, duty=0.5):
    simulator = Simulator(
        generator=SetpointSource(kind, amplitude=amplitude, period=period, duty=duty),
        controller=PIDController(kp=0.5, ki=10.0, kd=0.1),
        plant=Plant(a=[-0.4, 0.0, 0.0], b=[0.6, 0.0, 0.0], delay=1, rng=random.Random(0)),
    )
    return ChartSet(simulator)


def test_rolling_series_keeps_newest_points():
    series = RollingSeries("s", max_points=3)
    for i in range(5):
        series.append(i, i * 10)
    assert len(series) == 3
    assert series.xs == [2, 3, 4]
    assert series.ys == [20, 30, 40]
    assert list(series) == [(2, 20), (3, 30), (4, 40)]


def test_default_window_is_thirty():
    series = RollingSeries("s")
    for i in range(40):
        series.append(i, i)
    assert len(series) == 30
    assert series.xs[0] == 10


def test_initial_x_axes():
    charts = make_charts()
    assert all(axis == AxisRange(0.0, 30.0) for axis in charts.x_axes.values())


def test_setpoint_chart_records_output_and_advances_time():
    charts = make_charts(amplitude=4.0)
    charts.update_setpoint_chart()
    assert charts.time == 1
    assert charts.output_series.ys == [charts.simulator.output]
    assert charts.setpoint_series.ys == [4.0]
    assert charts.y_axes["setpoint"] == AxisRange(-2.0, 6.0)


def test_setpoint_chart_sine_range():
    charts = make_charts(kind=SignalKind.SINE, amplitude=3.0)
    charts.update_setpoint_chart()
    assert charts.y_axes["setpoint"] == AxisRange(-5.0, 5.0)


def test_x_axis_scrolls_after_window():
    charts = make_charts()
    for _ in range(32):
        charts.update_setpoint_chart()
    assert charts.x_axes["setpoint"] == AxisRange(1.0, 31.0)
    assert len(charts.output_series) == 30


def test_error_chart_range_covers_points():
    charts = make_charts()
    for _ in range(10):
        charts.update_error_chart()
    axis = charts.y_axes["error"]
    assert all(axis.min <= y <= axis.max for y in charts.error_series.ys)
    assert charts.error_series.ys[-1] == charts.simulator.controller.error


def test_pid_chart_range_has_margin():
    charts = make_charts()
    for _ in range(5):
        charts.update_pid_chart()
    values = charts.p_series.ys + charts.i_series.ys + charts.d_series.ys
    axis = charts.y_axes["pid"]
    assert axis.min == pytest.approx(min(values) - 5.0)
    assert axis.max == pytest.approx(max(values) + 5.0)
    assert charts.p_series.ys[-1] == charts.simulator.controller.p_term


def test_control_chart_tracks_last_output():
    charts = make_charts()
    for _ in range(6):
        charts.update_control_chart()
    assert charts.control_series.ys[-1] == charts.simulator.last_output
    axis = charts.y_axes["control"]
    assert all(axis.min <= y <= axis.max for y in charts.control_series.ys)


def test_update_all_steps_four_times():
    charts = make_charts()
    charts.update_all()
    charts.update_all()
    assert charts.time == 8
    assert len(charts.output_series) == 2
    assert len(charts.error_series) == 2
    assert len(charts.p_series) == 2
    assert len(charts.control_series) == 2
    assert charts.control_series.xs == [3.0, 7.0]