"""
Tests for the axis geometry builder.
"""
import pytest

from hrdiagram.controller.scene_builder import (
    LUMINOSITY_TICKS,
    TEMPERATURE_TICKS,
    TICK_LENGTH,
    build_axes,
    format_tick_value,
)
from hrdiagram.model.axis import AxisConfig


@pytest.fixture
def axes():
    return build_axes()


class TestAxisLines:

    def test_x_axis_spans_temperature_range(self, axes):
        x_axis = axes.axis_lines[0]
        assert x_axis.start == pytest.approx((-300.0, -190.0, 0.0))
        assert x_axis.end == pytest.approx((360.0, -190.0, 0.0))

    def test_y_axis_spans_luminosity_range(self, axes):
        y_axis = axes.axis_lines[1]
        assert y_axis.start == pytest.approx((-300.0, -190.0, 0.0))
        assert y_axis.end == pytest.approx((-300.0, 290.0, 0.0))


class TestTicks:

    def test_counts(self, axes):
        assert len(axes.ticks) == len(TEMPERATURE_TICKS) + len(LUMINOSITY_TICKS)
        assert len(axes.lines) == 2 + len(axes.ticks)

    def test_temperature_tick_position(self, axes):
        tick = axes.ticks[0]   # 3000 K
        assert tick.start == pytest.approx((305.0, -190.0 - TICK_LENGTH / 2, 0.0))
        assert tick.end == pytest.approx((305.0, -190.0 + TICK_LENGTH / 2, 0.0))

    def test_luminosity_tick_position(self, axes):
        tick = axes.ticks[len(TEMPERATURE_TICKS) + 3]   # L = 1
        assert tick.start == pytest.approx((-305.0, 50.0, 0.0))
        assert tick.end == pytest.approx((-295.0, 50.0, 0.0))

    def test_out_of_range_ticks_dropped(self):
        axes = build_axes(AxisConfig(min_luminosity=0.1, max_luminosity=100.0, min_temperature=4000.0))
        lum_labels = [l.text for l in axes.labels if not l.text.endswith("K") and "(" not in l.text]
        assert lum_labels == ["0.1", "1", "10", "100"]
        temp_labels = [l.text for l in axes.labels if l.text.endswith(" K")]
        assert temp_labels == ["5000 K", "7000 K", "9000 K", "11000 K", "13000 K"]


class TestLabels:

    def test_texts(self, axes):
        texts = [label.text for label in axes.labels]
        assert texts[:6] == ["3000 K", "5000 K", "7000 K", "9000 K", "11000 K", "13000 K"]
        assert texts[6:14] == ["0.001", "0.01", "0.1", "1", "10", "100", "1000", "10000"]
        assert texts[14:] == ["Temperature (K)", "Luminosity (L_Sun)"]

    def test_temperature_label_below_axis(self, axes):
        label = axes.labels[0]
        assert label.position == pytest.approx((305.0, -210.0, 0.0))
        assert label.size == 8

    def test_luminosity_label_left_of_axis(self, axes):
        label = axes.labels[6 + 3]   # "1"
        assert label.position == pytest.approx((-340.0, 48.0, 0.0))

    def test_titles(self, axes):
        x_title, y_title = axes.labels[-2:]
        assert x_title.position == pytest.approx((0.0, -240.0, 0.0))
        assert x_title.rotation_z == 0
        assert y_title.position == pytest.approx((-380.0, 20.0, 0.0))
        assert y_title.rotation_z == 90
        assert x_title.size == y_title.size == 12


class TestFormatTickValue:

    @pytest.mark.parametrize("value, text", [
        (0.0001, "0.0001"),
        (0.001, "0.001"),
        (0.1, "0.1"),
        (1, "1"),
        (1.0, "1"),
        (10000, "10000"),
        (3000.0, "3000"),
    ])
    def test_literal(self, value, text):
        assert format_tick_value(value) == text
