"""
Axis Geometry Builder
=====================
Derives the decorative geometry of the diagram (axis lines, tick marks, tick
labels and axis titles) from the AxisConfig alone.

Why is this file needed?
------------------------
1. Separation: The geometry is plain numbers here. The 3D widget only turns
   it into actors, so the layout can be tested without a display.
2. Consistency: Ticks are placed with the same mapping functions as the stars.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from hrdiagram.model.axis import AxisConfig, DEFAULT_AXIS_CONFIG, x_for_temperature, y_for_luminosity

Point3 = Tuple[float, float, float]

TEMPERATURE_TICKS: Tuple[float, ...] = (3000, 5000, 7000, 9000, 11000, 13000)
LUMINOSITY_TICKS: Tuple[float, ...] = (0.001, 0.01, 0.1, 1, 10, 100, 1000, 10000)

TICK_LENGTH = 10.0
TICK_LABEL_SIZE = 8.0
TITLE_LABEL_SIZE = 12.0

X_TICK_LABEL_GAP = 20.0         # below the X axis
Y_TICK_LABEL_OFFSET = (-40.0, -2.0)
Y_TITLE_X = -380.0
Y_TITLE_LIFT = 20.0


@dataclass
class LineSegment:
    start: Point3
    end: Point3


@dataclass
class TextLabel:
    text: str
    position: Point3
    size: float
    rotation_z: float = 0.0     # degrees


@dataclass
class AxesGeometry:
    """Everything drawn around the stars."""
    axis_lines: List[LineSegment] = field(default_factory=list)
    ticks: List[LineSegment] = field(default_factory=list)
    labels: List[TextLabel] = field(default_factory=list)

    @property
    def lines(self) -> List[LineSegment]:
        return self.axis_lines + self.ticks


def format_tick_value(value: float) -> str:
    """Literal tick value: 0.001, 1, 10000 (no exponent, no trailing .0)."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:f}".rstrip("0").rstrip(".")


def build_axis_lines(config: AxisConfig) -> List[LineSegment]:
    y_x_axis = y_for_luminosity(config.min_luminosity, config)
    x_y_axis = x_for_temperature(config.max_temperature, config)

    x_axis = LineSegment(
        start=(x_y_axis, y_x_axis, 0.0),
        end=(x_for_temperature(config.min_temperature, config), y_x_axis, 0.0),
    )
    y_axis = LineSegment(
        start=(x_y_axis, y_x_axis, 0.0),
        end=(x_y_axis, y_for_luminosity(config.max_luminosity, config), 0.0),
    )
    return [x_axis, y_axis]


def build_temperature_ticks(
    config: AxisConfig,
    temperatures: Sequence[float] = TEMPERATURE_TICKS
) -> Tuple[List[LineSegment], List[TextLabel]]:
    """Vertical ticks across the X axis, labelled '<T> K'."""
    y_axis_line = y_for_luminosity(config.min_luminosity, config)
    half = TICK_LENGTH / 2

    ticks, labels = [], []
    for temp in temperatures:
        x = x_for_temperature(temp, config)
        ticks.append(LineSegment((x, y_axis_line - half, 0.0), (x, y_axis_line + half, 0.0)))
        labels.append(TextLabel(
            text=f"{format_tick_value(temp)} K",
            position=(x, y_axis_line - X_TICK_LABEL_GAP, 0.0),
            size=TICK_LABEL_SIZE,
        ))
    return ticks, labels


def build_luminosity_ticks(
    config: AxisConfig,
    luminosities: Sequence[float] = LUMINOSITY_TICKS
) -> Tuple[List[LineSegment], List[TextLabel]]:
    """Horizontal ticks across the Y axis at powers of ten."""
    x_axis_line = x_for_temperature(config.max_temperature, config)
    half = TICK_LENGTH / 2
    dx, dy = Y_TICK_LABEL_OFFSET

    ticks, labels = [], []
    for lum in luminosities:
        y = y_for_luminosity(lum, config)
        ticks.append(LineSegment((x_axis_line - half, y, 0.0), (x_axis_line + half, y, 0.0)))
        labels.append(TextLabel(
            text=format_tick_value(lum),
            position=(x_axis_line + dx, y + dy, 0.0),
            size=TICK_LABEL_SIZE,
        ))
    return ticks, labels


def build_axis_titles(config: AxisConfig) -> List[TextLabel]:
    return [
        TextLabel(
            text="Temperature (K)",
            position=(0.0, y_for_luminosity(config.min_luminosity, config) - config.y_offset, 0.0),
            size=TITLE_LABEL_SIZE,
        ),
        TextLabel(
            text="Luminosity (L_Sun)",
            position=(Y_TITLE_X, y_for_luminosity(1.0, config) - config.y_offset + Y_TITLE_LIFT, 0.0),
            size=TITLE_LABEL_SIZE,
            rotation_z=90.0,
        ),
    ]


def build_axes(config: AxisConfig = DEFAULT_AXIS_CONFIG) -> AxesGeometry:
    """
    Build all axis geometry for the given config.
    Tick values outside the configured ranges are dropped.
    """
    temps = [t for t in TEMPERATURE_TICKS if config.temperature_in_range(t)]
    lums = [v for v in LUMINOSITY_TICKS if config.luminosity_in_range(v)]

    x_ticks, x_labels = build_temperature_ticks(config, temps)
    y_ticks, y_labels = build_luminosity_ticks(config, lums)

    return AxesGeometry(
        axis_lines=build_axis_lines(config),
        ticks=x_ticks + y_ticks,
        labels=x_labels + y_labels + build_axis_titles(config),
    )
