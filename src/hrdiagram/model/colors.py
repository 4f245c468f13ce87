"""
Star Color Ramp
===============
Approximate visible color of a star as a function of its surface temperature.

The ramp is a piecewise-linear interpolation over a fixed table of control
points, from deep red (2000 K) to very hot blue (40000 K).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class ColorControlPoint:
    temperature: float
    color: RGB


COLOR_CONTROL_POINTS: Tuple[ColorControlPoint, ...] = (
    ColorControlPoint(2000.0, RGB(255, 50, 0)),      # Deep red
    ColorControlPoint(3000.0, RGB(255, 80, 0)),      # Red
    ColorControlPoint(4000.0, RGB(255, 140, 0)),     # Orange
    ColorControlPoint(5000.0, RGB(255, 255, 0)),     # Yellow
    ColorControlPoint(6000.0, RGB(255, 255, 240)),   # Yellowish white
    ColorControlPoint(8000.0, RGB(255, 255, 255)),   # White
    ColorControlPoint(10000.0, RGB(201, 215, 255)),  # Light blue
    ColorControlPoint(12000.0, RGB(100, 150, 255)),  # Blue-ish
    ColorControlPoint(20000.0, RGB(64, 156, 255)),   # Blue
    ColorControlPoint(30000.0, RGB(0, 80, 255)),     # Deep blue
    ColorControlPoint(40000.0, RGB(0, 0, 255)),      # Very hot blue
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _lerp_channel(lower: int, upper: int, fraction: float) -> int:
    return _round_half_up(lower + fraction * (upper - lower))


def color_for(
    temperature: float,
    control_points: Sequence[ColorControlPoint] = COLOR_CONTROL_POINTS
) -> RGB:
    """
    Interpolate the star color for a temperature.

    The temperature is clamped to the table range. The first segment whose
    bounds contain the temperature wins, so a value sitting exactly on a
    control point resolves to the end of the earlier segment.

    Args:
        temperature: Temperature in Kelvin.
        control_points: Control points sorted ascending by temperature.

    Returns:
        Interpolated RGB color.

    Raises:
        ValueError: For NaN input or a table with fewer than two points.
    """
    if math.isnan(temperature):
        raise ValueError("Cannot map NaN temperature to a color.")
    if len(control_points) < 2:
        raise ValueError("Color table needs at least two control points.")

    t = max(control_points[0].temperature, min(control_points[-1].temperature, temperature))

    for lower, upper in zip(control_points[:-1], control_points[1:]):
        if lower.temperature <= t <= upper.temperature:
            fraction = (t - lower.temperature) / (upper.temperature - lower.temperature)
            return RGB(
                _lerp_channel(lower.color.r, upper.color.r, fraction),
                _lerp_channel(lower.color.g, upper.color.g, fraction),
                _lerp_channel(lower.color.b, upper.color.b, fraction),
            )

    # Unreachable for a sorted table
    raise ValueError(f"Color table is not sorted; no segment contains {t} K.")
