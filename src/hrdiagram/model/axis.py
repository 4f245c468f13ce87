"""
Plot Axes & Coordinate Mapping
==============================
Defines the scale constants of the diagram and maps star quantities into
plot space.

Why is this file needed?
------------------------
1. Single source of truth: The star loader, the axis builder and the picker
   all need the same scale factors. They read them from one AxisConfig.
2. Purity: Positions are a deterministic function of (temperature,
   luminosity) and the config. No shared mutable state.

Layout:
    X (temperature) is linear and inverted, so hot stars sit on the left.
    Y (luminosity) is base-10 logarithmic.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AxisConfig:
    """Scale constants shared by every part of the diagram."""
    temp_scale: float = 0.055     # world units per Kelvin
    lum_scale: float = 60.0       # world units per decade of luminosity
    size_scale: float = 2.0       # star sphere radius

    min_temperature: float = 2000.0     # K
    max_temperature: float = 14000.0    # K
    min_luminosity: float = 0.0001      # L_Sun
    max_luminosity: float = 10000.0     # L_Sun

    x_offset: float = -300.0
    y_offset: float = 50.0

    def temperature_in_range(self, temperature: float) -> bool:
        return self.min_temperature <= temperature <= self.max_temperature

    def luminosity_in_range(self, luminosity: float) -> bool:
        return self.min_luminosity <= luminosity <= self.max_luminosity


DEFAULT_AXIS_CONFIG = AxisConfig()


def x_for_temperature(temperature: float, config: AxisConfig = DEFAULT_AXIS_CONFIG) -> float:
    """Linear, inverted temperature axis."""
    return (config.max_temperature - temperature) * config.temp_scale + config.x_offset


def y_for_luminosity(luminosity: float, config: AxisConfig = DEFAULT_AXIS_CONFIG) -> float:
    """
    Logarithmic luminosity axis.

    Raises:
        ValueError: If luminosity is not strictly positive.
    """
    if not luminosity > 0:
        raise ValueError(f"Luminosity must be positive, got {luminosity}.")
    return math.log10(luminosity) * config.lum_scale + config.y_offset


def position_for(
    temperature: float,
    luminosity: float,
    config: AxisConfig = DEFAULT_AXIS_CONFIG
) -> Tuple[float, float]:
    """
    Map a star to its (x, y) plot position.

    Args:
        temperature: Effective temperature in Kelvin.
        luminosity: Luminosity in solar units. Must be > 0.
        config: Axis scale constants.

    Returns:
        (x, y) in world units on the Z=0 plane.
    """
    return x_for_temperature(temperature, config), y_for_luminosity(luminosity, config)
