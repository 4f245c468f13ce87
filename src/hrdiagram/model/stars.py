"""
Star Data Structures
====================
StarRecord is one validated catalog row; PlotPoint is its rendered form.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from hrdiagram.model.colors import RGB


@dataclass(frozen=True)
class StarRecord:
    """A validated catalog entry."""
    hip: str               # Hipparcos catalog number
    temperature: float     # K
    luminosity: float      # L_Sun


@dataclass(frozen=True)
class PlotPoint:
    """
    A star placed in the scene.
    Keeps a reference to its record so a click can be resolved back to data.
    """
    position: Tuple[float, float, float]
    color: RGB
    record: StarRecord


def format_star_info(record: StarRecord) -> list[tuple[str, str]]:
    """Key/value lines shown in the info panel for a selected star."""
    return [
        ("Star", f"HIP{record.hip}"),
        ("Luminosity", f"{record.luminosity:.4f} L_Sun"),
        ("Temperature", f"{int(record.temperature + 0.5)} K"),
    ]
