"""
Scene State (Data Model)
========================
This module defines the central data structure for the running viewer.

Why is this file needed?
------------------------
1. State Management: It holds the plotted stars and the current selection in
   one place instead of module-level globals.
2. Decoupling: The loader writes to this object during the build stage;
   the picker and the views only read from it afterwards.

Classes:
    SceneContext: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from hrdiagram.model.axis import AxisConfig, DEFAULT_AXIS_CONFIG
from hrdiagram.model.stars import PlotPoint, StarRecord

logger = logging.getLogger(__name__)


@dataclass
class SceneContext:
    """
    Holds the state of the open diagram.
    Pass this instance to the loader, the picker and the views.
    """
    axis_config: AxisConfig = DEFAULT_AXIS_CONFIG
    source_path: Optional[str] = None

    pickable_points: List[PlotPoint] = field(default_factory=list)
    selected: Optional[StarRecord] = None

    def register_point(self, point: PlotPoint) -> None:
        self.pickable_points.append(point)

    def reset(self) -> None:
        """Drop all stars for a fresh load."""
        self.source_path = None
        self.pickable_points = []
        self.selected = None
        logger.info("Scene state has been reset.")
