"""
3D Visualization Widget (PyVista Wrapper)
=========================================
Renders the HR diagram: axes layer (lines + labels) and stars layer, and turns
left clicks into star selections.
"""

from __future__ import annotations

from typing import Optional, List, Sequence, Tuple

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor
import pyvista as pv
from vtkmodules.vtkRenderingCore import vtkTextActor3D

from hrdiagram.controller.picking import (
    CameraPose,
    StarPicker,
    display_to_pointer,
    pick_distance_limits,
)
from hrdiagram.controller.scene_builder import AxesGeometry
from hrdiagram.model.stars import PlotPoint, StarRecord
from hrdiagram.model.state import SceneContext
from hrdiagram.view.widgets.info_panel import StarInfoPanel
from hrdiagram.view.widgets.vtk_utils import VtkUtils, LabelFontError

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#808080"
AXIS_COLOR = "black"

CAMERA_POSITION = (0.0, 0.0, 400.0)
CAMERA_FOCAL_POINT = (0.0, 0.0, 0.0)
CAMERA_VIEW_UP = (0.0, 1.0, 0.0)
CAMERA_VIEW_ANGLE = 75.0
CAMERA_CLIPPING_RANGE = (0.1, 1000.0)

# Max pointer travel (px) between press and release that still counts as a click
CLICK_TOLERANCE = 3


class HRDiagramWidget(QWidget):
    def __init__(self, context: SceneContext, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.context = context

        # Created on first selection
        self._info_panel: Optional[StarInfoPanel] = None

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Helpers ---
        self._vtk_utils = VtkUtils()
        self._picker = StarPicker(context)

        # --- Actors state ---
        self._axis_lines_actor: Optional[pv.Actor] = None
        self._label_actors: List[vtkTextActor3D] = []
        self._stars_actor: Optional[pv.Actor] = None

        self._press_position: Optional[Tuple[int, int]] = None
        self._attach_observers()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def draw_axes(self, geometry: AxesGeometry, font_path: Optional[str] = None) -> None:
        """
        Draws axis lines and ticks, then the labels.
        Labels are skipped if the font cannot be loaded.
        """
        self._clear_axes_layer()

        lines_pd = self._vtk_utils.segments_to_polydata(geometry.lines)
        if lines_pd.n_points > 0:
            self._axis_lines_actor = self.plotter.add_mesh(
                lines_pd,
                color=AXIS_COLOR,
                line_width=1,
                lighting=False,
                pickable=False,
                show_scalar_bar=False,
            )

        try:
            font_file = self._vtk_utils.load_label_font(font_path)
        except LabelFontError as e:
            logger.error(f"Axis labels disabled: {e}")
        else:
            for label in geometry.labels:
                actor = self._vtk_utils.make_text_actor(label, font_file=font_file)
                self.plotter.add_actor(actor, reset_camera=False, pickable=False)
                self._label_actors.append(actor)

        self.plotter.render()

    def set_stars(self, points: Sequence[PlotPoint]) -> None:
        """Replaces the stars layer."""
        self._clear_stars_layer()
        logger.info(f"Rendering {len(points)} stars.")

        if points:
            stars_pd = self._vtk_utils.stars_to_polydata(points, self.context.axis_config.size_scale)
            self._stars_actor = self.plotter.add_mesh(
                stars_pd,
                scalars="rgb",
                rgb=True,
                lighting=False,
                pickable=False,
                show_scalar_bar=False,
            )

        # A reload clears the selection; drop the stale panel with it
        if self.context.selected is None:
            self.hide_star_info()

        self.plotter.render()

    def reset_view(self) -> None:
        """Restores the initial camera."""
        cam = self.plotter.camera
        cam.position = CAMERA_POSITION
        cam.focal_point = CAMERA_FOCAL_POINT
        cam.up = CAMERA_VIEW_UP
        cam.view_angle = CAMERA_VIEW_ANGLE
        cam.clipping_range = CAMERA_CLIPPING_RANGE
        self.plotter.render()

    def show_star_info(self, record: StarRecord) -> None:
        if self._info_panel is None:
            self._info_panel = StarInfoPanel(self)
        self._info_panel.show_star(record)

    def hide_star_info(self) -> None:
        if self._info_panel is not None:
            self._info_panel.hide()

    def pick_at(self, pointer_x: float, pointer_y: float) -> Optional[StarRecord]:
        """
        Picks the star under a pointer position (render-window pixels, origin
        top-left) and shows it. Returns None and keeps the panel as-is on a miss.
        """
        width, height = self.plotter.window_size
        if width <= 0 or height <= 0:
            return None

        camera = CameraPose.from_vtk(
            self.plotter.camera,
            aspect=width / height,
            clipping_range=pick_distance_limits(CAMERA_CLIPPING_RANGE, self.plotter.camera.clipping_range),
        )
        record = self._picker.pick(pointer_x, pointer_y, camera, (width, height))
        if record is not None:
            self.show_star_info(self.context.selected)
        return record

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _clear_axes_layer(self) -> None:
        if self._axis_lines_actor:
            self.plotter.remove_actor(self._axis_lines_actor)
            self._axis_lines_actor = None
        for actor in self._label_actors:
            self.plotter.remove_actor(actor)
        self._label_actors.clear()

    def _clear_stars_layer(self) -> None:
        if self._stars_actor:
            self.plotter.remove_actor(self._stars_actor)
            self._stars_actor = None

    # ------------------------------------------------------------------------------
    # Internal: Setup & Observers
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        # Left drag must not move the camera, so a click is always a pick
        self.plotter.enable_image_style()
        self.reset_view()

    def _attach_observers(self) -> None:
        iren = self.plotter.iren
        iren.add_observer("LeftButtonPressEvent", self._on_left_press)
        iren.add_observer("LeftButtonReleaseEvent", self._on_left_release)

    def _event_position(self) -> Tuple[int, int]:
        x, y = self.plotter.iren.get_event_position()
        _, height = self.plotter.window_size
        return display_to_pointer(x, y, height)

    def _on_left_press(self, *_) -> None:
        self._press_position = self._event_position()

    def _on_left_release(self, *_) -> None:
        if self._press_position is None:
            return
        x0, y0 = self._press_position
        self._press_position = None

        x, y = self._event_position()
        if abs(x - x0) > CLICK_TOLERANCE or abs(y - y0) > CLICK_TOLERANCE:
            return
        self.pick_at(x, y)

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._info_panel is not None:
            self._info_panel.reposition()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
