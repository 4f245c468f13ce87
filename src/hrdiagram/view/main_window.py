"""
Main Application Window
=======================
The primary GUI container holding the menu bar, the 3D diagram and the
status bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It runs the load pipeline. The fetch stage happens on a
   StarTableWorker; its result is handed back here where the build stage
   (validation, plotting, rendering) runs on the GUI thread.
"""
import os
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QFileDialog
from PySide6.QtGui import QAction, QCloseEvent

import logging

from hrdiagram.controller.scene_builder import build_axes
from hrdiagram.controller.workers import StarTableWorker
from hrdiagram.model.io import load_and_plot
from hrdiagram.model.state import SceneContext
from hrdiagram.view.widgets.plot_3d import HRDiagramWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "HR Diagram"


class MainWindow(QMainWindow):
    def __init__(self, context: SceneContext, label_font_path: Optional[str] = None) -> None:
        super().__init__()
        self.context: SceneContext = context
        self.label_font_path = label_font_path
        self.load_worker: Optional[StarTableWorker] = None

        self.update_window_title()
        self.resize(1400, 900)

        # --- 3D Visualization ---
        self.visualizer = HRDiagramWidget(self.context)
        self.setCentralWidget(self.visualizer)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # Axes do not depend on star data; draw them right away
        self.visualizer.draw_axes(build_axes(self.context.axis_config), font_path=self.label_font_path)
        self.statusBar().showMessage("Ready")

    def _create_actions(self) -> None:
        self.act_open = QAction("Open Catalog...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_reset_view = QAction("Reset View", self)
        self.act_reset_view.setShortcut("Ctrl+R")
        self.act_reset_view.triggered.connect(self.visualizer.reset_view)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self.act_reset_view)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        filename = self.context.source_path if self.context.source_path else "No catalog"
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{os.path.basename(filename)}]")

    # --- LOAD PIPELINE ---
    def load_catalog(self, filepath: str) -> None:
        """Fetch stage: start reading the table in the background."""
        if self.load_worker is not None and self.load_worker.isRunning():
            logger.warning("A catalog is already loading; ignoring request.")
            return

        self.statusBar().showMessage(f"Loading {os.path.basename(filepath)}...")
        self.load_worker = StarTableWorker(filepath)
        self.load_worker.table_loaded.connect(self.on_table_loaded)
        self.load_worker.error_occurred.connect(self.on_load_error)
        self.load_worker.start()

    def on_table_loaded(self, filepath: str, rows: list) -> None:
        """Build stage: validate rows, register points, render."""
        self.context.reset()
        self.context.source_path = filepath

        points = list(load_and_plot(rows, self.context))
        self.visualizer.set_stars(points)

        self.update_window_title()
        self.statusBar().showMessage(f"{len(points)} stars plotted ({len(rows) - len(points)} rows skipped)")

    def on_load_error(self, message: str) -> None:
        # Already logged by the worker; axes stay, no stars
        self.statusBar().showMessage(f"Failed to load catalog: {message}")

    # --- FILE SLOTS ---
    def on_file_open(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open Star Catalog", "", "CSV Files (*.csv)"
        )
        if fname:
            self.load_catalog(fname)

    def closeEvent(self, event: QCloseEvent, /) -> None:
        if self.load_worker is not None and self.load_worker.isRunning():
            self.load_worker.wait()

        if self.visualizer and self.visualizer.plotter:
            self.visualizer.plotter.close()

        event.accept()
