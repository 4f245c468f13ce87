"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling slow I/O.

Why is this file needed?
------------------------
1. Responsiveness: Reading a large catalog on the main thread would freeze the
   window before the first frame. The worker reads it in the background.
2. Signals: The rows are handed back to the GUI thread through a Qt Signal,
   where the scene is built. Exactly one of `table_loaded` or
   `error_occurred` is emitted per run.

Classes:
    StarTableWorker: Reads the star CSV (fetch stage).
"""
import logging
from PySide6.QtCore import QThread, Signal

from hrdiagram.model.io import read_star_table, StarTableError

logger = logging.getLogger(__name__)


class StarTableWorker(QThread):
    # Signals to update the UI from the background
    table_loaded = Signal(str, object)   # (filepath, list[dict[str, str]])
    error_occurred = Signal(str)

    def __init__(self, filepath: str):
        super().__init__()
        self.filepath = filepath

    def run(self):
        try:
            logger.info("Loading star table in background thread...")
            rows = read_star_table(self.filepath)
        except StarTableError as e:
            logger.error(f"Error loading star table: {e}")
            self.error_occurred.emit(str(e))
            return

        self.table_loaded.emit(self.filepath, rows)
