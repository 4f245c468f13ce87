"""
Application Initialization
==========================
This module wires the scene state to the main window and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Instantiates the scene state (SceneContext).
3. Instantiates the Main Window (View) and hands it the state.
4. Kicks off loading the star catalog.
"""
import sys
from PySide6.QtWidgets import QApplication

from hrdiagram import config
from hrdiagram.logging_config import setup_logging
from hrdiagram.model.state import SceneContext
from hrdiagram.view.main_window import MainWindow


def main() -> None:
    # 1. Setup Logging
    setup_logging(level=config.LOG_LEVEL)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName("HR Diagram")

    # An optional first argument overrides the catalog path
    args = app.arguments()[1:]
    stars_path = args[0] if args else config.STARS_PATH

    # 3. Initialize the scene state
    context = SceneContext()

    # 4. Initialize the Main Window, passing the state
    window = MainWindow(context, label_font_path=config.LABEL_FONT_PATH)
    window.show()
    window.load_catalog(stars_path)

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
