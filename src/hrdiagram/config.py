"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global settings.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (star catalog, fonts) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_STARS_PATH (str): Absolute path to the bundled star catalog.
    STARS_PATH (str): Catalog to load ($HRDIAGRAM_STARS overrides the default).
    LABEL_FONT_PATH (str | None): Optional TTF for axis labels ($HRDIAGRAM_LABEL_FONT).
    LOG_LEVEL (int): Logging level ($HRDIAGRAM_LOG_LEVEL, e.g. "DEBUG").
"""
import logging
import sys
import os
from pathlib import Path
from typing import Optional


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/hrdiagram/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


def get_log_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name like 'debug' to its logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_STARS_PATH: str = os.path.join(ASSETS_PATH, "stars.csv")

STARS_PATH: str = os.environ.get("HRDIAGRAM_STARS") or DEFAULT_STARS_PATH
LABEL_FONT_PATH: Optional[str] = os.environ.get("HRDIAGRAM_LABEL_FONT") or None
LOG_LEVEL: int = get_log_level(os.environ.get("HRDIAGRAM_LOG_LEVEL"))

if not os.path.exists(ASSETS_PATH):
    print(f"WARNING: Assets path not found at {ASSETS_PATH}")
