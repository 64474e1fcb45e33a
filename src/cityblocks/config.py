"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It keeps the dataset and texture locations in one place instead
   of scattering relative paths across the views.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (dataset, textures) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_DATA_PATH (str): Absolute path to the bundled emissions CSV.
    GRASS_TEXTURE_PATH (str): Absolute path to the floor texture.
"""
import logging
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/cityblocks/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_DATA_PATH: str = os.path.join(ASSETS_PATH, "data.csv")
GRASS_TEXTURE_PATH: str = os.path.join(ASSETS_PATH, "textures", "grass.jpg")

# Startup
DEFAULT_YEAR: int = 2015
LOG_LEVEL: int = logging.INFO

# Frame loop (~60 Hz)
FRAME_INTERVAL_MS: int = 16

VISIBLE_APP_NAME = "CityBlocks: CO2 Emissions"
