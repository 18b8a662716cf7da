"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: Decoder and builder thresholds live in one place instead of
   being repeated as magic numbers.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find bundled sample meshes when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_PLY_PATH (str): Absolute path to the bundled sample cube.
"""
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
    # config.py is in src/plymesh/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Decoder constants
ASCII_FORMAT_TOKEN: str = "ascii"
BYTE_COLOR_SCALE: float = 255.0
SUPPORTED_POLYGON_SIZES: tuple[int, ...] = (3, 4)

# Builder constants
MAX_UINT16_VERTEX_COUNT: int = 65535
DEFAULT_MESH_COLOR: str = "#fff"

# Global paths
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_PLY_PATH: str = os.path.join(ASSETS_PATH, "cube.ply")
