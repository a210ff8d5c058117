"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Tolerances: The parallelism threshold used by both the pure-Python solver
   and the compiled batch kernel lives in one place.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (the scenario table) when the app is frozen into an .exe.

Exports:
    PARALLEL_TOLERANCE (float): Cross-product norm below which two segments are parallel.
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_SCENARIOS_PATH (str): Absolute path to the bundled scenario table.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev, installed and PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, "segmentdistance", relative_path)

    # Resolve relative to this file: config.py is in src/segmentdistance/
    package_dir: Path = Path(__file__).resolve().parent
    return os.path.join(str(package_dir), relative_path)


# Global Constants
PARALLEL_TOLERANCE: float = 1e-5

ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_SCENARIOS_PATH: str = os.path.join(ASSETS_PATH, "scenarios.json")
