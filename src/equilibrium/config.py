"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths (e.g., "/home/.../rendered_images")
   scattered throughout the code.
2. Defaults: The solver, the obstacle animation and the rendering stage share
   the same numbers (block size, seed values, colors). They live here so a
   change in one place reaches all of them.

Exports:
    PROJECT_ROOT (Path): Directory that contains the ``src`` folder.
    DEFAULT_RENDERED_IMAGES_DIR (Path): Where frames are written by default.
"""
from __future__ import annotations

from pathlib import Path


def get_project_path(relative_path: str) -> Path:
    """
    Get absolute path to a location relative to the project root.

    config.py is in src/equilibrium/, so the root is two levels above the
    package directory.
    """
    current_file_path: Path = Path(__file__).resolve()
    project_root: Path = current_file_path.parent.parent.parent
    return project_root / relative_path


# Paths
PROJECT_ROOT: Path = get_project_path("")
RENDERED_IMAGES_DIRNAME: str = "rendered_images"
DEFAULT_RENDERED_IMAGES_DIR: Path = get_project_path(RENDERED_IMAGES_DIRNAME)
DENSITY_IMAGE_TEMPLATE: str = "density{frame_number}.jpg"
JPEG_QUALITY: int = 95

# Simulation defaults
DEFAULT_DELTA_T: float = 0.02
DEFAULT_FRAMES: int = 16
DEFAULT_SIZE: int = 128
DEFAULT_ITERATIONS: int = 16
MIN_GRID_SIZE: int = 3

# Fluid defaults
DEFAULT_DIFFUSION: float = 0.0
DEFAULT_VISCOSITY: float = 0.001
DEFAULT_FLUID_COLOR: str = "#1e90ff"
DEFAULT_WORLD_COLOR: str = "black"
DEFAULT_OBSTACLES_COLOR: str = "red"

# Initial state of a fresh grid
INITIAL_VELOCITY: tuple[float, float] = (1.0, 1.0)
INITIAL_DENSITY: float = 0.9
INITIAL_DENSITY_HALF_WIDTH: int = 10

# Forcing
NOISE_ANGLE_SCALE: float = 6.28 * 2.0
NOISE_IMPULSE_SCALE: float = 2.0

# Obstacle animation
CELL_SIZE: int = 8
DEFAULT_OBSTACLE_MARGIN: int = 10
