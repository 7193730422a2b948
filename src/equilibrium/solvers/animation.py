"""
Obstacle Animation
==================
Lets the obstacle set evolve on its own, frame after frame.

The grid is coarsened into ``CELL_SIZE x CELL_SIZE`` blocks. A block is alive
when an obstacle starts inside it. One generation step uses the 4-neighbourhood:
a live block survives with 2 or 3 live neighbours, a dead block is born with
more than 3.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt
from scipy.signal import convolve2d

from equilibrium import config
from equilibrium.model.obstacles import ObstaclesType, Rectangle

logger = logging.getLogger(__name__)

# Von Neumann neighbourhood (without the center)
NEIGHBOURHOOD = np.array(
    [[0, 1, 0],
     [1, 0, 1],
     [0, 1, 0]],
    dtype=np.int64
)


def normalized_width(size: int) -> int:
    """Number of blocks along one side of the grid."""
    return size // config.CELL_SIZE


def random_cell_bitmap(size: int, rng: Optional[np.random.Generator] = None) -> npt.NDArray[np.bool_]:
    """Random generation; indexed ``[block_y, block_x]``."""
    rng = rng if rng is not None else np.random.default_rng()
    width = normalized_width(size)
    return rng.random((width, width)) < 0.5


def obstacles_to_cell_bitmap(obstacles: list[ObstaclesType], size: int) -> npt.NDArray[np.bool_]:
    width = normalized_width(size)
    bitmap = np.zeros((width, width), dtype=bool)
    for obstacle in obstacles:
        x, y = obstacle.get_approximate_points()[0]
        block_x, block_y = x // config.CELL_SIZE, y // config.CELL_SIZE
        if block_x < width and block_y < width:
            bitmap[block_y, block_x] = True
    return bitmap


def cell_bitmap_to_obstacles(bitmap: npt.NDArray[np.bool_], size: int) -> list[ObstaclesType]:
    """
    One rectangle per live block.

    The far corner is clipped to ``size - 1`` so the last block of the grid is
    still a valid rectangle.
    """
    obstacles: list[ObstaclesType] = []
    for block_y, block_x in np.argwhere(bitmap):
        x0 = int(block_x) * config.CELL_SIZE
        y0 = int(block_y) * config.CELL_SIZE
        x1 = min(x0 + config.CELL_SIZE, size - 1)
        y1 = min(y0 + config.CELL_SIZE, size - 1)
        obstacles.append(Rectangle((x0, y0), (x1, y1), size))
    return obstacles


def next_generation(bitmap: npt.NDArray[np.bool_]) -> npt.NDArray[np.bool_]:
    if bitmap.size == 0:
        return bitmap.copy()
    neighbours = convolve2d(bitmap.astype(np.int64), NEIGHBOURHOOD, mode="same", boundary="fill", fillvalue=0)
    survives = bitmap & (neighbours >= 2) & (neighbours <= 3)
    born = ~bitmap & (neighbours > 3)
    return survives | born


def game_of_life(previous: list[ObstaclesType], size: int) -> list[ObstaclesType]:
    """Evolve an obstacle list by one generation."""
    current = next_generation(obstacles_to_cell_bitmap(previous, size))
    obstacles = cell_bitmap_to_obstacles(current, size)
    logger.debug(f"Obstacle generation: {len(previous)} -> {len(obstacles)} blocks")
    return obstacles
