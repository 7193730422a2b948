"""
Fluid Grid
==========
State of one simulation run and the fixed step sequence that advances it.

Why is this file needed?
------------------------
1. Ownership: A ``Fluid`` owns every per-cell array of the run. The compiled
   kernels only ever see those arrays, never the object.
2. Sequencing: ``step`` runs diffuse -> project -> advect -> project for the
   velocities and diffuse -> advect for the density, always in that order.
3. Walls: Obstacles are stamped into ``cells_type`` before a step and removed
   after it, so the boundary handling follows whatever shape is present.
"""
from __future__ import annotations

import copy
import logging
from typing import Optional

import numpy as np
import numpy.typing as npt

from equilibrium import config
from equilibrium.model.configs import FluidConfigs, SimulationConfigs
from equilibrium.model.geometry_primitives import Line, Point
from equilibrium.model.obstacles import ObstaclesType
from equilibrium.solvers import kernels
from equilibrium.solvers.kernels import Orientation, WallKind
from equilibrium.solvers.noise import PerlinNoise
from equilibrium.utils import idx

logger = logging.getLogger(__name__)

__all__ = ["Fluid", "Orientation", "WallKind"]


class Fluid:
    """
    A ``size x size`` grid of incompressible fluid.

    Attributes:
        density: Dye carried by the flow; the rendered quantity.
        scratch_space: Previous density, source of the density advection.
        velocities_x, velocities_y: Current velocity field.
        velocities_x0, velocities_y0: Velocity scratch buffers.
        cells_type: ``WallKind`` value of every cell.
    """

    def __init__(
        self,
        fluid_configs: FluidConfigs,
        simulation_configs: SimulationConfigs,
        noise: Optional[PerlinNoise] = None
    ):
        self.fluid_configs = fluid_configs
        self.simulation_configs = simulation_configs
        self.size = simulation_configs.size

        cells = simulation_configs.cells
        vx, vy = config.INITIAL_VELOCITY
        self.density: npt.NDArray[np.float64] = np.zeros(cells, dtype=np.float64)
        self.scratch_space: npt.NDArray[np.float64] = np.zeros(cells, dtype=np.float64)
        self.velocities_x: npt.NDArray[np.float64] = np.full(cells, vx, dtype=np.float64)
        self.velocities_y: npt.NDArray[np.float64] = np.full(cells, vy, dtype=np.float64)
        self.velocities_x0: npt.NDArray[np.float64] = np.zeros(cells, dtype=np.float64)
        self.velocities_y0: npt.NDArray[np.float64] = np.zeros(cells, dtype=np.float64)
        self.cells_type: npt.NDArray[np.uint8] = np.full(cells, WallKind.NO_WALL, dtype=np.uint8)

        self.noise = noise if noise is not None else PerlinNoise()
        self.noise_time = 0.0

        self.mark_border_walls()
        self._seed_density()
        logger.debug(f"Fluid created: size={self.size}, walls={self.wall_count()}")

    def _seed_density(self) -> None:
        """Fill the centered square with the initial density (interior only)."""
        center = self.size // 2
        half = config.INITIAL_DENSITY_HALF_WIDTH
        lo = max(1, center - half)
        hi = min(self.size - 1, center + half + 1)

        grid = self.density.reshape(self.size, self.size)
        grid[lo:hi, lo:hi] = config.INITIAL_DENSITY
        self.scratch_space[:] = self.density

    def mark_border_walls(self) -> None:
        """Stamp the outer ring of the container as ``DEFAULT_WALL``."""
        grid = self.cells_type.reshape(self.size, self.size)
        grid[0, :] = WallKind.DEFAULT_WALL
        grid[-1, :] = WallKind.DEFAULT_WALL
        grid[:, 0] = WallKind.DEFAULT_WALL
        grid[:, -1] = WallKind.DEFAULT_WALL

    def wall_count(self) -> int:
        return int(np.count_nonzero(self.cells_type == WallKind.DEFAULT_WALL))

    def fill_obstacle(self, obstacle: ObstaclesType, wall_kind: WallKind) -> None:
        """
        Set every cell of the obstacle's bounding box to ``wall_kind``.

        The box is half-open: ``x`` in ``[x_min, x_max)`` and ``y`` in
        ``[y_min, y_max)``.
        """
        x_min, y_min, x_max, y_max = obstacle.bounding_box()
        grid = self.cells_type.reshape(self.size, self.size)
        # rows are y, columns are x
        grid[y_min:y_max, x_min:x_max] = wall_kind

    def add_noise(self) -> None:
        """
        Push the center cell in a direction chosen by Perlin noise.

        The noise is sampled at ``(t, t)`` and turned into an angle; a unit
        segment starting at the grid center is rotated by it and its vector is
        added (scaled) to the center velocity. ``t`` advances by ``delta_t``.
        """
        t = self.noise_time
        angle = self.noise.get(t, t) * config.NOISE_ANGLE_SCALE

        center_cell = self.size // 2
        center = Point(center_cell, center_cell)
        segment = Line(center, Point(center_cell + 1, center_cell))
        impulse = segment.rotate_around(center, angle).to_vector() * config.NOISE_IMPULSE_SCALE

        k = idx(center_cell, center_cell, self.size)
        self.velocities_x[k] += impulse.x
        self.velocities_y[k] += impulse.y
        self.noise_time += self.simulation_configs.delta_t

    def step(self) -> None:
        """Advance the grid by one ``delta_t``."""
        size = self.size
        dt = self.simulation_configs.delta_t
        iterations = self.simulation_configs.iterations
        viscosity = self.fluid_configs.viscosity
        diffusion = self.fluid_configs.diffusion
        cells_type = self.cells_type
        row, column, passive = int(Orientation.ADJUST_ROW), int(Orientation.ADJUST_COLUMN), int(Orientation.PASSIVE)

        # 1. Velocity diffusion
        kernels.diffuse(row, self.velocities_x0, self.velocities_x, viscosity, size, dt, iterations, cells_type)
        kernels.diffuse(column, self.velocities_y0, self.velocities_y, viscosity, size, dt, iterations, cells_type)

        # 2. Make the diffused field divergence free (current velocities as scratch)
        kernels.project(self.velocities_x0, self.velocities_y0, self.velocities_x, self.velocities_y,
                        size, iterations, cells_type)

        # 3. Self-advection
        kernels.advect(row, self.velocities_x, self.velocities_x0, self.velocities_x0, self.velocities_y0,
                       size, dt, cells_type)
        kernels.advect(column, self.velocities_y, self.velocities_y0, self.velocities_x0, self.velocities_y0,
                       size, dt, cells_type)

        # 4. Project again (old velocities as scratch)
        kernels.project(self.velocities_x, self.velocities_y, self.velocities_x0, self.velocities_y0,
                        size, iterations, cells_type)

        # 5. Density
        kernels.diffuse(passive, self.scratch_space, self.density, diffusion, size, dt, iterations, cells_type)
        kernels.advect(passive, self.density, self.scratch_space, self.velocities_x, self.velocities_y,
                       size, dt, cells_type)

        # 6. Keep the previous density for the next step
        self.scratch_space[:] = self.density

    def copy(self) -> Fluid:
        """Deep copy; the copy shares no array with this instance."""
        return copy.deepcopy(self)
