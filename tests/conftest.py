import numpy as np
import pytest

from equilibrium.model.configs import FluidConfigs, SimulationConfigs
from equilibrium.solvers.kernels import WallKind


@pytest.fixture
def small_simulation_configs() -> SimulationConfigs:
    return SimulationConfigs(delta_t=0.02, frames=4, size=16, iterations=4)


@pytest.fixture
def still_fluid_configs() -> FluidConfigs:
    """No viscosity, no diffusion, no forcing."""
    return FluidConfigs(diffusion=0.0, viscosity=0.0, has_perlin_noise=False)


def bordered_cells(size: int) -> np.ndarray:
    """``cells_type`` array with only the container border walled."""
    cells = np.full((size, size), WallKind.NO_WALL, dtype=np.uint8)
    cells[0, :] = cells[-1, :] = cells[:, 0] = cells[:, -1] = WallKind.DEFAULT_WALL
    return cells.ravel()


@pytest.fixture
def make_bordered_cells():
    return bordered_cells
