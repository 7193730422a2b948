import numpy as np
import pytest

from equilibrium.model.configs import FluidConfigs, SimulationConfigs
from equilibrium.model.obstacles import Rectangle
from equilibrium.solvers.fluid import Fluid, WallKind


def test_initial_state(still_fluid_configs, small_simulation_configs):
    fluid = Fluid(still_fluid_configs, small_simulation_configs)
    size = small_simulation_configs.size
    arrays = [fluid.density, fluid.scratch_space, fluid.velocities_x, fluid.velocities_y,
              fluid.velocities_x0, fluid.velocities_y0, fluid.cells_type]

    for array in arrays:
        assert array.shape == (size * size,)
    assert np.all(fluid.velocities_x == 1.0)
    assert np.all(fluid.velocities_y == 1.0)
    assert fluid.density[size // 2 + size // 2 * size] == pytest.approx(0.9)
    np.testing.assert_array_equal(fluid.scratch_space, fluid.density)


def test_initial_density_square_is_centered(still_fluid_configs):
    fluid = Fluid(still_fluid_configs, SimulationConfigs(size=128))
    rows, columns = np.nonzero(fluid.density.reshape(128, 128))

    assert (rows.min(), rows.max()) == (54, 74)
    assert (columns.min(), columns.max()) == (54, 74)
    assert rows.size == 21 * 21


def test_initial_density_stays_inside_the_container(still_fluid_configs, small_simulation_configs):
    fluid = Fluid(still_fluid_configs, small_simulation_configs)
    grid = fluid.density.reshape(fluid.size, fluid.size)
    assert np.all(grid[0, :] == 0.0) and np.all(grid[-1, :] == 0.0)
    assert np.all(grid[:, 0] == 0.0) and np.all(grid[:, -1] == 0.0)


@pytest.mark.parametrize("size", [3, 11, 128])
def test_border_is_walled(size, still_fluid_configs):
    fluid = Fluid(still_fluid_configs, SimulationConfigs(size=size))
    assert fluid.wall_count() == 2 * (size + (size - 2))

    grid = fluid.cells_type.reshape(size, size)
    assert np.all(grid[1:-1, 1:-1] == WallKind.NO_WALL)


def test_fill_obstacle_is_half_open(still_fluid_configs):
    fluid = Fluid(still_fluid_configs, SimulationConfigs(size=11))
    before = fluid.cells_type.copy()

    fluid.fill_obstacle(Rectangle((8, 8), (10, 10), 11), WallKind.DEFAULT_WALL)

    changed = np.flatnonzero(fluid.cells_type != before)
    assert sorted(changed.tolist()) == [8 + 8 * 11, 9 + 8 * 11, 8 + 9 * 11, 9 + 9 * 11]
    assert np.all(fluid.cells_type[changed] == WallKind.DEFAULT_WALL)


def test_undraw_restores_border(still_fluid_configs):
    fluid = Fluid(still_fluid_configs, SimulationConfigs(size=16))
    obstacle = Rectangle.default(16)
    fluid.fill_obstacle(obstacle, WallKind.DEFAULT_WALL)
    assert fluid.wall_count() == 2 * (16 + 14) + obstacle.area

    fluid.fill_obstacle(obstacle, WallKind.NO_WALL)
    fluid.mark_border_walls()
    assert fluid.wall_count() == 2 * (16 + 14)


def test_noise_pushes_only_the_center(small_simulation_configs):
    fluid = Fluid(FluidConfigs(has_perlin_noise=True), small_simulation_configs)
    vx, vy = fluid.velocities_x.copy(), fluid.velocities_y.copy()

    fluid.add_noise()

    center = fluid.size // 2 + fluid.size // 2 * fluid.size
    changed = np.flatnonzero((fluid.velocities_x != vx) | (fluid.velocities_y != vy))
    assert changed.tolist() == [center]
    # noise is zero at t = 0, so the first push points along +x
    assert fluid.velocities_x[center] == pytest.approx(3.0)
    assert fluid.velocities_y[center] == pytest.approx(1.0)
    assert fluid.noise_time == pytest.approx(small_simulation_configs.delta_t)


def test_noise_impulse_has_constant_strength(small_simulation_configs):
    fluid = Fluid(FluidConfigs(), small_simulation_configs)
    center = fluid.size // 2 + fluid.size // 2 * fluid.size
    for _ in range(5):
        vx, vy = fluid.velocities_x[center], fluid.velocities_y[center]
        fluid.add_noise()
        push = np.hypot(fluid.velocities_x[center] - vx, fluid.velocities_y[center] - vy)
        assert push == pytest.approx(2.0)


def test_step_keeps_fields_finite(small_simulation_configs):
    fluid = Fluid(FluidConfigs(diffusion=0.0001), small_simulation_configs)
    fluid.fill_obstacle(Rectangle.default(fluid.size), WallKind.DEFAULT_WALL)
    for _ in range(3):
        fluid.add_noise()
        fluid.step()

    for array in (fluid.density, fluid.velocities_x, fluid.velocities_y):
        assert np.all(np.isfinite(array))
    np.testing.assert_array_equal(fluid.scratch_space, fluid.density)


def test_step_on_smallest_grid(still_fluid_configs):
    fluid = Fluid(still_fluid_configs, SimulationConfigs(size=3, iterations=2))
    fluid.step()
    assert np.all(np.isfinite(fluid.density))


def test_copy_is_independent(still_fluid_configs, small_simulation_configs):
    fluid = Fluid(still_fluid_configs, small_simulation_configs)
    snapshot = fluid.copy()

    fluid.step()
    fluid.fill_obstacle(Rectangle.default(fluid.size), WallKind.DEFAULT_WALL)

    assert snapshot.density is not fluid.density
    assert np.all(snapshot.velocities_x == 1.0)
    assert snapshot.wall_count() == 2 * (fluid.size + fluid.size - 2)
