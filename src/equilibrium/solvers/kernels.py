# kernels.py
"""
Stable Fluids Kernels
=====================
JIT-compiled building blocks of one simulation step.

Every routine works in place on flat ``size * size`` float arrays and touches
interior cells only; the outer ring and the obstacle cells are derived
afterwards by ``set_boundaries``. Array accesses go through ``idx``, so a
coordinate that falls off the grid reads the nearest edge cell instead of
failing.
"""
from __future__ import annotations

from enum import IntEnum
import math

import numpy as np
import numpy.typing as npt
import numba as nb

from equilibrium.utils import idx


class WallKind(IntEnum):
    """Per-cell classification stored in ``Fluid.cells_type``."""
    DEFAULT_WALL = 0
    NO_WALL = 1


class Orientation(IntEnum):
    """How boundary cells of a given array are derived from their neighbours."""
    ADJUST_ROW = 0      # x velocity: negate across left/right walls
    ADJUST_COLUMN = 1   # y velocity: negate across top/bottom walls
    PASSIVE = 2         # scalars: copy


# Plain ints for the compiled code
_DEFAULT_WALL = int(WallKind.DEFAULT_WALL)
_NO_WALL = int(WallKind.NO_WALL)
_ADJUST_ROW = int(Orientation.ADJUST_ROW)
_ADJUST_COLUMN = int(Orientation.ADJUST_COLUMN)
_PASSIVE = int(Orientation.PASSIVE)


@nb.njit(cache=True, fastmath=True)
def set_boundaries(
    orientation: int,
    x: npt.NDArray[np.float64],
    size: int,
    cells_type: npt.NDArray[np.uint8]
) -> None:
    """
    Derive the values of wall cells from the fluid next to them.

    1. Obstacle cells inside the container take the mean of their fluid
       neighbours. A neighbour on the corrected axis is negated (no-penetration),
       any other neighbour is copied (Neumann).
    2. The container edges mirror the first interior row/column.
    3. Each corner is the average of its two edge neighbours.
    """
    row_sign = -1.0 if orientation == _ADJUST_ROW else 1.0
    column_sign = -1.0 if orientation == _ADJUST_COLUMN else 1.0

    for j in range(1, size - 1):
        for i in range(1, size - 1):
            k = idx(i, j, size)
            if cells_type[k] != _DEFAULT_WALL:
                continue

            total = 0.0
            fluid_neighbours = 0
            left = idx(i - 1, j, size)
            right = idx(i + 1, j, size)
            up = idx(i, j - 1, size)
            down = idx(i, j + 1, size)
            if cells_type[left] == _NO_WALL:
                total += row_sign * x[left]
                fluid_neighbours += 1
            if cells_type[right] == _NO_WALL:
                total += row_sign * x[right]
                fluid_neighbours += 1
            if cells_type[up] == _NO_WALL:
                total += column_sign * x[up]
                fluid_neighbours += 1
            if cells_type[down] == _NO_WALL:
                total += column_sign * x[down]
                fluid_neighbours += 1

            # fully enclosed obstacle cell: nothing flows through it
            x[k] = total / fluid_neighbours if fluid_neighbours > 0 else 0.0

    for i in range(1, size - 1):
        x[idx(i, 0, size)] = column_sign * x[idx(i, 1, size)]
        x[idx(i, size - 1, size)] = column_sign * x[idx(i, size - 2, size)]

    for j in range(1, size - 1):
        x[idx(0, j, size)] = row_sign * x[idx(1, j, size)]
        x[idx(size - 1, j, size)] = row_sign * x[idx(size - 2, j, size)]

    x[idx(0, 0, size)] = 0.5 * (x[idx(1, 0, size)] + x[idx(0, 1, size)])
    x[idx(0, size - 1, size)] = 0.5 * (x[idx(1, size - 1, size)] + x[idx(0, size - 2, size)])
    x[idx(size - 1, 0, size)] = 0.5 * (x[idx(size - 2, 0, size)] + x[idx(size - 1, 1, size)])
    x[idx(size - 1, size - 1, size)] = 0.5 * (
        x[idx(size - 2, size - 1, size)] + x[idx(size - 1, size - 2, size)]
    )


@nb.njit(cache=True, fastmath=True)
def lin_solve(
    orientation: int,
    x: npt.NDArray[np.float64],
    x0: npt.NDArray[np.float64],
    a: float,
    c: float,
    size: int,
    iterations: int,
    cells_type: npt.NDArray[np.uint8]
) -> None:
    """
    Gauss-Seidel relaxation of ``x = (x0 + a * sum(neighbours of x)) / c``.

    Runs a fixed number of sweeps; ``iterations`` is a quality knob, there is
    no convergence test.
    """
    c_recip = 1.0 / c
    for _ in range(iterations):
        for j in range(1, size - 1):
            for i in range(1, size - 1):
                x[idx(i, j, size)] = (
                    x0[idx(i, j, size)]
                    + a * (
                        x[idx(i + 1, j, size)]
                        + x[idx(i - 1, j, size)]
                        + x[idx(i, j + 1, size)]
                        + x[idx(i, j - 1, size)]
                    )
                ) * c_recip
        set_boundaries(orientation, x, size, cells_type)


@nb.njit(cache=True, fastmath=True)
def diffuse(
    orientation: int,
    x: npt.NDArray[np.float64],
    x0: npt.NDArray[np.float64],
    rate: float,
    size: int,
    delta_t: float,
    iterations: int,
    cells_type: npt.NDArray[np.uint8]
) -> None:
    """Implicit (backward Euler) diffusion of ``x0`` into ``x``."""
    inner = float(size - 2)
    a = delta_t * rate * inner * inner
    lin_solve(orientation, x, x0, a, 1.0 + 4.0 * a, size, iterations, cells_type)


@nb.njit(cache=True, fastmath=True)
def project(
    velocities_x: npt.NDArray[np.float64],
    velocities_y: npt.NDArray[np.float64],
    p: npt.NDArray[np.float64],
    div: npt.NDArray[np.float64],
    size: int,
    iterations: int,
    cells_type: npt.NDArray[np.uint8]
) -> None:
    """
    Remove the divergence of the velocity field.

    ``p`` and ``div`` are scratch arrays: the pressure field is solved from the
    divergence and its gradient is subtracted from the velocities.
    """
    scale = float(size)
    for j in range(1, size - 1):
        for i in range(1, size - 1):
            div[idx(i, j, size)] = -0.5 * (
                velocities_x[idx(i + 1, j, size)]
                - velocities_x[idx(i - 1, j, size)]
                + velocities_y[idx(i, j + 1, size)]
                - velocities_y[idx(i, j - 1, size)]
            ) / scale
            p[idx(i, j, size)] = 0.0

    set_boundaries(_PASSIVE, div, size, cells_type)
    set_boundaries(_PASSIVE, p, size, cells_type)
    lin_solve(_PASSIVE, p, div, 1.0, 4.0, size, iterations, cells_type)

    for j in range(1, size - 1):
        for i in range(1, size - 1):
            velocities_x[idx(i, j, size)] -= 0.5 * (
                p[idx(i + 1, j, size)] - p[idx(i - 1, j, size)]
            ) * scale
            velocities_y[idx(i, j, size)] -= 0.5 * (
                p[idx(i, j + 1, size)] - p[idx(i, j - 1, size)]
            ) * scale

    set_boundaries(_ADJUST_ROW, velocities_x, size, cells_type)
    set_boundaries(_ADJUST_COLUMN, velocities_y, size, cells_type)


@nb.njit(cache=True, fastmath=True)
def advect(
    orientation: int,
    d: npt.NDArray[np.float64],
    d0: npt.NDArray[np.float64],
    velocities_x: npt.NDArray[np.float64],
    velocities_y: npt.NDArray[np.float64],
    size: int,
    delta_t: float,
    cells_type: npt.NDArray[np.uint8]
) -> None:
    """
    Semi-Lagrangian transport of ``d0`` into ``d``.

    Each interior cell is traced back along the velocity field and ``d0`` is
    bilinearly sampled there. A trace that would read past the last row or
    column copies the left neighbour instead.
    """
    dt0 = delta_t * (size - 2)
    upper = size - 1.0

    for j in range(1, size - 1):
        for i in range(1, size - 1):
            k = idx(i, j, size)
            x = i - dt0 * velocities_x[k]
            y = j - dt0 * velocities_y[k]

            x = min(max(x, 0.5), upper)
            y = min(max(y, 0.5), upper)

            i0 = int(math.floor(x))
            i1 = i0 + 1
            j0 = int(math.floor(y))
            j1 = j0 + 1

            if i1 >= size or j1 >= size:
                d[k] = d[idx(i - 1, j, size)]
                continue

            s1 = x - i0
            s0 = 1.0 - s1
            t1 = y - j0
            t0 = 1.0 - t1

            d[k] = (
                s0 * (t0 * d0[idx(i0, j0, size)] + t1 * d0[idx(i0, j1, size)])
                + s1 * (t0 * d0[idx(i1, j0, size)] + t1 * d0[idx(i1, j1, size)])
            )

    set_boundaries(orientation, d, size, cells_type)
