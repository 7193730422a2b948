"""
Grid indexing helpers.

All per-cell arrays are flat, row-major, ``size * size`` long. ``x`` is the
column and ``y`` the row, so cell ``(x, y)`` lives at ``x + y * size``.
"""
from __future__ import annotations

import numba as nb


@nb.njit(cache=True)
def idx(x: int, y: int, size: int) -> int:
    """Flat index of ``(x, y)`` with both coordinates clamped into ``[0, size-1]``."""
    x = min(max(x, 0), size - 1)
    y = min(max(y, 0), size - 1)
    return x + y * size


def to_coordinate(index: int, size: int) -> tuple[int, int]:
    """Inverse of ``idx`` for indices in ``[0, size*size)``."""
    return index % size, index // size
