"""
Two-dimensional Perlin gradient noise used to steer the forcing impulse.
"""
from __future__ import annotations

import math

import numpy as np

# Unnormalized gradient directions, picked by the hash of a lattice corner
_GRADIENTS = (
    (1.0, 1.0), (-1.0, 1.0), (1.0, -1.0), (-1.0, -1.0),
    (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0),
)


def _fade(t: float) -> float:
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class PerlinNoise:
    """
    Classic Perlin noise over the plane.

    The value is exactly 0 on integer lattice points and stays within
    ``[-1, 1]``. The permutation table is drawn from ``seed`` so two instances
    with the same seed produce the same field.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        permutation = np.random.default_rng(seed).permutation(256)
        self._perm = np.concatenate([permutation, permutation]).astype(np.int64)

    def _gradient(self, hash_value: int, dx: float, dy: float) -> float:
        gx, gy = _GRADIENTS[hash_value & 7]
        return gx * dx + gy * dy

    def get(self, x: float, y: float) -> float:
        x_floor = math.floor(x)
        y_floor = math.floor(y)
        xf = x - x_floor
        yf = y - y_floor
        xi = x_floor & 255
        yi = y_floor & 255

        perm = self._perm
        aa = int(perm[perm[xi] + yi])
        ab = int(perm[perm[xi] + yi + 1])
        ba = int(perm[perm[xi + 1] + yi])
        bb = int(perm[perm[xi + 1] + yi + 1])

        u = _fade(xf)
        v = _fade(yf)
        bottom = _lerp(self._gradient(aa, xf, yf), self._gradient(ba, xf - 1.0, yf), u)
        top = _lerp(self._gradient(ab, xf, yf - 1.0), self._gradient(bb, xf - 1.0, yf - 1.0), u)
        return _lerp(bottom, top, v)
