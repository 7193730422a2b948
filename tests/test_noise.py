import numpy as np
import pytest

from equilibrium.solvers.noise import PerlinNoise


@pytest.mark.parametrize("x, y", [(0, 0), (1, 0), (3, 5), (-2, 7), (300, -41)])
def test_zero_on_lattice_points(x, y):
    assert PerlinNoise(seed=7).get(float(x), float(y)) == 0.0


def test_bounded_and_not_constant():
    noise = PerlinNoise(seed=1)
    values = [noise.get(x, y) for x in np.linspace(-4.0, 4.0, 41) for y in np.linspace(-4.0, 4.0, 41)]
    assert max(abs(v) for v in values) <= 1.0
    assert any(v != 0.0 for v in values)


def test_same_seed_same_field():
    a, b = PerlinNoise(seed=3), PerlinNoise(seed=3)
    points = [(0.3, 0.3), (1.7, 2.2), (-0.4, 5.9)]
    assert [a.get(*p) for p in points] == [b.get(*p) for p in points]


def test_continuous():
    noise = PerlinNoise(seed=2)
    assert noise.get(0.5, 0.5) == pytest.approx(noise.get(0.5001, 0.5), abs=1e-2)
