import pytest

from equilibrium.utils import idx, to_coordinate


@pytest.mark.parametrize("size", [3, 7, 32])
def test_idx_always_in_range(size):
    for x in range(-3 * size, 3 * size, 5):
        for y in range(-3 * size, 3 * size, 7):
            assert 0 <= idx(x, y, size) < size * size


@pytest.mark.parametrize("size", [3, 10])
def test_idx_round_trip(size):
    seen = set()
    for y in range(size):
        for x in range(size):
            i = idx(x, y, size)
            assert to_coordinate(i, size) == (x, y)
            seen.add(i)
    assert seen == set(range(size * size))


def test_idx_clamps_each_axis():
    assert idx(-5, 3, 10) == idx(0, 3, 10) == 30
    assert idx(3, 99, 10) == idx(3, 9, 10) == 93
    assert idx(12, -1, 10) == 9
