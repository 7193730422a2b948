import math

import pytest

from equilibrium.model.geometry_primitives import Line, Point, Vector


def test_vector_scaling():
    assert Vector(1.0, -2.0) * 3.0 == Vector(3.0, -6.0)


def test_vector_rotation():
    rotated = Vector(1.0, 0.0).rotate(math.pi / 2)
    assert rotated.x == pytest.approx(0.0, abs=1e-12)
    assert rotated.y == pytest.approx(1.0)


def test_point_rotation_around_center():
    p = Point(3.0, 2.0).rotate_around(Point(2.0, 2.0), math.pi)
    assert p.x == pytest.approx(1.0)
    assert p.y == pytest.approx(2.0)


def test_point_arithmetic():
    assert Point(1.0, 1.0) + Vector(1.0, 2.0) == Point(2.0, 3.0)
    assert Point(3.0, 3.0) - Point(1.0, 2.0) == Vector(2.0, 1.0)
    assert Point(3.0, 3.0) - Vector(1.0, 2.0) == Point(2.0, 1.0)
    with pytest.raises(TypeError):
        Point(0.0, 0.0) + Point(1.0, 1.0)


def test_line_vector():
    line = Line(Point(1.0, 1.0), Point(4.0, 5.0))
    assert line.to_vector() == Vector(3.0, 4.0)


def test_line_rotation_keeps_length():
    line = Line(Point(8.0, 8.0), Point(9.0, 8.0)).rotate_around(Point(8.0, 8.0), 1.234)
    assert line.start == Point(8.0, 8.0)
    assert math.hypot(line.to_vector().x, line.to_vector().y) == pytest.approx(1.0)


def test_rasterize_horizontal():
    assert Line(Point(0, 0), Point(3, 0)).rasterize() == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_rasterize_vertical_reversed():
    assert Line(Point(2, 3), Point(2, 1)).rasterize() == [(2, 3), (2, 2), (2, 1)]


def test_rasterize_diagonal():
    assert Line(Point(0, 0), Point(2, 2)).rasterize() == [(0, 0), (1, 1), (2, 2)]


def test_rasterize_single_point():
    assert Line(Point(5, 5), Point(5, 5)).rasterize() == [(5, 5)]
