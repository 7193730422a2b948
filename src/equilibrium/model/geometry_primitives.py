"""
Geometric Primitives for obstacle outlines and forcing vectors.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union
import math


@dataclass(frozen=True)
class Vector:
    """
    A displacement in the grid plane.
    """
    x: float
    y: float

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def rotate(self, angle_rad: float) -> Vector:
        """Rotate the vector counter-clockwise by ``angle_rad``."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )


@dataclass(frozen=True)
class Point:
    """A geometric point on the grid plane."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # translate
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError(f"Cannot add {type(other).__name__} to Point")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # displacement between two points
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # translate backwards
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def rotate_around(self, center: Point, angle_rad: float) -> Point:
        """Rotate this point about ``center`` by ``angle_rad``."""
        return center + (self - center).rotate(angle_rad)

    def to_cell(self) -> tuple[int, int]:
        """Truncate to integer grid coordinates."""
        return math.trunc(self.x), math.trunc(self.y)


@dataclass(frozen=True)
class Line:
    """A straight segment between two grid points."""
    start: Point
    end: Point

    def to_vector(self) -> Vector:
        return self.end - self.start

    def rotate_around(self, center: Point, angle_rad: float) -> Line:
        return Line(
            start=self.start.rotate_around(center, angle_rad),
            end=self.end.rotate_around(center, angle_rad)
        )

    def rasterize(self) -> list[tuple[int, int]]:
        """
        Cells crossed by the segment, both ends included (Bresenham).

        The end points are truncated to integer cells first.
        """
        x0, y0 = self.start.to_cell()
        x1, y1 = self.end.to_cell()

        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy

        cells = []
        while True:
            cells.append((x0, y0))
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy
        return cells
