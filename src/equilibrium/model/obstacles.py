"""
Obstacle Geometry
=================
Axis-aligned obstacles placed into the fluid container.

Coordinates are grid cells in image orientation: ``x`` grows to the right,
``y`` grows downwards, so the "up-left" corner has the smaller ``x`` and ``y``.
Every shape is approximated by its bounding box when it is stamped into the
grid (see ``Fluid.fill_obstacle``).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Union

from equilibrium import config
from equilibrium.exceptions import ValidationError
from equilibrium.model.geometry_primitives import Line, Point

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


class Side(StrEnum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


class Obstacle(ABC):
    """Behaviour shared by every obstacle shape."""

    @abstractmethod
    def get_approximate_points(self) -> list[Cell]:
        """Points using which the obstacle is approximated."""

    @abstractmethod
    def bounding_box(self) -> tuple[int, int, int, int]:
        """``(x_min, y_min, x_max, y_max)`` of the shape."""

    @abstractmethod
    def get_perimeter(self) -> dict[Side, list[Cell]]:
        """Outline cells grouped by the side they belong to."""


@dataclass(frozen=True)
class Rectangle(Obstacle):
    """
    Rectangle obstacle parallel to the grid axes.

    It is defined by its up-left corner and its down-right corner. Construction
    fails with ``ValidationError`` when the corners coincide, are not ordered
    component-wise, or leave the ``[0, grid_size)`` range.
    """
    up_left_point: Cell
    down_right_point: Cell
    grid_size: int

    def __post_init__(self) -> None:
        if not self.are_all_points_valid():
            raise ValidationError(
                f"Invalid rectangle {self.up_left_point} -> {self.down_right_point} "
                f"for grid size {self.grid_size}"
            )

    @classmethod
    def default(cls, grid_size: int = config.DEFAULT_SIZE) -> Rectangle:
        """Square hugging the down-right corner of the container."""
        start = max(0, grid_size - config.DEFAULT_OBSTACLE_MARGIN)
        end = grid_size - 1
        return cls((start, start), (end, end), grid_size)

    def are_all_points_valid(self) -> bool:
        (ax, ay), (bx, by) = self.up_left_point, self.down_right_point
        return (
            self.up_left_point != self.down_right_point
            and ax < bx
            and ay < by
            and all(0 <= c < self.grid_size for c in (ax, ay, bx, by))
        )

    def get_approximate_points(self) -> list[Cell]:
        return [self.up_left_point, self.down_right_point]

    def bounding_box(self) -> tuple[int, int, int, int]:
        (ax, ay), (bx, by) = self.up_left_point, self.down_right_point
        return ax, ay, bx, by

    @property
    def width(self) -> int:
        return self.down_right_point[0] - self.up_left_point[0]

    @property
    def height(self) -> int:
        return self.down_right_point[1] - self.up_left_point[1]

    @property
    def area(self) -> int:
        """Cells covered by the half-open fill of the bounding box."""
        return self.width * self.height

    def get_perimeter(self) -> dict[Side, list[Cell]]:
        x0, y0, x1, y1 = self.bounding_box()
        up_left, up_right = Point(x0, y0), Point(x1, y0)
        down_left, down_right = Point(x0, y1), Point(x1, y1)
        return {
            Side.NORTH: Line(up_left, up_right).rasterize(),
            Side.EAST: Line(up_right, down_right).rasterize(),
            Side.SOUTH: Line(down_left, down_right).rasterize(),
            Side.WEST: Line(up_left, down_left).rasterize(),
        }


# Union for type hinting. New shapes are added here.
ObstaclesType = Union[Rectangle]
