"""
Run Configuration (Data Model)
==============================
Value objects pushed into the core before a run starts.

Why is this file needed?
------------------------
1. Immutability: A run reads its configuration once. The objects are frozen so
   a UI editing the "next" configuration can never reach into a live run.
2. Validation: Invalid values are rejected when the object is built, not
   halfway through a simulation.

Classes:
    SimulationConfigs: Grid size, time step, frame count, solver iterations.
    FluidConfigs: Diffusion, viscosity, forcing and display colors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from numbers import Integral
from typing import Any, Sequence, Union

from matplotlib.colors import to_rgba

from equilibrium import config
from equilibrium.exceptions import ValidationError

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
ColorSpec = Union[str, Sequence[float], Sequence[int]]


def to_rgba8(color: ColorSpec) -> RGBA:
    """
    Normalize any color spec to an 8-bit RGBA tuple.

    Accepts matplotlib color specs ("red", "#1e90ff", float tuples in [0, 1])
    and tuples of ints in [0, 255].
    """
    if isinstance(color, (tuple, list)) and color and all(isinstance(c, Integral) for c in color):
        if len(color) not in (3, 4) or any(not 0 <= c <= 255 for c in color):
            raise ValidationError(f"Invalid 8-bit color: {color!r}")
        rgba = tuple(int(c) for c in color)
        if len(rgba) == 3:
            rgba = (*rgba, 255)
        return rgba  # type: ignore[return-value]

    try:
        r, g, b, a = to_rgba(color)
    except ValueError as e:
        raise ValidationError(f"Invalid color: {color!r}") from e
    return round(r * 255), round(g * 255), round(b * 255), round(a * 255)


@dataclass(frozen=True)
class SimulationConfigs:
    """Major configurations in order to run the simulation."""
    delta_t: float = config.DEFAULT_DELTA_T
    frames: int = config.DEFAULT_FRAMES
    size: int = config.DEFAULT_SIZE
    iterations: int = config.DEFAULT_ITERATIONS

    def __post_init__(self) -> None:
        if not self.delta_t > 0.0:
            raise ValidationError(f"delta_t must be positive, got {self.delta_t}")
        if isinstance(self.frames, bool) or not isinstance(self.frames, int) or self.frames <= 0:
            raise ValidationError(f"frames must be a positive integer, got {self.frames!r}")
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < config.MIN_GRID_SIZE:
            raise ValidationError(f"size must be an integer >= {config.MIN_GRID_SIZE}, got {self.size!r}")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations < 1:
            raise ValidationError(f"iterations must be a positive integer, got {self.iterations!r}")

    @property
    def cells(self) -> int:
        return self.size * self.size


@dataclass(frozen=True)
class FluidConfigs:
    """General fluid-related configurations."""
    diffusion: float = config.DEFAULT_DIFFUSION
    viscosity: float = config.DEFAULT_VISCOSITY
    has_perlin_noise: bool = True
    fluid_color: RGBA = field(default_factory=lambda: to_rgba8(config.DEFAULT_FLUID_COLOR))
    world_color: RGBA = field(default_factory=lambda: to_rgba8(config.DEFAULT_WORLD_COLOR))

    def __post_init__(self) -> None:
        if self.diffusion < 0.0:
            raise ValidationError(f"diffusion must be >= 0, got {self.diffusion}")
        if self.viscosity < 0.0:
            raise ValidationError(f"viscosity must be >= 0, got {self.viscosity}")
        # frozen: normalize the colors through object.__setattr__
        object.__setattr__(self, "fluid_color", to_rgba8(self.fluid_color))
        object.__setattr__(self, "world_color", to_rgba8(self.world_color))

    def to_dict(self) -> dict[str, Any]:
        return {
            "diffusion": self.diffusion,
            "viscosity": self.viscosity,
            "has_perlin_noise": self.has_perlin_noise,
            "fluid_color": list(self.fluid_color),
            "world_color": list(self.world_color),
        }
