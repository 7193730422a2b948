"""
Settings pushed from the UI into the orchestrator.

A UI keeps one settings object per panel and hands the whole list to
``Renderer.update_configs``. Each variant replaces one group of buffered values
for the next run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from equilibrium import config
from equilibrium.model.configs import ColorSpec, FluidConfigs, SimulationConfigs
from equilibrium.model.obstacles import ObstaclesType


@dataclass
class FluidSetting:
    fluid_configs: FluidConfigs = field(default_factory=FluidConfigs)


@dataclass
class SimulationSetting:
    simulation_configs: SimulationConfigs = field(default_factory=SimulationConfigs)


@dataclass
class ObstacleSetting:
    obstacles: list[ObstaclesType] = field(default_factory=list)
    color: ColorSpec = config.DEFAULT_OBSTACLES_COLOR
    animate: bool = False


@dataclass
class OutputSetting:
    save_into_dir: Optional[Path] = None


# Union for type hinting
Setting = Union[FluidSetting, SimulationSetting, ObstacleSetting, OutputSetting]
