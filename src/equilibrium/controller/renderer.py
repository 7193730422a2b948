"""
Render Orchestrator
===================
Entry point of the core for a UI (or the command line).

The UI edits the ``next_*`` values through ``update_configs`` at any time.
``render`` freezes them into a fresh ``CurrentSimulation`` and
``RenderingListener``, starts both workers and returns a ``RenderRun``
straight away. A run already in flight is never touched: it keeps its own
configuration and output directory until it finishes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from equilibrium import config
from equilibrium.controller.channels import FrameChannel
from equilibrium.controller.simulation import CurrentSimulation, FluidStep, RenderingListener, density_img_path
from equilibrium.controller.workers import RenderingWorker, SimulationWorker
from equilibrium.model.configs import ColorSpec, FluidConfigs, SimulationConfigs
from equilibrium.model.obstacles import ObstaclesType, Rectangle
from equilibrium.model.settings import FluidSetting, ObstacleSetting, OutputSetting, Setting, SimulationSetting

logger = logging.getLogger(__name__)


class RunState(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class RenderRun:
    """Handle of one started run."""
    receiver: FrameChannel[int]
    simulation_worker: SimulationWorker
    rendering_worker: RenderingWorker
    save_into_dir: Path

    @property
    def workers(self) -> tuple[SimulationWorker, RenderingWorker]:
        return self.simulation_worker, self.rendering_worker

    def join(self, timeout: Optional[float] = None) -> None:
        for worker in self.workers:
            worker.join(timeout)

    @property
    def errors(self) -> list[Exception]:
        return [worker.error for worker in self.workers if worker.error is not None]

    @property
    def state(self) -> RunState:
        if any(worker.is_alive() for worker in self.workers):
            return RunState.RUNNING
        return RunState.FAILED if self.errors else RunState.COMPLETED

    def frame_path(self, frame_number: int) -> Path:
        return density_img_path(self.save_into_dir, frame_number)

    def __iter__(self) -> Iterator[int]:
        return iter(self.receiver)


class Renderer:
    """
    Holds the buffered configuration for the next run and starts runs.

    Until an ``ObstacleSetting`` arrives the obstacle list is the default
    corner square, rebuilt whenever the grid size changes.
    """

    def __init__(
        self,
        save_into_dir: Optional[Union[str, Path]] = None,
        channel_capacity: int = 0,
        seed: Optional[int] = None
    ):
        self.next_fluid_configs = FluidConfigs()
        self.next_simulation_configs = SimulationConfigs()
        self.next_obstacles: list[ObstaclesType] = [Rectangle.default(self.next_simulation_configs.size)]
        self.next_obstacles_color: ColorSpec = config.DEFAULT_OBSTACLES_COLOR
        self.next_animate_obstacles = False
        self.next_save_into_dir = Path(save_into_dir) if save_into_dir is not None else config.DEFAULT_RENDERED_IMAGES_DIR

        self.channel_capacity = channel_capacity
        self.seed = seed
        self._user_obstacles = False

        # Live state of the most recent run
        self.current_simulation: Optional[CurrentSimulation] = None
        self.rendering_listener: Optional[RenderingListener] = None
        self.current_run: Optional[RenderRun] = None

    def update_configs(self, settings: Iterable[Setting]) -> None:
        """Replace buffered values; takes effect on the next ``render``."""
        for setting in settings:
            match setting:
                case FluidSetting(fluid_configs=fluid_configs):
                    self.next_fluid_configs = fluid_configs
                case SimulationSetting(simulation_configs=simulation_configs):
                    self.next_simulation_configs = simulation_configs
                    if not self._user_obstacles:
                        self.next_obstacles = [Rectangle.default(simulation_configs.size)]
                case ObstacleSetting(obstacles=obstacles, color=color, animate=animate):
                    self.next_obstacles = list(obstacles)
                    self.next_obstacles_color = color
                    self.next_animate_obstacles = animate
                    self._user_obstacles = True
                case OutputSetting(save_into_dir=save_into_dir):
                    if save_into_dir is not None:
                        self.next_save_into_dir = Path(save_into_dir)
                case _:
                    raise TypeError(f"Unknown setting: {setting!r}")
        logger.debug(f"Configs updated: fluid={self.next_fluid_configs.to_dict()}, "
                     f"simulation={self.next_simulation_configs}")

    def render(self) -> RenderRun:
        """Start a run from the buffered configuration; does not block."""
        simulation_configs = self.next_simulation_configs
        self.current_simulation = CurrentSimulation(
            fluid_configs=self.next_fluid_configs,
            simulation_configs=simulation_configs,
            obstacles=self.next_obstacles,
            animate_obstacles=self.next_animate_obstacles,
            seed=self.seed
        )
        self.rendering_listener = RenderingListener(self.next_save_into_dir, self.next_obstacles_color)

        simulation_channel: FrameChannel[FluidStep] = FrameChannel(self.channel_capacity, name="simulation")
        rendering_channel: FrameChannel[int] = FrameChannel(name="rendering")

        simulation_worker = SimulationWorker(self.current_simulation, simulation_channel)
        rendering_worker = RenderingWorker(
            self.rendering_listener, simulation_configs.frames, simulation_channel, rendering_channel
        )

        logger.info(
            f"Starting run: size={simulation_configs.size}, frames={simulation_configs.frames}, "
            f"output={self.next_save_into_dir}"
        )
        simulation_worker.start()
        rendering_worker.start()

        self.current_run = RenderRun(
            receiver=rendering_channel,
            simulation_worker=simulation_worker,
            rendering_worker=rendering_worker,
            save_into_dir=self.next_save_into_dir
        )
        return self.current_run
