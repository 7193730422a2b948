"""
Simulation & Rendering Stages
=============================
The two halves of a run, each meant to be driven by its own worker thread.

Why is this file needed?
------------------------
1. Producer: ``CurrentSimulation`` owns the live ``Fluid`` and sends a deep
   copy of it for every frame. Nothing else ever touches the live grid.
2. Consumer: ``RenderingListener`` turns each received snapshot into a JPEG
   and reports the frame number once the file is on disk.
3. Order: One channel per direction keeps the frames strictly increasing,
   without gaps.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import numpy.typing as npt
from PIL import Image

from equilibrium import config
from equilibrium.controller.channels import FrameChannel
from equilibrium.exceptions import RenderingIOError, ValidationError
from equilibrium.model.configs import ColorSpec, FluidConfigs, SimulationConfigs, to_rgba8
from equilibrium.model.obstacles import ObstaclesType
from equilibrium.solvers.animation import cell_bitmap_to_obstacles, game_of_life, random_cell_bitmap
from equilibrium.solvers.fluid import Fluid, WallKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FluidStep:
    """Snapshot of the grid right after frame ``frame_number`` was simulated."""
    fluid: Fluid
    frame_number: int


def density_img_path(save_into_dir: Union[str, Path], frame_number: int) -> Path:
    return Path(save_into_dir) / config.DENSITY_IMAGE_TEMPLATE.format(frame_number=frame_number)


class CurrentSimulation:
    """
    Producer side of a run.

    Per frame: draw obstacles -> (noise) -> step -> send snapshot -> undraw.
    With ``animate_obstacles`` the obstacle list evolves by one Game-of-Life
    generation before every frame but the first; an animated run without
    obstacles starts from a random generation.
    """

    def __init__(
        self,
        fluid_configs: FluidConfigs,
        simulation_configs: SimulationConfigs,
        obstacles: Sequence[ObstaclesType] = (),
        animate_obstacles: bool = False,
        seed: Optional[int] = None
    ):
        size = simulation_configs.size
        for obstacle in obstacles:
            if obstacle.grid_size != size:
                raise ValidationError(
                    f"Obstacle {obstacle} was built for grid size {obstacle.grid_size}, "
                    f"simulation uses {size}"
                )

        self.fluid = Fluid(fluid_configs, simulation_configs)
        self.animate_obstacles = animate_obstacles
        self.rng = np.random.default_rng(seed)
        self.obstacles: list[ObstaclesType] = list(obstacles)
        if animate_obstacles and not self.obstacles:
            self.obstacles = cell_bitmap_to_obstacles(random_cell_bitmap(size, self.rng), size)
            logger.info(f"Seeded obstacle animation with {len(self.obstacles)} random blocks")

    @property
    def frames(self) -> int:
        return self.fluid.simulation_configs.frames

    def _draw_obstacles(self, wall_kind: WallKind) -> None:
        for obstacle in self.obstacles:
            self.fluid.fill_obstacle(obstacle, wall_kind)

    def simulate(self, simulation_tx: FrameChannel[FluidStep]) -> None:
        """Run every frame and send the snapshots; closes ``simulation_tx`` at the end."""
        size = self.fluid.size
        try:
            for frame_number in range(self.frames):
                if self.animate_obstacles and frame_number > 0:
                    self.obstacles = game_of_life(self.obstacles, size)

                self._draw_obstacles(WallKind.DEFAULT_WALL)
                if self.fluid.fluid_configs.has_perlin_noise:
                    self.fluid.add_noise()
                self.fluid.step()

                simulation_tx.send(FluidStep(fluid=self.fluid.copy(), frame_number=frame_number))
                logger.debug(f"Frame {frame_number} simulated")

                # clean base for the next frame; the border is part of every obstacle pass
                self._draw_obstacles(WallKind.NO_WALL)
                self.fluid.mark_border_walls()
        finally:
            simulation_tx.close()


class RenderingListener:
    """Consumer side of a run: rasterizes snapshots into ``save_into_dir``."""

    def __init__(self, save_into_dir: Union[str, Path], obstacles_color: ColorSpec = config.DEFAULT_OBSTACLES_COLOR):
        self.save_into_dir = Path(save_into_dir)
        self.obstacles_color = to_rgba8(obstacles_color)

    def rasterize(self, step: FluidStep) -> npt.NDArray[np.uint8]:
        """
        RGBA image of the snapshot, shape ``(size, size, 4)``.

        Walls take the obstacle color. Fluid cells blend the world color
        toward the fluid color by their density clipped to ``[0, 1]``, so a
        cell without density shows the world color.
        """
        fluid = step.fluid
        world = np.asarray(fluid.fluid_configs.world_color, dtype=np.float64)
        dye = np.asarray(fluid.fluid_configs.fluid_color, dtype=np.float64)

        weight = np.clip(fluid.density, 0.0, 1.0)[:, np.newaxis]
        colors = world + (dye - world) * weight
        colors[fluid.cells_type == WallKind.DEFAULT_WALL] = self.obstacles_color

        return np.rint(colors).astype(np.uint8).reshape(fluid.size, fluid.size, 4)

    def render_image(self, step: FluidStep) -> Path:
        """Write the snapshot as ``density{frame_number}.jpg``."""
        path = density_img_path(self.save_into_dir, step.frame_number)
        pixels = self.rasterize(step)
        try:
            self.save_into_dir.mkdir(parents=True, exist_ok=True)
            # JPEG has no alpha channel
            Image.fromarray(pixels).convert("RGB").save(path, format="JPEG", quality=config.JPEG_QUALITY)
        except OSError as e:
            raise RenderingIOError(f"Cannot write frame {step.frame_number} to {path}: {e}") from e
        return path

    def listen(
        self,
        max_frames: int,
        simulation_rx: FrameChannel[FluidStep],
        rendering_tx: FrameChannel[int]
    ) -> None:
        """Render ``max_frames`` snapshots in order; closes ``rendering_tx`` at the end."""
        try:
            for _ in range(max_frames):
                step = simulation_rx.recv()
                path = self.render_image(step)
                logger.debug(f"Frame {step.frame_number} written to {path}")
                rendering_tx.send(step.frame_number)
        finally:
            rendering_tx.close()
