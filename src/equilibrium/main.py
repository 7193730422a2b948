"""
Application Initialization
==========================
Headless runner: parses the command line, renders one run and reports every
finished frame.

Why is this file needed?
------------------------
It is the composition root without a GUI. It:
1. Sets up logging (console + optional file).
2. Turns the arguments into settings and pushes them into a ``Renderer``,
   exactly the way a UI would.
3. Waits for the run and maps its final state to the exit code.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from equilibrium import config
from equilibrium.controller.renderer import Renderer, RunState
from equilibrium.exceptions import ValidationError
from equilibrium.logging_config import setup_logging
from equilibrium.model.configs import FluidConfigs, SimulationConfigs
from equilibrium.model.settings import FluidSetting, ObstacleSetting, OutputSetting, SimulationSetting

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equilibrium",
        description="Simulate a 2-D fluid and write every frame as a JPEG image."
    )
    parser.add_argument("--frames", type=int, default=config.DEFAULT_FRAMES, help="number of frames to render")
    parser.add_argument("--size", type=int, default=config.DEFAULT_SIZE, help="grid side length in cells")
    parser.add_argument("--delta-t", type=float, default=config.DEFAULT_DELTA_T, help="time step")
    parser.add_argument("--iterations", type=int, default=config.DEFAULT_ITERATIONS,
                        help="Gauss-Seidel sweeps per solve")
    parser.add_argument("--diffusion", type=float, default=config.DEFAULT_DIFFUSION)
    parser.add_argument("--viscosity", type=float, default=config.DEFAULT_VISCOSITY)
    parser.add_argument("--no-noise", action="store_true", help="disable the Perlin noise forcing")
    parser.add_argument("--animate", action="store_true", help="evolve the obstacles with Game of Life")
    parser.add_argument("--output", type=Path, default=config.DEFAULT_RENDERED_IMAGES_DIR,
                        help="directory the frames are written to")
    parser.add_argument("--seed", type=int, default=None, help="seed of the obstacle animation")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", type=Path, default=None, help="also write the log to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # 1. Setup Logging
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Push the configuration into the orchestrator
    renderer = Renderer(seed=args.seed)
    try:
        simulation_configs = SimulationConfigs(
            delta_t=args.delta_t, frames=args.frames, size=args.size, iterations=args.iterations
        )
        fluid_configs = FluidConfigs(
            diffusion=args.diffusion, viscosity=args.viscosity, has_perlin_noise=not args.no_noise
        )
    except ValidationError as e:
        parser.error(str(e))

    settings = [
        SimulationSetting(simulation_configs),
        FluidSetting(fluid_configs),
        OutputSetting(save_into_dir=args.output),
    ]
    if args.animate:
        # no user obstacles: the animation seeds itself
        settings.append(ObstacleSetting(obstacles=[], animate=True))
    renderer.update_configs(settings)

    # 3. Run and follow the frames
    run = renderer.render()
    for frame_number in run.receiver:
        logger.info(f"Frame {frame_number + 1}/{args.frames} ready: {run.frame_path(frame_number)}")
    run.join()

    if run.state is RunState.FAILED:
        for error in run.errors:
            logger.error(f"Run failed: {error}")
        return 1
    logger.info(f"Done. {args.frames} frames in {run.save_into_dir}")
    return 0
