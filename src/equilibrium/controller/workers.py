"""
Background Workers (Threading)
==============================
Thread subclasses driving the two stages of a run.

Why is this file needed?
------------------------
1. Responsiveness: ``Renderer.render`` returns at once; simulating and writing
   images happens on these threads.
2. Failure isolation: An exception inside a stage is logged and stored on the
   worker instead of killing the process. The worker closes its channels so
   the other stage stops too.

Classes:
    SimulationWorker: Runs ``CurrentSimulation.simulate``.
    RenderingWorker: Runs ``RenderingListener.listen``.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from equilibrium.controller.channels import FrameChannel
from equilibrium.controller.simulation import CurrentSimulation, FluidStep, RenderingListener

logger = logging.getLogger(__name__)


class SimulationWorker(threading.Thread):

    def __init__(self, simulation: CurrentSimulation, simulation_tx: FrameChannel[FluidStep]):
        super().__init__(name="simulation-worker")
        self.simulation = simulation
        self.simulation_tx = simulation_tx
        self.error: Optional[Exception] = None

    def run(self) -> None:
        try:
            logger.info(f"Starting simulation of {self.simulation.frames} frames...")
            self.simulation.simulate(self.simulation_tx)
            logger.info("Simulation finished.")
        except Exception as e:
            logger.exception(f"Simulation failed: {e}")
            self.error = e
        finally:
            self.simulation_tx.close()


class RenderingWorker(threading.Thread):

    def __init__(
        self,
        listener: RenderingListener,
        max_frames: int,
        simulation_rx: FrameChannel[FluidStep],
        rendering_tx: FrameChannel[int]
    ):
        super().__init__(name="rendering-worker")
        self.listener = listener
        self.max_frames = max_frames
        self.simulation_rx = simulation_rx
        self.rendering_tx = rendering_tx
        self.error: Optional[Exception] = None

    def run(self) -> None:
        try:
            logger.info(f"Rendering frames into {self.listener.save_into_dir}")
            self.listener.listen(self.max_frames, self.simulation_rx, self.rendering_tx)
            logger.info("Rendering finished.")
        except Exception as e:
            logger.exception(f"Rendering failed: {e}")
            self.error = e
            # stop the producer as well
            self.simulation_rx.close()
        finally:
            self.rendering_tx.close()
