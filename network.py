# network.py
"""
The particle network: frame loop orchestration.

NeuralNetwork wires the rendering surface, the particle system and the
connection evaluator together and runs one frame per scheduler tick:
clear the surface, advance every particle, then draw connections from the
post-update positions. The effect is purely decorative, so failures inside a
frame are logged and stop the network instead of reaching the host.
"""
import logging
from typing import Any, Dict, Optional, Union

from config import NetworkConfig
from host import HostRegion
from particle import ParticleSystem
from scheduler import FrameScheduler
from simulation import ConnectionEvaluator
from visualization import RenderingSurface

# --- Data Contracts ---
#
# class NeuralNetwork:
#   - step() -> None:
#     - Side Effects: Exactly one frame, in order: surface.clear(),
#       particles.update(surface.size), evaluator.evaluate(...).
#
#   - start() -> None / stop() -> None:
#     - Side Effects: start() requests a frame callback that re-requests
#       itself after every frame; stop() cancels the pending callback.
#       Both are idempotent.
#
#   - destroy() -> None:
#     - Side Effects: Stops the loop and removes the overlay and all markers
#       from the host region.
#
# create_neural_network(host, config=None, scheduler=None) -> Optional[NeuralNetwork]:
#   - Outputs: None if host is None, otherwise a started NeuralNetwork.


class NeuralNetwork:
    """
    An animated network of drifting particles joined by proximity lines.
    """
    def __init__(self, host: HostRegion, config: NetworkConfig, scheduler: FrameScheduler, rng=None):
        """
        Builds the rendering surface and the particle system.

        Args:
            host (HostRegion): The region to render into.
            config (NetworkConfig): The validated configuration.
            scheduler (FrameScheduler): Source of per-frame callbacks.
            rng: Optional numpy Generator for particle creation.
        """
        self.host = host
        self.config = config
        self.scheduler = scheduler
        self.surface = RenderingSurface.initialize(host)
        self.particles = ParticleSystem.create(host, self.surface.size, config, rng=rng)
        self.evaluator = ConnectionEvaluator(config)
        self.frame_count = 0
        self._frame_handle: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self._frame_handle is not None

    def step(self) -> None:
        """Runs exactly one frame."""
        self.surface.clear()
        self.particles.update(self.surface.size)
        self.evaluator.evaluate(self.particles.positions, self.surface)
        self.frame_count += 1

    def start(self) -> None:
        if self.is_running:
            return
        self._frame_handle = self.scheduler.request_frame(self._animate)
        logging.info("Neural network animation started.")

    def stop(self) -> None:
        if not self.is_running:
            return
        self.scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None
        logging.info(f"Neural network animation stopped after {self.frame_count} frames.")

    def destroy(self) -> None:
        self.stop()
        self.particles.remove_markers(self.host)
        self.surface.detach()
        logging.info("Neural network removed from host region.")

    def _animate(self) -> None:
        try:
            self.step()
        except Exception:
            logging.exception("Frame failed. Stopping the neural network animation.")
            self._frame_handle = None
            return
        self._frame_handle = self.scheduler.request_frame(self._animate)


def create_neural_network(host: Optional[HostRegion],
                          config: Union[NetworkConfig, Dict[str, Any], None] = None,
                          scheduler: Optional[FrameScheduler] = None) -> Optional[NeuralNetwork]:
    """
    Creates and starts a neural network in the given host region.

    A missing host region means the effect does not apply, so nothing is
    created and None is returned.
    """
    if host is None:
        logging.info("No host region available. Neural network not created.")
        return None
    if not isinstance(config, NetworkConfig):
        config = NetworkConfig.from_dict(config)
    if scheduler is None:
        scheduler = FrameScheduler()

    network = NeuralNetwork(host, config, scheduler)
    network.start()
    return network
