# particle.py
"""
Manages the state of all particles in the network.

This module defines the ParticleSystem class, which creates particles and
advances them each frame, storing simulation state (position, velocity and
fixed visual attributes) in NumPy arrays. Each particle also owns a
ParticleMarker, the glowing dot drawn on screen. Markers are a one-way
projection of the simulation state: they are written every frame and never
read back.
"""
import logging
import numpy as np
import pygame
from typing import List, NamedTuple, Optional, Tuple

from config import NetworkConfig
from constants import DEFAULT_PALETTE, MARKER_GLOW_ALPHA, MARKER_Z_INDEX
from host import HostRegion

# --- Data Contracts ---
#
# class ParticleSystem:
#   - create(host, surface_size, config, rng=None) -> ParticleSystem:
#     - Inputs:
#       - host: HostRegion that receives one marker per particle.
#       - surface_size: (width, height) of the rendering surface.
#       - config: NetworkConfig.
#       - rng: Optional numpy Generator. Defaults to one seeded from config.seed.
#     - Side Effects: Appends config.particle_count markers to the host.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64.
#       - len(self.markers) == N, and markers[i] belongs to particle i.
#
#   - update(surface_size) -> None:
#     - Side Effects: positions += velocities. Any velocity component whose
#       new position lies outside [0, width] (or [0, height]) is negated.
#       Positions are NOT clamped, so a particle may overshoot a bound by at
#       most one frame's velocity. Markers are then moved to the new positions.


class Particle(NamedTuple):
    """A read-only snapshot of one particle."""
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    size: float
    color: pygame.Color
    opacity: float
    marker: "ParticleMarker"


class ParticleMarker:
    """
    The visible glowing dot of a particle, positioned absolutely inside
    the host region.
    """
    z_index = MARKER_Z_INDEX

    def __init__(self, size: float, color: pygame.Color, opacity: float):
        self.size = size
        self.color = color
        self.opacity = opacity
        self.left = 0.0
        self.top = 0.0
        # The glow extends one marker size beyond the dot on every side.
        self.glow_radius = size
        self.image = self._pre_render()

    def _pre_render(self) -> pygame.Surface:
        """Pre-renders the dot and its halo so each frame is a single blit."""
        glow = int(np.ceil(self.glow_radius))
        diameter = int(np.ceil(self.size)) + glow * 2
        center = (diameter // 2, diameter // 2)
        surface = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
        halo_color = pygame.Color(self.color.r, self.color.g, self.color.b, MARKER_GLOW_ALPHA)
        pygame.draw.circle(surface, halo_color, center, diameter // 2)
        pygame.draw.circle(surface, self.color, center, max(1, int(round(self.size / 2))))
        surface.set_alpha(int(round(self.opacity * 255)))
        return surface

    def move_to(self, left: float, top: float) -> None:
        self.left = left
        self.top = top

    def draw(self, target: pygame.Surface, origin: Tuple[int, int]) -> None:
        glow = int(np.ceil(self.glow_radius))
        target.blit(
            self.image,
            (int(round(origin[0] + self.left)) - glow, int(round(origin[1] + self.top)) - glow)
        )


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, positions: np.ndarray, velocities: np.ndarray, sizes: np.ndarray,
                 opacities: np.ndarray, colors: List[pygame.Color], markers: List[ParticleMarker]):
        self.positions = positions
        self.velocities = velocities
        self.sizes = sizes
        self.opacities = opacities
        self.colors = colors
        self.markers = markers
        self.particle_count = len(markers)
        self._sync_markers()

    @classmethod
    def create(cls, host: HostRegion, surface_size: Tuple[int, int], config: NetworkConfig,
               rng: Optional[np.random.Generator] = None) -> "ParticleSystem":
        """
        Creates config.particle_count particles with random attributes and
        appends their markers to the host region.

        Args:
            host (HostRegion): The region that receives the markers.
            surface_size (Tuple[int, int]): Width and height of the rendering surface.
            config (NetworkConfig): The network configuration.
            rng (Optional[np.random.Generator]): Source of randomness.

        Returns:
            ParticleSystem: The populated particle system.
        """
        # All randomness for the particles comes from a single generator.
        if rng is None:
            rng = np.random.default_rng(config.seed)

        count = config.particle_count
        width, height = surface_size
        half_speed = config.speed / 2

        palette = _resolve_palette(config.colors)
        sizes = rng.uniform(config.size_range[0], config.size_range[1], size=count)
        color_indices = rng.integers(0, len(palette), size=count)
        opacities = rng.uniform(config.opacity_range[0], config.opacity_range[1], size=count)
        positions = rng.uniform(low=[0, 0], high=[width, height], size=(count, 2))
        velocities = rng.uniform(-half_speed, half_speed, size=(count, 2))

        colors = [palette[index] for index in color_indices]
        markers = []
        for i in range(count):
            marker = ParticleMarker(float(sizes[i]), colors[i], float(opacities[i]))
            host.append_child(marker)
            markers.append(marker)

        logging.info(f"ParticleSystem initialized with {count} particles on a {width}x{height} surface.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {positions.shape}, "
            f"Velocities shape: {velocities.shape}"
        )
        return cls(positions, velocities, sizes, opacities, colors, markers)

    def __len__(self) -> int:
        return self.particle_count

    def particle(self, index: int) -> Particle:
        """Returns a snapshot of the particle at the given index."""
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        return Particle(
            position=(float(x), float(y)),
            velocity=(float(vx), float(vy)),
            size=float(self.sizes[index]),
            color=self.colors[index],
            opacity=float(self.opacities[index]),
            marker=self.markers[index],
        )

    def update(self, surface_size: Tuple[int, int]) -> None:
        """
        Advances every particle by one frame and reflects velocities at the
        surface bounds, then repositions the markers.
        """
        width, height = surface_size
        self.positions += self.velocities

        x, y = self.positions[:, 0], self.positions[:, 1]
        self.velocities[(x < 0) | (x > width), 0] *= -1
        self.velocities[(y < 0) | (y > height), 1] *= -1

        self._sync_markers()

    def remove_markers(self, host: HostRegion) -> None:
        for marker in self.markers:
            host.remove_child(marker)

    def _sync_markers(self) -> None:
        for marker, (x, y) in zip(self.markers, self.positions):
            marker.move_to(float(x), float(y))


def _resolve_palette(colors) -> List[pygame.Color]:
    """Parses palette entries, falling back to the default palette."""
    if not colors:
        logging.warning("Empty particle color palette. Using default palette.")
        return [pygame.Color(color) for color in DEFAULT_PALETTE]
    try:
        return [pygame.Color(color) for color in colors]
    except (ValueError, TypeError) as e:
        logging.error(f"Could not parse particle colors due to invalid format: {e}. Falling back to default palette.")
        return [pygame.Color(color) for color in DEFAULT_PALETTE]
