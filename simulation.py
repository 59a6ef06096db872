# simulation.py
"""
Evaluates which particles are connected and draws the connections.

A connection is a straight line between two particles closer than the
configured connection distance. Connections are not stored: every frame the
full set is recomputed from current positions by a Numba-compiled pairwise
scan and stroked onto the rendering surface with a fixed style.
"""
import logging
import re
import numpy as np
from numba import jit
from typing import Any, Optional, Tuple

from config import NetworkConfig
from constants import FALLBACK_CONNECTION_RGB

# --- Data Contracts ---
#
# _find_connections_numba(positions, max_distance) -> (pairs, checks):
#   - Inputs:
#     - positions: float64 array of shape (N, 2).
#     - max_distance: float, the connection distance.
#   - Outputs:
#     - pairs: int64 array of shape (M, 2) with pairs[k, 0] < pairs[k, 1],
#       ordered by first index then second index.
#     - checks: int, the number of distance tests performed, N * (N - 1) / 2.
#   - Invariants: Each unordered pair is tested exactly once and no particle
#     is paired with itself. The test is strict: distance < max_distance.
#
# class ConnectionEvaluator:
#   - evaluate(positions, surface) -> int:
#     - Side Effects: Calls surface.draw_line once per connection.
#     - Outputs: The number of connections drawn.

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


@jit(nopython=True)
def _find_connections_numba(positions, max_distance):
    """
    Numba-jitted scan over every unique particle pair.
    Particle i is only compared with particles stored after it.
    """
    particle_count = positions.shape[0]
    max_pairs = particle_count * (particle_count - 1) // 2
    pairs = np.empty((max_pairs, 2), dtype=np.int64)
    count = 0
    checks = 0

    for i in range(particle_count):
        for j in range(i + 1, particle_count):
            checks += 1
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            distance = np.sqrt(dx * dx + dy * dy)
            if distance < max_distance:
                pairs[count, 0] = i
                pairs[count, 1] = j
                count += 1
    return pairs[:count], checks


def _read_hex_color(value: Any) -> Optional[Tuple[int, int, int]]:
    """Returns the channels of a "#rrggbb" string, or None if value is not one."""
    if not isinstance(value, str):
        return None
    match = _HEX_COLOR.fullmatch(value.strip())
    if match is None:
        return None
    return tuple(int(channel, 16) for channel in match.groups())


def parse_hex_color(value: Any) -> Tuple[int, int, int]:
    """
    Parses a "#rrggbb" string into its channels.

    Anything that is not a six-digit hexadecimal color string yields
    FALLBACK_CONNECTION_RGB instead of raising.
    """
    rgb = _read_hex_color(value)
    return FALLBACK_CONNECTION_RGB if rgb is None else rgb


class ConnectionEvaluator:
    """
    Finds particle pairs within the connection distance and draws a line
    for each one.
    """
    def __init__(self, config: NetworkConfig):
        self.max_distance = float(config.connection_distance)
        self.line_width = float(config.connection_line_width)

        # The stroke style is fixed for the lifetime of the network, so it is
        # resolved once rather than per line.
        rgb = _read_hex_color(config.connection_color)
        if rgb is None:
            logging.warning(
                f"Connection color {config.connection_color!r} is not a hexadecimal color. "
                f"Falling back to RGB {FALLBACK_CONNECTION_RGB}."
            )
            rgb = FALLBACK_CONNECTION_RGB
        alpha = int(round(config.connection_opacity * 255))
        self.rgba = (rgb[0], rgb[1], rgb[2], alpha)

        self.last_pair_checks = 0
        self.last_connection_count = 0

    def find_pairs(self, positions: np.ndarray) -> np.ndarray:
        """Returns the (M, 2) array of connected particle index pairs."""
        pairs, checks = _find_connections_numba(
            np.ascontiguousarray(positions, dtype=np.float64), self.max_distance
        )
        self.last_pair_checks = int(checks)
        return pairs

    def evaluate(self, positions: np.ndarray, surface) -> int:
        """
        Draws every connection for the current positions.

        Args:
            positions (np.ndarray): Particle positions, shape (N, 2).
            surface: Anything with a draw_line(start, end, rgba, width) method.

        Returns:
            int: The number of connections drawn.
        """
        pairs = self.find_pairs(positions)
        for i, j in pairs:
            surface.draw_line(
                (float(positions[i, 0]), float(positions[i, 1])),
                (float(positions[j, 0]), float(positions[j, 1])),
                self.rgba,
                self.line_width
            )
        self.last_connection_count = len(pairs)
        return self.last_connection_count
