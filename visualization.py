# visualization.py
"""
The rendering surface the connection lines are drawn on.

RenderingSurface is a transparent, non-interactive overlay covering its host
region exactly. It follows the host's size through the host's resize
notification and is cleared at the start of every frame so lines never
accumulate.
"""
import logging
import pygame
from typing import Optional, Tuple

from constants import SURFACE_Z_INDEX
from host import HostRegion

# --- Data Contracts ---
#
# class RenderingSurface:
#   - initialize(host: HostRegion) -> RenderingSurface:
#     - Side Effects: Appends the overlay to the host's children and
#       subscribes to the host's resize notification.
#     - Invariants: self.size always equals the host's content size as of
#       the last resize notification.
#
#   - clear() -> None:
#     - Side Effects: Every pixel becomes fully transparent. Idempotent.
#
#   - draw_line(start, end, rgba, width) -> None:
#     - Side Effects: Strokes one segment. Widths below one pixel are
#       stroked one pixel wide.

TRANSPARENT = (0, 0, 0, 0)


class RenderingSurface:
    """
    A per-pixel-alpha overlay sized to a host region.
    """
    z_index = SURFACE_Z_INDEX

    def __init__(self, host: HostRegion):
        self.host = host
        self.size: Tuple[int, int] = (0, 0)
        self.canvas: Optional[pygame.Surface] = None
        self.resize()

    @classmethod
    def initialize(cls, host: HostRegion) -> "RenderingSurface":
        """
        Creates the overlay, inserts it into the host region and keeps it
        sized to the region for as long as it stays attached.
        """
        surface = cls(host)
        host.append_child(surface)
        host.add_resize_listener(surface.resize)
        logging.info(f"Rendering surface initialized ({surface.width}x{surface.height}).")
        return surface

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def resize(self) -> None:
        """Re-reads the host's content size and reallocates the canvas."""
        self.size = self.host.content_size()
        # pygame cannot allocate a zero-area surface for blitting, so the
        # canvas is at least 1x1 while self.size reports the real size.
        canvas_size = (max(1, self.size[0]), max(1, self.size[1]))
        self.canvas = pygame.Surface(canvas_size, pygame.SRCALPHA)
        self.canvas.fill(TRANSPARENT)
        logging.debug(f"Rendering surface resized to {self.size[0]}x{self.size[1]}.")

    def clear(self) -> None:
        self.canvas.fill(TRANSPARENT)

    def draw_line(self, start: Tuple[float, float], end: Tuple[float, float],
                  rgba: Tuple[int, int, int, int], width: float) -> None:
        pygame.draw.line(self.canvas, rgba, start, end, max(1, int(round(width))))

    def detach(self) -> None:
        """Unsubscribes from resize notifications and leaves the host region."""
        self.host.remove_resize_listener(self.resize)
        self.host.remove_child(self)

    def draw(self, target: pygame.Surface, origin: Tuple[int, int]) -> None:
        if self.width and self.height:
            target.blit(self.canvas, origin)
