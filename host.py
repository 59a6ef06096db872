# host.py
"""
The host region the particle network renders into.

A HostRegion is a rectangle of the window that owns an ordered list of child
elements (the connection overlay and the particle markers) and notifies
listeners when its size changes. It plays the part a container element plays
on a web page.
"""
import logging
import pygame
from typing import Callable, List, Tuple

# --- Data Contracts ---
#
# Child elements are any object exposing:
#   - z_index: int, drawing order (lower first).
#   - draw(target: pygame.Surface, origin: Tuple[int, int]) -> None
#
# class HostRegion:
#   - resize(width, height) -> None:
#     - Side Effects: Updates the content size and calls every resize
#       listener, in subscription order, if the size actually changed.
#   - render(target) -> None:
#     - Side Effects: Draws every child onto target, offset by the region's
#       top-left corner. Ties in z_index keep insertion order.

class HostRegion:
    """
    A rectangular container with child elements and resize notification.
    """
    def __init__(self, rect: pygame.Rect):
        self.rect = pygame.Rect(rect)
        self.children: List[object] = []
        self._resize_listeners: List[Callable[[], None]] = []

    def content_size(self) -> Tuple[int, int]:
        """Returns the current (width, height) of the region in pixels."""
        return self.rect.width, self.rect.height

    def append_child(self, element) -> None:
        self.children.append(element)

    def remove_child(self, element) -> None:
        if element in self.children:
            self.children.remove(element)

    def add_resize_listener(self, listener: Callable[[], None]) -> None:
        self._resize_listeners.append(listener)

    def remove_resize_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._resize_listeners:
            self._resize_listeners.remove(listener)

    def resize(self, width: int, height: int) -> None:
        """
        Changes the region's size and notifies resize listeners.
        """
        width, height = max(0, int(width)), max(0, int(height))
        if (width, height) == self.content_size():
            return
        logging.debug(f"Host region resized from {self.rect.size} to {(width, height)}.")
        self.rect.size = (width, height)
        for listener in list(self._resize_listeners):
            listener()

    def render(self, target: pygame.Surface) -> None:
        """Draws all children in z-index order."""
        origin = self.rect.topleft
        for element in sorted(self.children, key=lambda child: child.z_index):
            element.draw(target, origin)
