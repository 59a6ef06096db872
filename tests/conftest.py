import os

# Surfaces are created without a real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from host import HostRegion


class RecordingSurface:
    """Stands in for RenderingSurface and records every stroke."""
    def __init__(self):
        self.lines = []

    def draw_line(self, start, end, rgba, width):
        self.lines.append((start, end, rgba, width))


@pytest.fixture
def host():
    return HostRegion(pygame.Rect(0, 0, 800, 600))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def recording_surface():
    return RecordingSurface()
