# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
window and frame pacing used by the entry point, and the visual defaults
of the particle network that the configuration falls back to.
"""

# Window settings
WINDOW_TITLE = "Neural Particles"
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
BACKGROUND_COLOR = (15, 15, 35) # Deep indigo

# --- Particle Defaults ---
DEFAULT_PARTICLE_COUNT = 40
DEFAULT_SIZE_RANGE = (2.0, 4.0)
DEFAULT_SPEED = 0.7
DEFAULT_OPACITY_RANGE = (0.3, 0.7)

# A curated indigo/violet palette, used if the config file does not
# provide a color list.
DEFAULT_PALETTE = (
    "#6366f1", # Indigo
    "#a5b4fc", # Light indigo
    "#8b5cf6", # Violet
    "#c4b5fd", # Light violet
    "#ffffff"  # White
)

# --- Connection Defaults ---
DEFAULT_CONNECTION_DISTANCE = 180.0
DEFAULT_CONNECTION_OPACITY = 0.2
DEFAULT_CONNECTION_LINE_WIDTH = 0.8
DEFAULT_CONNECTION_COLOR = "#a5b4fc"
# RGB used when the connection color is not a hexadecimal string.
FALLBACK_CONNECTION_RGB = (165, 180, 252)

# --- Marker Glow ---
# Alpha of the glow halo around each marker (0-255).
MARKER_GLOW_ALPHA = 60
# Markers are drawn above the connection overlay.
MARKER_Z_INDEX = 2
SURFACE_Z_INDEX = 0
