# config.py
"""
Configuration for the particle network.

Defines NetworkConfig, an immutable value object enumerating every option
the network recognizes. Every instance is validated once, at construction,
so nothing downstream reads options ad hoc or sees an invalid value.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from constants import (
    DEFAULT_PARTICLE_COUNT, DEFAULT_PALETTE, DEFAULT_SIZE_RANGE, DEFAULT_SPEED,
    DEFAULT_OPACITY_RANGE, DEFAULT_CONNECTION_DISTANCE, DEFAULT_CONNECTION_OPACITY,
    DEFAULT_CONNECTION_LINE_WIDTH, DEFAULT_CONNECTION_COLOR
)

# --- Data Contracts ---
#
# NetworkConfig(...) -> NetworkConfig:
#   - Side Effects: Logs a warning for every invalid field.
#   - Invariants: Never raises. Every numeric field is finite and within
#     its bounds; invalid fields are replaced by their defaults.
#
# NetworkConfig.from_dict(params: Dict[str, Any]) -> NetworkConfig:
#   - Inputs:
#     - params: The "network" section of config.json. Keys may use the
#       snake_case field names or the camelCase names of the web effect
#       ("particleCount", "minSize", "maxSize", "minOpacity", "maxOpacity",
#       "connectionDistance", "connectionOpacity", "connectionWidth",
#       "connectionColor").
#   - Outputs: A fully populated NetworkConfig.
#   - Invariants: Never raises. Unknown keys are logged and ignored.

# camelCase key -> field name
_ALIASES = {
    "particleCount": "particle_count",
    "connectionDistance": "connection_distance",
    "connectionOpacity": "connection_opacity",
    "connectionWidth": "connection_line_width",
    "connection_width": "connection_line_width",
    "connectionColor": "connection_color",
}


@dataclass(frozen=True)
class NetworkConfig:
    """
    Immutable configuration of a particle network.
    """
    particle_count: int = DEFAULT_PARTICLE_COUNT
    colors: Tuple[str, ...] = DEFAULT_PALETTE
    size_range: Tuple[float, float] = DEFAULT_SIZE_RANGE
    speed: float = DEFAULT_SPEED
    opacity_range: Tuple[float, float] = DEFAULT_OPACITY_RANGE
    connection_distance: float = DEFAULT_CONNECTION_DISTANCE
    connection_opacity: float = DEFAULT_CONNECTION_OPACITY
    connection_line_width: float = DEFAULT_CONNECTION_LINE_WIDTH
    # Kept as given; parsed (with fallback) by the connection evaluator.
    connection_color: Any = DEFAULT_CONNECTION_COLOR
    seed: Optional[int] = None

    def __post_init__(self):
        # The dataclass is frozen, so validated values are written back
        # through object.__setattr__.
        validated = {
            "particle_count": _count("particle_count", self.particle_count, DEFAULT_PARTICLE_COUNT),
            "colors": _palette(self.colors),
            "size_range": _range("size_range", self.size_range, DEFAULT_SIZE_RANGE, lower=0.0),
            "speed": _number("speed", self.speed, DEFAULT_SPEED, lower=0.0),
            "opacity_range": _range("opacity_range", self.opacity_range, DEFAULT_OPACITY_RANGE,
                                    lower=0.0, upper=1.0),
            "connection_distance": _number("connection_distance", self.connection_distance,
                                           DEFAULT_CONNECTION_DISTANCE, lower=0.0),
            "connection_opacity": _number("connection_opacity", self.connection_opacity,
                                          DEFAULT_CONNECTION_OPACITY, lower=0.0, upper=1.0),
            "connection_line_width": _number("connection_line_width", self.connection_line_width,
                                             DEFAULT_CONNECTION_LINE_WIDTH, lower=0.0),
            "seed": _seed(self.seed),
        }
        for name, value in validated.items():
            object.__setattr__(self, name, value)

    @classmethod
    def from_dict(cls, params: Optional[Dict[str, Any]]) -> "NetworkConfig":
        """
        Builds a configuration from a raw dictionary.

        Args:
            params (Optional[Dict[str, Any]]): Raw options. None means all defaults.

        Returns:
            NetworkConfig: The validated configuration.
        """
        params = dict(params or {})
        for alias, field_name in _ALIASES.items():
            if alias in params and field_name not in params:
                params[field_name] = params.pop(alias)

        # Split min/max keys are merged into ranges.
        if "size_range" not in params and ("minSize" in params or "maxSize" in params):
            params["size_range"] = (
                params.pop("minSize", DEFAULT_SIZE_RANGE[0]),
                params.pop("maxSize", DEFAULT_SIZE_RANGE[1]),
            )
        if "opacity_range" not in params and ("minOpacity" in params or "maxOpacity" in params):
            params["opacity_range"] = (
                params.pop("minOpacity", DEFAULT_OPACITY_RANGE[0]),
                params.pop("maxOpacity", DEFAULT_OPACITY_RANGE[1]),
            )

        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            logging.warning(f"Ignoring unknown network options: {sorted(unknown)}")

        config = cls(**{key: value for key, value in params.items() if key in known})
        logging.debug(f"Network configuration resolved: {config}")
        return config


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _number(key: str, value: Any, default: float,
            lower: Optional[float] = None, upper: Optional[float] = None) -> float:
    """Checks a bounded real option, falling back to the default when invalid."""
    if (not _is_number(value)
            or (lower is not None and value < lower)
            or (upper is not None and value > upper)):
        logging.warning(f"Invalid value for '{key}': {value!r}. Using default {default}.")
        return default
    return float(value)


def _count(key: str, value: Any, default: int) -> int:
    if not _is_number(value) or value < 0 or int(value) != value:
        logging.warning(f"Invalid value for '{key}': {value!r}. Using default {default}.")
        return default
    return int(value)


def _range(key: str, value: Any, default: Tuple[float, float],
           lower: Optional[float] = None, upper: Optional[float] = None) -> Tuple[float, float]:
    """Checks a (min, max) pair. An inverted pair is swapped rather than rejected."""
    try:
        low, high = value
    except (TypeError, ValueError):
        logging.warning(f"Invalid range for '{key}': {value!r}. Using default {default}.")
        return default
    if not (_is_number(low) and _is_number(high)):
        logging.warning(f"Invalid range for '{key}': {value!r}. Using default {default}.")
        return default
    if low > high:
        logging.warning(f"Range for '{key}' is inverted ({low} > {high}). Swapping bounds.")
        low, high = high, low
    if (lower is not None and low < lower) or (upper is not None and high > upper):
        logging.warning(f"Range for '{key}' is out of bounds: {value!r}. Using default {default}.")
        return default
    return (float(low), float(high))


def _palette(value: Any) -> Tuple[str, ...]:
    if value is None:
        return DEFAULT_PALETTE
    if not isinstance(value, (list, tuple)) or not value:
        logging.warning(f"Invalid color palette: {value!r}. Using default palette.")
        return DEFAULT_PALETTE
    # Entries are validated when markers are built (pygame.Color parsing).
    return tuple(tuple(c) if isinstance(c, list) else c for c in value)


def _seed(value: Any) -> Optional[int]:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        logging.warning(f"Invalid seed: {value!r}. Using a nondeterministic seed.")
        return None
    return value
