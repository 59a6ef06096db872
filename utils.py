# utils.py
"""
Logging setup and configuration loading for the entry point.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: The loaded config.json. Its optional "logging" section holds
#       "level", "format" and "log_file"; a null "log_file" keeps logging on
#       the console only.
#   - Side Effects: Replaces the root logger's handlers.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON object.
#   - Side Effects: Logs and re-raises read and decode errors.

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/neural_particles.log'


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Routes all log records to the console and, unless disabled, to a log
    file that rotates at 1MB with 5 backups.
    """
    log_config = config.get('logging', {})
    log_file_path = log_config.get('log_file', LOG_FILE)

    handlers = [logging.StreamHandler()]
    if log_file_path:
        os.makedirs(os.path.dirname(log_file_path) or '.', exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        ))

    formatter = logging.Formatter(log_config.get('format', LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(str(log_config.get('level', 'INFO')).upper())
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info(f"Logging initialized. Log file: {log_file_path or 'disabled'}.")


def load_config(path: str) -> Dict[str, Any]:
    """Reads the JSON run configuration; the top level must be an object."""
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.error(f"Could not read configuration from {path}: {e}")
        raise
    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {path} must be a JSON object, got {type(config).__name__}.")
    return config
