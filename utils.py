# utils.py
"""
Utility functions for the simulation framework.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like integration or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, List

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. A null log_file disables
#       file output.
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, optionally, a rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON object.
#   - Raises: FileNotFoundError or json.JSONDecodeError after logging them,
#     ValueError if the top level is not a JSON object.

CONFIG_SECTIONS = ('simulation_parameters', 'run_control', 'visualization', 'logging')
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5


def _build_handlers(log_file_path) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
        ))
    return handlers


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/lorenz.log')

    root = logging.getLogger()
    root.setLevel(log_level)
    # Clear existing handlers to avoid duplication
    if root.hasHandlers():
        root.handlers.clear()

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(log_file_path):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level {log_level}, file {log_file_path or 'disabled'}.")


def load_config(path: str) -> Dict[str, Any]:
    """Loads the JSON configuration file and warns about missing sections."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        raise ValueError(f"Configuration in {path} must be a JSON object.")
    missing = [name for name in CONFIG_SECTIONS if name not in config]
    if missing:
        logging.warning(f"Config sections {missing} not found, using defaults.")
    logging.info("Configuration loaded successfully.")
    return config
