# config.py
"""
Validated simulation configuration.

This module turns the "simulation_parameters" section of config.json into
a SimulationConfig object and rejects invalid values at construction time.
Nothing here coerces a bad value into a default.
"""
import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from constants import (
    DEFAULT_BETA, DEFAULT_DT, DEFAULT_PARTICLE_COUNT, DEFAULT_RHO,
    DEFAULT_SIGMA, DEFAULT_SPAWN_CENTER, DEFAULT_SPAWN_HALF_WIDTH,
    DEFAULT_TRAIL_CAPACITY, DEFAULT_VISIBLE_SCALE
)

# --- Data Contracts ---
#
# class SimulationConfig:
#   - from_params(params: Dict[str, Any]) -> SimulationConfig:
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "particle_count": int
#         - "trail_capacity": int
#         - "dt": float
#         - "sigma", "rho", "beta": float
#         - "spawn_half_width": float
#         - "spawn_center": [float, float, float]
#         - "visible_scale": float
#         - "seed": int or null
#     - Outputs: A validated SimulationConfig.
#     - Side Effects: Logs and raises ConfigurationError on invalid input.


class ConfigurationError(ValueError):
    """Raised when a simulation parameter is out of its valid range."""


def _fail(msg: str):
    logging.critical(f"Configuration error: {msg}")
    raise ConfigurationError(msg)


def require_count(name: str, value: Any) -> int:
    """Returns value as an int if it is a non-negative integer, raises otherwise."""
    # bool is an int subclass, but True particles is never intended.
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        _fail(f"{name} must be an integer, got {value!r}.")
    value = int(value)
    if value < 0:
        _fail(f"{name} must be non-negative, got {value}.")
    return value


def require_positive_count(name: str, value: Any) -> int:
    value = require_count(name, value)
    if value == 0:
        _fail(f"{name} must be at least 1, got 0.")
    return value


def require_positive(name: str, value: Any) -> float:
    """Returns value as a float if it is finite and > 0, raises otherwise."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        _fail(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value) or value <= 0:
        _fail(f"{name} must be a finite positive number, got {value}.")
    return value


def require_non_negative(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        _fail(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value) or value < 0:
        _fail(f"{name} must be a finite non-negative number, got {value}.")
    return value


def require_finite(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        _fail(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        _fail(f"{name} must be finite, got {value}.")
    return value


@dataclass
class SimulationConfig:
    """
    Everything the ensemble needs at construction time.
    """
    particle_count: int = DEFAULT_PARTICLE_COUNT
    trail_capacity: int = DEFAULT_TRAIL_CAPACITY
    dt: float = DEFAULT_DT
    sigma: float = DEFAULT_SIGMA
    rho: float = DEFAULT_RHO
    beta: float = DEFAULT_BETA
    spawn_half_width: float = DEFAULT_SPAWN_HALF_WIDTH
    spawn_center: Tuple[float, float, float] = field(
        default_factory=lambda: DEFAULT_SPAWN_CENTER
    )
    visible_scale: float = DEFAULT_VISIBLE_SCALE
    seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Checks every field, raising ConfigurationError on the first bad one.
        """
        self.particle_count = require_count("particle_count", self.particle_count)
        self.trail_capacity = require_count("trail_capacity", self.trail_capacity)
        self.dt = require_positive("dt", self.dt)
        self.sigma = require_finite("sigma", self.sigma)
        self.rho = require_finite("rho", self.rho)
        self.beta = require_finite("beta", self.beta)
        self.spawn_half_width = require_non_negative("spawn_half_width", self.spawn_half_width)
        self.visible_scale = require_non_negative("visible_scale", self.visible_scale)

        center = tuple(self.spawn_center)
        if len(center) != 3:
            _fail(f"spawn_center must have 3 components, got {len(center)}.")
        self.spawn_center = tuple(require_finite("spawn_center", c) for c in center)

        if self.seed is not None:
            self.seed = require_count("seed", self.seed)

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "SimulationConfig":
        """Builds a config from a config.json section, falling back to defaults."""
        known = cls.__dataclass_fields__.keys()
        unknown = sorted(set(params) - set(known))
        if unknown:
            logging.warning(f"Ignoring unknown simulation parameters: {unknown}")
        config = cls(**{k: v for k, v in params.items() if k in known})
        logging.info(
            f"Simulation config: {config.particle_count} particles, "
            f"trail capacity {config.trail_capacity}, dt={config.dt}."
        )
        return config
