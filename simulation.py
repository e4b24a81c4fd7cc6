# simulation.py
"""
Host-side driver for the particle ensemble.

This module defines the Simulation class, which holds the runtime context
(integration step, Lorenz parameters, pause and trail toggles) and calls
the ensemble once per frame. Renderers and UI code talk to this object
instead of mutating the ensemble directly.
"""
import logging
import numpy as np
from dataclasses import replace
from typing import Any, Dict

from attractor import LorenzParams
from config import SimulationConfig, require_count, require_finite, require_positive
from ensemble import ParticleEnsemble

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, config: SimulationConfig):
#     - Inputs:
#       - config: A validated SimulationConfig.
#     - Side Effects: Creates the ParticleEnsemble.
#
#   - step(self) -> bool:
#     - Outputs: True if the ensemble was advanced, False while paused.
#     - Side Effects: Advances every particle once. Trails are only
#       updated when trails_enabled is True.
#     - Invariants: The ensemble is never resized while a tick runs.
#
#   - resize(count), reset(count), pause(), resume(), toggle_pause(),
#     set_trails_enabled(enabled), set_lorenz_params(**changes), set_dt(dt)


class Simulation:
    """
    Owns the ensemble and the per-frame context passed into each tick.
    """
    def __init__(self, config: SimulationConfig):
        self.config = config
        self.dt = config.dt
        self.params = LorenzParams(sigma=config.sigma, rho=config.rho, beta=config.beta)
        self.ensemble = ParticleEnsemble(config)
        self.paused = False
        self.trails_enabled = True
        self.step_count = 0
        logging.info(
            f"Simulation initialized: sigma={self.params.sigma}, rho={self.params.rho}, "
            f"beta={self.params.beta:.4f}, dt={self.dt}."
        )

    def step(self) -> bool:
        """
        Executes one tick of the simulation unless paused.
        """
        if self.paused:
            return False
        self.ensemble.tick(self.dt, self.params, self.trails_enabled)
        self.step_count += 1
        return True

    def pause(self) -> None:
        if not self.paused:
            self.paused = True
            logging.info(f"Simulation paused at step {self.step_count}.")

    def resume(self) -> None:
        if self.paused:
            self.paused = False
            logging.info(f"Simulation resumed at step {self.step_count}.")

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def set_trails_enabled(self, enabled: bool) -> None:
        """
        Turns trail bookkeeping on or off. Integration continues either way.

        Trails restart from the current positions when re-enabled, so the
        positions skipped while disabled do not appear as one long jump.
        """
        enabled = bool(enabled)
        if enabled == self.trails_enabled:
            return
        if enabled:
            self.ensemble.reset_trails()
        self.trails_enabled = enabled
        logging.info(f"Trails {'enabled' if enabled else 'disabled'} by user.")

    def set_lorenz_params(self, **changes: Any) -> None:
        """Replaces sigma, rho and/or beta for subsequent ticks."""
        unknown = set(changes) - {'sigma', 'rho', 'beta'}
        if unknown:
            raise TypeError(f"Unknown Lorenz parameters: {sorted(unknown)}")
        checked = {name: require_finite(name, value) for name, value in changes.items()}
        self.params = replace(self.params, **checked)
        logging.info(f"Lorenz parameters updated: {self.params}")

    def set_dt(self, dt: float) -> None:
        self.dt = require_positive("dt", dt)
        logging.info(f"Integration step set to {self.dt}.")

    def resize(self, count: int) -> None:
        self.ensemble.resize(count)

    def reset(self, count: int = None) -> None:
        """Recreates the ensemble, keeping the current count if none is given."""
        if count is None:
            count = len(self.ensemble)
        self.ensemble.reset(require_count("particle_count", count))
        self.step_count = 0

    def stats(self) -> Dict[str, float]:
        """
        Aggregate metrics for DEBUG logging: mean speed over finite
        particles and the number of particles that have diverged.
        """
        if len(self.ensemble) == 0:
            return {'mean_speed': 0.0, 'diverged': 0}
        velocities = np.stack([p.velocity for p in self.ensemble])
        finite = np.isfinite(self.ensemble.positions()).all(axis=1)
        speeds = np.linalg.norm(velocities[finite], axis=1)
        return {
            'mean_speed': float(speeds.mean()) if speeds.size else 0.0,
            'diverged': int((~finite).sum()),
        }
