# ensemble.py
"""
A resizable collection of independent Lorenz particles.

ParticleEnsemble exclusively owns its particles. It advances all of them
once per tick and grows or shrinks the collection on request. Particles
never interact, so tick order does not affect the result.
"""
import logging
import numpy as np
from typing import Iterator, List, Optional

from attractor import LorenzParams
from config import SimulationConfig, require_count
from particle import Particle

# --- Data Contracts ---
#
# class ParticleEnsemble:
#   - __init__(self, config: SimulationConfig, rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - config: A validated SimulationConfig. particle_count particles are
#         created immediately.
#       - rng: Optional generator. Defaults to one seeded from config.seed.
#
#   - tick(self, dt: float, params: LorenzParams, track_trails: bool = True) -> None:
#     - Side Effects: Every particle is advanced exactly once.
#
#   - resize(self, target_count: int) -> None:
#     - Side Effects: Appends fresh random particles or removes particles
#       from the tail (most recently added first). No-op if the count
#       already matches.
#     - Raises: ConfigurationError for a negative or non-integer count.
#
#   - reset(self, target_count: int) -> None:
#     - Side Effects: Drops every particle and creates target_count new ones.
#
#   - Invariants: resize and reset must not run while a tick is in progress.


class ParticleEnsemble:
    """
    Owns and advances a list of Particles.
    """
    def __init__(self, config: SimulationConfig, rng: Optional[np.random.Generator] = None):
        self.config = config
        # Rule 12: All randomness is controlled by a single master seed.
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self._particles: List[Particle] = []
        self.resize(config.particle_count)
        logging.info(f"ParticleEnsemble initialized with {len(self)} particles.")

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]

    def _spawn(self) -> Particle:
        return Particle.random(
            self.rng,
            self.config.spawn_half_width,
            self.config.spawn_center,
            self.config.trail_capacity,
            self.config.visible_scale,
        )

    def tick(self, dt: float, params: LorenzParams, track_trails: bool = True) -> None:
        """Advances every particle by one step."""
        for particle in self._particles:
            particle.tick(dt, params, track_trails)

    def resize(self, target_count: int) -> None:
        target_count = require_count("particle_count", target_count)
        current = len(self._particles)
        if target_count == current:
            return
        if target_count > current:
            self._particles.extend(self._spawn() for _ in range(target_count - current))
        else:
            del self._particles[target_count:]
        logging.info(f"Ensemble resized from {current} to {target_count} particles.")

    def reset(self, target_count: int) -> None:
        """Replaces every particle with a freshly sampled one."""
        target_count = require_count("particle_count", target_count)
        self._particles.clear()
        self.resize(target_count)
        logging.info(f"Ensemble reset with {target_count} particles.")

    def clear(self) -> None:
        self._particles.clear()

    def reset_trails(self) -> None:
        for particle in self._particles:
            particle.reset_trail()

    def positions(self) -> np.ndarray:
        """Current positions of all particles as an (N, 3) array."""
        if not self._particles:
            return np.empty((0, 3), dtype=np.float64)
        return np.stack([p.position for p in self._particles])

    def trails(self) -> List[np.ndarray]:
        """Visible trail prefix of every particle, in particle order."""
        return [p.visible_trail() for p in self._particles]
