# particle.py
"""
A single Lorenz particle and its trail.

This module defines the Particle class, which owns one state vector and
one TrailBuffer. Each tick it integrates its state and records the new
position, exposing the current position and the visible trail to renderers.
"""
import numpy as np
from typing import Sequence

from attractor import LorenzParams, step_inplace
from trail import TrailBuffer, visible_length

# --- Data Contracts ---
#
# class Particle:
#   - __init__(self, position, trail_capacity: int, visible_scale: float):
#     - Inputs:
#       - position: array-like of 3 floats, the initial state.
#       - trail_capacity: int, capacity of the owned TrailBuffer.
#       - visible_scale: float, k in the visible-length heuristic.
#     - Side Effects: Allocates the state, velocity and trail arrays.
#     - Invariants:
#       - self._state is a float64 array of shape (3,) owned by this particle.
#
#   - tick(self, dt: float, params: LorenzParams, track_trail: bool = True) -> None:
#     - Side Effects: Advances the state by one Euler step. When track_trail
#       is True, pushes the new position and updates the visible length.
#
#   - position -> np.ndarray: copy of the current state.
#   - visible_trail() -> np.ndarray: the trail's visible prefix, newest first.


class Particle:
    """
    One independently integrated point on the Lorenz attractor.
    """
    def __init__(self, position, trail_capacity: int, visible_scale: float):
        self._state = np.array(position, dtype=np.float64)
        if self._state.shape != (3,):
            raise ValueError(f"position must have shape (3,), got {self._state.shape}.")
        self._velocity = np.zeros(3, dtype=np.float64)
        self.visible_scale = visible_scale
        self.trail = TrailBuffer(trail_capacity, self._state)

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        half_width: float,
        center: Sequence[float],
        trail_capacity: int,
        visible_scale: float,
    ) -> "Particle":
        """Creates a particle uniformly distributed in a cube around center."""
        center = np.asarray(center, dtype=np.float64)
        position = rng.uniform(low=center - half_width, high=center + half_width, size=3)
        return cls(position, trail_capacity, visible_scale)

    @property
    def position(self) -> np.ndarray:
        return self._state.copy()

    @property
    def velocity(self) -> np.ndarray:
        """Derivative from the most recent tick, zero before the first one."""
        return self._velocity.copy()

    def tick(self, dt: float, params: LorenzParams, track_trail: bool = True) -> None:
        step_inplace(self._state, self._velocity, dt, params)
        if track_trail:
            self.trail.push(self._state)
            self.trail.set_visible_length(visible_length(self._velocity, self.visible_scale))

    def visible_trail(self) -> np.ndarray:
        return self.trail.visible_prefix()

    def reset_trail(self) -> None:
        """Drops the history, re-seeding it at the current position."""
        self.trail.reset(self._state)

    def __repr__(self):
        x, y, z = self._state
        return f"Particle(({x:.3f}, {y:.3f}, {z:.3f}), trail={self.trail.filled_count}/{self.trail.capacity})"
