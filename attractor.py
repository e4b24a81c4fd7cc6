# attractor.py
"""
Numerical integration of the Lorenz system.

This module advances a single 3D state by one explicit Euler step. The
derivative vector of the step is returned alongside the new state, since
callers use its magnitude as a speed proxy for trail rendering.
"""
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from numba import jit

from constants import DEFAULT_BETA, DEFAULT_RHO, DEFAULT_SIGMA

# --- Data Contracts ---
#
# step(state, dt: float, params: LorenzParams) -> (next_state, velocity):
#   - Inputs:
#     - state: array-like of 3 floats (x, y, z).
#     - dt: float, the integration step (validated by the caller's config).
#     - params: LorenzParams (sigma, rho, beta).
#   - Outputs:
#     - next_state: new float64 array of shape (3,).
#     - velocity: new float64 array of shape (3,), the derivative before
#       scaling by dt.
#   - Side Effects: None. The input state is not modified.
#   - Invariants: Identical inputs produce bit-identical outputs.
#     Non-finite values propagate; nothing is clamped.
#
# step_inplace(state, velocity, dt, params) -> None:
#   - Same computation, written into the caller's float64 arrays.


@dataclass(frozen=True)
class LorenzParams:
    sigma: float = DEFAULT_SIGMA
    rho: float = DEFAULT_RHO
    beta: float = DEFAULT_BETA

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "LorenzParams":
        return cls(
            sigma=float(params.get('sigma', DEFAULT_SIGMA)),
            rho=float(params.get('rho', DEFAULT_RHO)),
            beta=float(params.get('beta', DEFAULT_BETA)),
        )


@jit(nopython=True)
def _lorenz_step_numba(state, velocity, dt, sigma, rho, beta):
    """
    Numba-jitted Euler step. Writes the derivative into velocity and the
    advanced position into state.
    """
    x = state[0]
    y = state[1]
    z = state[2]

    dx = sigma * (y - x)
    dy = x * (rho - z) - y
    dz = x * y - beta * z

    velocity[0] = dx
    velocity[1] = dy
    velocity[2] = dz

    state[0] = x + dx * dt
    state[1] = y + dy * dt
    state[2] = z + dz * dt


def step_inplace(state: np.ndarray, velocity: np.ndarray, dt: float, params: LorenzParams) -> None:
    """
    Advances state by one Euler step without allocating.

    Both arrays must be float64 of shape (3,) and are overwritten.
    """
    _lorenz_step_numba(state, velocity, float(dt), params.sigma, params.rho, params.beta)


def step(state, dt: float, params: Optional[LorenzParams] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Computes one Euler step of the Lorenz system.

    Args:
        state: The current (x, y, z).
        dt (float): The integration time step.
        params (LorenzParams): System parameters. Classical values if omitted.

    Returns:
        Tuple[np.ndarray, np.ndarray]: The next state and the raw derivative.
    """
    if params is None:
        params = LorenzParams()
    next_state = np.array(state, dtype=np.float64)
    if next_state.shape != (3,):
        raise ValueError(f"state must have shape (3,), got {next_state.shape}.")
    velocity = np.empty(3, dtype=np.float64)
    step_inplace(next_state, velocity, dt, params)
    return next_state, velocity
