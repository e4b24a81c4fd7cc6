# trail.py
"""
Fixed-capacity position history for a single particle.

TrailBuffer stores the most recent positions in a NumPy ring buffer.
Logically the newest entry is at index 0; physically a head index moves
forward on every push, so nothing is shifted. A separate visible count
selects how many of the newest entries the renderer should draw.
"""
import math
import numbers
import sys
import numpy as np

from config import require_count

# --- Data Contracts ---
#
# class TrailBuffer:
#   - __init__(self, capacity: int, position=None):
#     - Inputs:
#       - capacity: int >= 0, fixed for the life of the buffer.
#       - position: optional initial value for every slot.
#     - Side Effects: Allocates a (capacity, 3) float64 array.
#     - Raises: ConfigurationError for a negative or non-integer capacity.
#
#   - push(self, position) -> None
#   - set_visible_length(self, n: int) -> None
#   - visible_prefix(self) -> np.ndarray of shape (visible_count, 3), newest first
#   - history(self) -> np.ndarray of shape (filled_count, 3), newest first
#   - reset(self, position) -> None
#
#   - Invariants:
#     - 0 <= visible_count <= filled_count <= capacity.
#     - filled_count only decreases on reset.


def visible_length(velocity, scale: float) -> int:
    """
    Number of trail entries to show for a particle moving at this velocity.

    Faster particles get longer trails: ceil(sqrt(|velocity|) * scale).
    A NaN speed gives 0 and an infinite one gives sys.maxsize; the buffer
    clamps the result either way.
    """
    speed = float(np.linalg.norm(velocity))
    if math.isnan(speed):
        return 0
    length = math.sqrt(speed) * scale
    if math.isinf(length):
        return sys.maxsize
    return math.ceil(length)


class TrailBuffer:
    """
    Ring buffer of the newest `capacity` positions.
    """
    def __init__(self, capacity: int, position=None):
        self.capacity = require_count("trail_capacity", capacity)
        self._points = np.zeros((self.capacity, 3), dtype=np.float64)
        # Index of the newest entry in _points.
        self._head = 0
        self.filled_count = 0
        self.visible_count = 0
        if position is not None:
            self.reset(position)

    def __len__(self) -> int:
        return self.filled_count

    def push(self, position) -> None:
        """Inserts position as the newest entry, evicting the oldest when full."""
        if self.capacity == 0:
            return
        self._head = (self._head + 1) % self.capacity
        self._points[self._head] = position
        if self.filled_count < self.capacity:
            self.filled_count += 1

    def set_visible_length(self, n) -> None:
        """Stores n clamped to [0, filled_count]. NaN counts as 0."""
        if not isinstance(n, numbers.Integral) and not math.isfinite(n):
            n = self.filled_count if n > 0 else 0
        self.visible_count = max(0, min(int(n), self.filled_count))

    def _newest_first(self, count: int) -> np.ndarray:
        indices = (self._head - np.arange(count)) % max(self.capacity, 1)
        return self._points[indices]

    def visible_prefix(self) -> np.ndarray:
        """Returns a copy of the newest visible_count entries, newest first."""
        return self._newest_first(self.visible_count)

    def history(self) -> np.ndarray:
        """Returns a copy of every filled entry, newest first."""
        return self._newest_first(self.filled_count)

    @property
    def newest(self):
        if self.filled_count == 0:
            return None
        return self._points[self._head].copy()

    def reset(self, position) -> None:
        """
        Forgets the history. Every slot is set to position so no stale data
        remains, and both counts return to zero.
        """
        self._points[:] = position
        self._head = 0
        self.filled_count = 0
        self.visible_count = 0
