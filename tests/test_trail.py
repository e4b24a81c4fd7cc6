import sys

import numpy as np
import pytest

from config import ConfigurationError
from trail import TrailBuffer, visible_length


def point(v):
    return (float(v), float(v), float(v))


def test_empty_buffer():
    trail = TrailBuffer(5)
    assert trail.filled_count == 0
    assert trail.visible_count == 0
    assert len(trail) == 0
    assert trail.visible_prefix().shape == (0, 3)
    assert trail.newest is None


def test_eviction_keeps_newest_first_order():
    trail = TrailBuffer(5)
    for v in range(6):
        trail.push(point(v))

    assert trail.filled_count == 5
    assert trail.history().tolist() == [list(point(v)) for v in (5, 4, 3, 2, 1)]
    assert list(point(0)) not in trail.history().tolist()


def test_filled_count_saturates_at_capacity():
    trail = TrailBuffer(3)
    for v in range(10):
        trail.push(point(v))
        assert trail.filled_count == min(v + 1, 3)
    assert len(trail.history()) == 3


def test_visible_length_is_clamped_to_filled_count():
    trail = TrailBuffer(10)
    for v in range(4):
        trail.push(point(v))

    trail.set_visible_length(100)
    assert trail.visible_count == 4
    trail.set_visible_length(2)
    assert trail.visible_count == 2
    assert trail.visible_prefix().tolist() == [list(point(3)), list(point(2))]
    trail.set_visible_length(-3)
    assert trail.visible_count == 0
    trail.set_visible_length(0)
    assert trail.visible_prefix().shape == (0, 3)


def test_visible_prefix_is_a_copy():
    trail = TrailBuffer(3)
    trail.push(point(1))
    trail.set_visible_length(1)
    prefix = trail.visible_prefix()
    prefix[0, 0] = 99.0
    assert trail.visible_prefix()[0, 0] == 1.0


def test_reset_clears_counts_and_overwrites_slots():
    trail = TrailBuffer(4)
    for v in range(6):
        trail.push(point(v))
    trail.set_visible_length(3)

    trail.reset(point(7))
    assert trail.filled_count == 0
    assert trail.visible_count == 0
    assert (trail._points == 7.0).all()

    trail.push(point(8))
    assert trail.history().tolist() == [list(point(8))]


def test_zero_capacity_stores_nothing():
    trail = TrailBuffer(0)
    trail.push(point(1))
    trail.set_visible_length(5)
    assert trail.filled_count == 0
    assert trail.visible_prefix().shape == (0, 3)


def test_negative_capacity_is_rejected():
    with pytest.raises(ConfigurationError):
        TrailBuffer(-1)


def test_visible_length_heuristic():
    # |v| = 4 -> sqrt = 2 -> 2 * 10 = 20
    assert visible_length((0.0, 0.0, 4.0), 10) == 20
    # |v| = 2 -> sqrt(2) * 15 = 21.21 -> 22
    assert visible_length((0.0, 2.0, 0.0), 15) == 22
    assert visible_length((0.0, 0.0, 0.0), 10) == 0


def test_visible_length_of_non_finite_velocity():
    assert visible_length((np.nan, 0.0, 0.0), 10) == 0
    assert visible_length((np.inf, 0.0, 0.0), 10) == sys.maxsize


def test_set_visible_length_accepts_non_finite_input():
    trail = TrailBuffer(5)
    for v in range(3):
        trail.push(point(v))

    trail.set_visible_length(float('inf'))
    assert trail.visible_count == 3
    trail.set_visible_length(float('-inf'))
    assert trail.visible_count == 0
    trail.set_visible_length(np.float32('inf'))
    assert trail.visible_count == 3
    trail.set_visible_length(float('nan'))
    assert trail.visible_count == 0
