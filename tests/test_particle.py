import math

import numpy as np
import pytest

from attractor import LorenzParams, step
from particle import Particle


def test_tick_advances_state_and_pushes_trail():
    particle = Particle((1.0, 1.0, 1.0), trail_capacity=10, visible_scale=10.0)
    expected_state, expected_velocity = step((1.0, 1.0, 1.0), 0.002, LorenzParams())

    particle.tick(0.002, LorenzParams())

    assert particle.position.tolist() == expected_state.tolist()
    assert particle.velocity.tolist() == expected_velocity.tolist()
    assert particle.trail.filled_count == 1
    assert particle.trail.newest.tolist() == expected_state.tolist()


def test_visible_length_follows_speed():
    particle = Particle((1.0, 1.0, 1.0), trail_capacity=200, visible_scale=10.0)
    for _ in range(50):
        particle.tick(0.002, LorenzParams())
        speed = np.linalg.norm(particle.velocity)
        expected = min(math.ceil(math.sqrt(speed) * 10.0), particle.trail.filled_count)
        assert particle.trail.visible_count == expected
        assert len(particle.visible_trail()) == expected


def test_visible_trail_starts_at_current_position():
    particle = Particle((-5.0, 3.0, 20.0), trail_capacity=50, visible_scale=15.0)
    for _ in range(20):
        particle.tick(0.002, LorenzParams())
    trail = particle.visible_trail()
    assert len(trail) > 0
    assert trail[0].tolist() == particle.position.tolist()


def test_tick_without_trail_only_integrates():
    particle = Particle((1.0, 1.0, 1.0), trail_capacity=10, visible_scale=10.0)
    particle.tick(0.002, LorenzParams(), track_trail=False)
    assert particle.position.tolist() != [1.0, 1.0, 1.0]
    assert particle.trail.filled_count == 0
    assert particle.visible_trail().shape == (0, 3)


def test_position_is_read_only_copy():
    particle = Particle((1.0, 2.0, 3.0), trail_capacity=5, visible_scale=10.0)
    position = particle.position
    position[0] = 100.0
    assert particle.position.tolist() == [1.0, 2.0, 3.0]


def test_reset_trail_uses_current_position():
    particle = Particle((1.0, 1.0, 1.0), trail_capacity=5, visible_scale=10.0)
    for _ in range(8):
        particle.tick(0.002, LorenzParams())
    particle.reset_trail()
    assert particle.trail.filled_count == 0
    assert (particle.trail._points == particle.position).all()


def test_random_particle_within_cube(rng):
    for _ in range(100):
        particle = Particle.random(rng, 15.0, (1.0, -2.0, 20.0), 10, 10.0)
        low = np.array([1.0, -2.0, 20.0]) - 15.0
        high = np.array([1.0, -2.0, 20.0]) + 15.0
        assert ((particle.position >= low) & (particle.position <= high)).all()


def test_diverged_particle_keeps_ticking():
    particle = Particle((1e200, 1e200, 1e200), trail_capacity=5, visible_scale=10.0)
    for _ in range(3):
        particle.tick(0.002, LorenzParams())
    assert not np.isfinite(particle.position).all()
    assert 0 <= particle.trail.visible_count <= particle.trail.filled_count


def test_rejects_bad_position_shape():
    with pytest.raises(ValueError):
        Particle((1.0, 2.0), trail_capacity=5, visible_scale=10.0)
