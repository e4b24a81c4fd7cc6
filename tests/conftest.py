import logging

import numpy as np
import pytest

from config import SimulationConfig


@pytest.fixture
def make_config():
    """Builds a SimulationConfig with small, seeded defaults for tests."""
    def _make(**overrides):
        params = dict(particle_count=10, trail_capacity=20, seed=1234)
        params.update(overrides)
        return SimulationConfig(**params)
    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
