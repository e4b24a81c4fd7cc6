import numpy as np
import pytest

from config import ConfigurationError, SimulationConfig, require_positive_count


def test_defaults_match_reference_values():
    config = SimulationConfig()
    assert config.particle_count == 100
    assert config.trail_capacity == 200
    assert config.dt == 0.002
    assert (config.sigma, config.rho, config.beta) == (10.0, 28.0, 8.0 / 3.0)
    assert config.spawn_center == (0.0, 0.0, 0.0)
    assert config.visible_scale == 10.0


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


@pytest.mark.parametrize("overrides", [
    {'dt': 0},
    {'dt': -0.002},
    {'dt': float('inf')},
    {'dt': 'fast'},
    {'trail_capacity': -1},
    {'particle_count': -5},
    {'particle_count': 1.5},
    {'visible_scale': -1.0},
    {'spawn_half_width': -10.0},
    {'spawn_center': (0.0, 0.0)},
    {'sigma': float('nan')},
    {'seed': -1},
])
def test_invalid_values_fail_fast(overrides):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**overrides)


def test_from_params_ignores_unknown_keys(caplog):
    config = SimulationConfig.from_params({'particle_count': 3, 'friction': 0.1})
    assert config.particle_count == 3
    assert "friction" in caplog.text


def test_from_params_converts_lists():
    config = SimulationConfig.from_params({'spawn_center': [1, 2, 3], 'dt': "0.01"})
    assert config.spawn_center == (1.0, 2.0, 3.0)
    assert config.dt == 0.01


def test_zero_capacity_and_count_are_valid():
    config = SimulationConfig(particle_count=0, trail_capacity=0)
    assert config.particle_count == 0
    assert config.trail_capacity == 0


def test_numpy_integers_become_plain_ints():
    config = SimulationConfig(particle_count=np.int64(4), trail_capacity=np.int32(8))
    assert config.particle_count == 4
    assert type(config.particle_count) is int
    assert type(config.trail_capacity) is int


@pytest.mark.parametrize("bad", [0, -2, 1.5, None])
def test_positive_count_rejects(bad):
    with pytest.raises(ConfigurationError):
        require_positive_count("log_throttle_steps", bad)
