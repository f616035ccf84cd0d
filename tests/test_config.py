import math

import numpy as np
import pytest

from fluidbed import config
from fluidbed.config import InvalidConfigurationError, SimulationConfig, validate_config


def test_default_config_matches_slider_defaults():
    cfg = config.default_config()
    assert cfg.velocity == 10
    assert cfg.size_distribution_exponent == 0.5
    assert cfg.particle_count == 4500
    assert cfg.min_particle_size == 0.05
    assert cfg.max_particle_size == 5


def test_bed_limits():
    assert config.MIN_BED_HEIGHT == 50
    assert config.MAX_BED_HEIGHT == pytest.approx(520)


def test_updated_returns_new_value():
    cfg = SimulationConfig()
    new_cfg = cfg.updated(velocity=30)
    assert new_cfg.velocity == 30
    assert cfg.velocity == 10
    assert new_cfg.population_key() == cfg.population_key()


def test_valid_configs_pass():
    assert validate_config(SimulationConfig()) == SimulationConfig()
    validate_config(SimulationConfig(particle_count=1))
    validate_config(SimulationConfig(min_particle_size=2.0, max_particle_size=2.0))
    validate_config(SimulationConfig(velocity=np.float64(80.0), particle_count=np.int64(10000)))


@pytest.mark.parametrize("changes", [
    {'velocity': -1},
    {'velocity': 80.5},
    {'velocity': math.nan},
    {'velocity': math.inf},
    {'velocity': '10'},
    {'size_distribution_exponent': 0},
    {'size_distribution_exponent': 1.5},
    {'particle_count': 0},
    {'particle_count': 10001},
    {'particle_count': 1000.0},
    {'particle_count': True},
    {'min_particle_size': 0},
    {'min_particle_size': -0.5},
    {'min_particle_size': 6.0},
    {'max_particle_size': 60.0, 'min_particle_size': 1.0},
])
def test_invalid_configs_raise(changes):
    with pytest.raises(InvalidConfigurationError):
        validate_config(SimulationConfig().updated(**changes))


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfigurationError, ValueError)


def test_max_size_checked_against_given_settled_bed_height():
    cfg = SimulationConfig().updated(max_particle_size=10.0)
    assert validate_config(cfg) is cfg
    with pytest.raises(InvalidConfigurationError):
        validate_config(cfg, settled_bed_height=5)
    assert validate_config(cfg, settled_bed_height=10) is cfg
