import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest

from fluidbed import config


class FixedRandom:
    """Random source that returns queued arrays from random()."""

    def __init__(self, *draws):
        self.draws = [np.asarray(d, dtype=float) for d in draws]

    def random(self, n):
        draw = self.draws.pop(0)
        assert len(draw) == n
        return draw


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def scenario_config():
    return config.SimulationConfig(
        velocity=10,
        size_distribution_exponent=0.5,
        particle_count=1000,
        min_particle_size=0.05,
        max_particle_size=5,
    )


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')
