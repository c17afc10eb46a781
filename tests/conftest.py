import pytest

from selfish_mining.config import RANDOM_SEED
from selfish_mining.sampler import UniformSampler


class FixedSampler:
    """Replays a scripted sequence of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def next(self):
        value = self.values[self.draws]
        self.draws += 1
        return value


@pytest.fixture
def sampler():
    return UniformSampler(seed=RANDOM_SEED)


@pytest.fixture
def fixed_sampler():
    return FixedSampler
