import matplotlib
matplotlib.use('Agg')

import pytest

from pity_sim.config import SimulationConfig


class PlaybackRandom:
    """Replays a fixed list of uniform values; running out is a test failure."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        if self.calls >= len(self.values):
            raise AssertionError(f"playback exhausted after {self.calls} values")
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def playback():
    return PlaybackRandom


@pytest.fixture
def simple_config():
    return SimulationConfig(
        base_rate_rare=0.5,
        base_rate_common=0.1,
        pity_start_rare=100,
        pity_increment_rare=0.0,
        hard_pity_rare=200,
        hard_pity_common=10,
        target_guarantee=0,
        target_total_pulls=100,
    )


class ScriptedSimulator:
    """Hands out prepared session results in order."""

    def __init__(self, results):
        self.results = list(results)

    def simulate_session(self):
        return self.results.pop(0)


@pytest.fixture
def scripted():
    return ScriptedSimulator
