"""Shared fixtures for the weather_markov test suite."""

from datetime import date, timedelta

import pytest

from weather_markov.config import make_rng
from weather_markov.observations import Observation

START_DATE = date(2020, 1, 1)

# Representative (mean_temp, precipitation, cloud_cover) per state index
STATE_VALUES = {
    0: (30.0, 0.0, 10.0),
    1: (30.0, 5.0, 80.0),
    2: (20.0, 0.0, 10.0),
    3: (20.0, 5.0, 80.0),
    4: (10.0, 0.0, 10.0),
    5: (10.0, 5.0, 80.0),
    6: (0.0, 0.0, 10.0),
    7: (0.0, 5.0, 80.0),
}


def make_observation(mean_temp=10.0, precipitation=0.0, cloud_cover=10.0, day=0):
    """Create a test observation; only the classified fields vary."""
    return Observation(
        date=START_DATE + timedelta(days=day),
        cloud_cover=cloud_cover,
        sunshine=5.0,
        global_radiation=1.0,
        max_temp=mean_temp + 3,
        mean_temp=mean_temp,
        min_temp=mean_temp - 3,
        precipitation=precipitation,
        pressure=1013.0,
        snow_depth=0.0,
    )


def make_sequence(state_indices):
    """Daily observations that classify to the given state indices."""
    return [
        make_observation(*STATE_VALUES[idx], day=day)
        for day, idx in enumerate(state_indices)
    ]


class FixedDraw:
    """Random source whose random() always returns the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def rng():
    return make_rng(42)


@pytest.fixture
def alternating_sequence():
    """40 days alternating Warm & Dry (2) and Cool & Wet (5)."""
    return make_sequence([2, 5] * 20)
