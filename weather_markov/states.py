"""Discrete weather states and classification of daily observations."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from .config import DEFAULT_STATE_INDEX


@dataclass(frozen=True)
class WeatherState:
    """A named weather bucket defined by three half-open ranges [low, high).

    Attributes:
        id: Stable identifier (e.g. "warm-dry")
        name: Display name (e.g. "Warm & Dry")
        temp_range: Mean temperature range in °C
        precip_range: Precipitation range in mm
        cloud_range: Cloud cover range in percent
    """
    id: str
    name: str
    temp_range: Tuple[float, float]
    precip_range: Tuple[float, float]
    cloud_range: Tuple[float, float]

    def contains(self, mean_temp, precipitation, cloud_cover) -> bool:
        """Check if all three values fall inside this state's ranges."""
        t_low, t_high = self.temp_range
        p_low, p_high = self.precip_range
        c_low, c_high = self.cloud_range
        return (
            t_low <= mean_temp < t_high
            and p_low <= precipitation < p_high
            and c_low <= cloud_cover < c_high
        )


# Order matters: classification returns the first matching state.
WEATHER_STATES = (
    WeatherState("hot-dry", "Hot & Dry", (25, 40), (0, 1), (0, 30)),
    WeatherState("hot-wet", "Hot & Wet", (25, 40), (1, 100), (30, 100)),
    WeatherState("warm-dry", "Warm & Dry", (15, 25), (0, 1), (0, 30)),
    WeatherState("warm-wet", "Warm & Wet", (15, 25), (1, 100), (30, 100)),
    WeatherState("cool-dry", "Cool & Dry", (5, 15), (0, 1), (0, 30)),
    WeatherState("cool-wet", "Cool & Wet", (5, 15), (1, 100), (30, 100)),
    WeatherState("cold-dry", "Cold & Dry", (-10, 5), (0, 1), (0, 30)),
    WeatherState("cold-wet", "Cold & Wet", (-10, 5), (1, 100), (30, 100)),
)

DEFAULT_STATE = WEATHER_STATES[DEFAULT_STATE_INDEX]

STATE_NAMES = [state.name for state in WEATHER_STATES]


def get_weather_states() -> Tuple[WeatherState, ...]:
    """Return the canonical, read-only state table."""
    return WEATHER_STATES


def _field(observation, name):
    if isinstance(observation, dict):
        return observation.get(name)
    return getattr(observation, name, None)


def classify(observation) -> WeatherState:
    """
    Map one observation to its weather state.

    Parameters:
    -----------
    observation : Observation or dict
        Anything exposing mean_temp, precipitation and cloud_cover

    Returns:
    --------
    state : WeatherState
        First matching state, or the Cool & Wet default when nothing matches
        (out-of-range, missing or NaN values)
    """
    mean_temp = _field(observation, 'mean_temp')
    precipitation = _field(observation, 'precipitation')
    cloud_cover = _field(observation, 'cloud_cover')
    if mean_temp is None or precipitation is None or cloud_cover is None:
        return DEFAULT_STATE

    for state in WEATHER_STATES:
        if state.contains(mean_temp, precipitation, cloud_cover):
            return state

    return DEFAULT_STATE


def state_index(state: WeatherState) -> int:
    """Position of a state in WEATHER_STATES (matched by id), -1 if absent."""
    for idx, candidate in enumerate(WEATHER_STATES):
        if candidate.id == state.id:
            return idx
    return -1


def classify_index(observation) -> int:
    """Index of the state an observation classifies to."""
    return state_index(classify(observation))


def classify_frame(df: pd.DataFrame) -> np.ndarray:
    """
    Vectorised classification of a DataFrame of observations.

    Parameters:
    -----------
    df : DataFrame
        Must contain mean_temp, precipitation and cloud_cover columns

    Returns:
    --------
    state_indices : ndarray of int
        One state index per row, same first-match order as classify()
    """
    temp = df['mean_temp'].to_numpy(dtype=float)
    precip = df['precipitation'].to_numpy(dtype=float)
    cloud = df['cloud_cover'].to_numpy(dtype=float)

    conditions = []
    for state in WEATHER_STATES:
        t_low, t_high = state.temp_range
        p_low, p_high = state.precip_range
        c_low, c_high = state.cloud_range
        conditions.append(
            (temp >= t_low) & (temp < t_high)
            & (precip >= p_low) & (precip < p_high)
            & (cloud >= c_low) & (cloud < c_high)
        )

    choices = list(range(len(WEATHER_STATES)))
    return np.select(conditions, choices, default=DEFAULT_STATE_INDEX).astype(int)
