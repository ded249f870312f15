"""Markov-chain state prediction and synthetic weather generation."""

from typing import Dict, List

import numpy as np

from .config import GENERATION_CONFIG, NUM_STATES
from .states import WEATHER_STATES, classify_index
from .transition_matrix import build_transition_matrix


def _check_state_index(state_idx) -> int:
    if int(state_idx) != state_idx:
        raise ValueError(f'State index {state_idx} is not an integer.')
    if not 0 <= state_idx < NUM_STATES:
        raise ValueError(f'State index {state_idx} is outside [0, {NUM_STATES}).')
    return int(state_idx)


def predict_next_state(current_state_idx: int, transition_matrix, rng=None) -> int:
    """
    Sample the next state from the current state's transition row.

    Parameters:
    -----------
    current_state_idx : int
        Index of the current state
    transition_matrix : array-like (NUM_STATES, NUM_STATES)
        Row-stochastic or degenerate transition matrix
    rng : numpy.random.Generator, optional
        Random source; a fresh unseeded generator is used when omitted

    Returns:
    --------
    next_state_idx : int
        First index whose cumulative probability exceeds the uniform draw.
        Degenerate rows (and a draw past a row summing slightly below 1)
        fall back to the last state.
    """
    current_state_idx = _check_state_index(current_state_idx)
    if rng is None:
        rng = np.random.default_rng()

    probabilities = np.asarray(transition_matrix, dtype=float)[current_state_idx]
    draw = rng.random()

    hits = np.flatnonzero(draw < np.cumsum(probabilities))
    if hits.size:
        return int(hits[0])
    return len(probabilities) - 1


def predict_weather_states(current_state_idx: int, transition_matrix, days: int, rng=None) -> List[int]:
    """
    Random walk of `days` steps over the chain.

    Returns a list of days + 1 state indices, starting with current_state_idx.
    """
    current_state_idx = _check_state_index(current_state_idx)
    if days < 0:
        raise ValueError('Number of days to predict must be non-negative.')
    if rng is None:
        rng = np.random.default_rng()

    predictions = [current_state_idx]
    current_idx = current_state_idx
    for _ in range(days):
        current_idx = predict_next_state(current_idx, transition_matrix, rng)
        predictions.append(current_idx)

    return predictions


def state_distribution(current_state_idx: int, transition_matrix, steps: int) -> np.ndarray:
    """Exact distribution over states after `steps` transitions (e_i · P^steps)."""
    current_state_idx = _check_state_index(current_state_idx)
    if steps < 0:
        raise ValueError('Number of steps must be non-negative.')

    distribution = np.zeros(NUM_STATES, dtype=float)
    distribution[current_state_idx] = 1.0
    power = np.linalg.matrix_power(np.asarray(transition_matrix, dtype=float), steps)
    return distribution @ power


def generate_weather_data(state_idx: int, rng=None) -> Dict[str, float]:
    """
    Generate plausible measurements for a weather state.

    Mean temperature, precipitation and cloud cover are drawn uniformly from
    the state's ranges; the other fields are derived from them.

    Parameters:
    -----------
    state_idx : int
        Index into WEATHER_STATES
    rng : numpy.random.Generator, optional
        Random source

    Returns:
    --------
    data : dict
        mean_temp, max_temp, min_temp, precipitation, cloud_cover,
        sunshine, pressure and snow_depth
    """
    state = WEATHER_STATES[_check_state_index(state_idx)]
    if rng is None:
        rng = np.random.default_rng()
    cfg = GENERATION_CONFIG

    min_temp, max_temp = state.temp_range
    min_precip, max_precip = state.precip_range
    min_cloud, max_cloud = state.cloud_range

    mean_temp = min_temp + rng.random() * (max_temp - min_temp)
    precipitation = min_precip + rng.random() * (max_precip - min_precip)
    cloud_cover = min_cloud + rng.random() * (max_cloud - min_cloud)

    spread = cfg['temp_spread_min']
    jitter = cfg['temp_spread_jitter']
    high_temp = mean_temp + spread + rng.random() * jitter
    low_temp = mean_temp - spread - rng.random() * jitter

    sunshine = max(0.0, cfg['max_sunshine_hours'] * (1 - cloud_cover / 100))
    pressure = cfg['base_pressure'] + (rng.random() * 2 - 1) * cfg['pressure_jitter']

    if mean_temp < 0 and precipitation > 0:
        snow_depth = precipitation * cfg['snow_fraction']
    else:
        snow_depth = 0.0

    return {
        'mean_temp': float(mean_temp),
        'max_temp': float(high_temp),
        'min_temp': float(low_temp),
        'precipitation': float(precipitation),
        'cloud_cover': float(cloud_cover),
        'sunshine': float(sunshine),
        'pressure': float(pressure),
        'snow_depth': float(snow_depth)
    }


def predict_weather_data(current_data, historical_data, days: int, rng=None) -> List[Dict[str, float]]:
    """
    Forecast synthetic measurements for the next `days` days.

    Fits a transition matrix on historical_data, walks the chain from the
    state of current_data and generates measurements for every state on the
    path (the first entry corresponds to the current day).
    """
    if rng is None:
        rng = np.random.default_rng()

    transition_matrix = build_transition_matrix(historical_data)
    current_idx = classify_index(current_data)
    state_path = predict_weather_states(current_idx, transition_matrix, days, rng)

    return [generate_weather_data(idx, rng) for idx in state_path]
