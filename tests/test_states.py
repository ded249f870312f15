"""
UNIT TESTS - STATE CLASSIFIER
"""

import math

import numpy as np
import pandas as pd

from weather_markov.config import DEFAULT_STATE_INDEX, NUM_STATES
from weather_markov.states import (
    DEFAULT_STATE,
    WEATHER_STATES,
    WeatherState,
    classify,
    classify_frame,
    classify_index,
    get_weather_states,
    state_index,
)

from conftest import STATE_VALUES, make_observation


# =============================================================================
# STATE TABLE
# =============================================================================

def test_state_table_has_eight_states():
    """The state space is fixed at 8 members."""
    assert len(WEATHER_STATES) == NUM_STATES
    assert get_weather_states() is WEATHER_STATES


def test_state_ids_are_unique():
    """Every state has its own identifier."""
    ids = [state.id for state in WEATHER_STATES]
    assert len(set(ids)) == len(ids)


def test_default_state_is_cool_wet():
    """The fallback state is index 5, Cool & Wet."""
    assert DEFAULT_STATE_INDEX == 5
    assert DEFAULT_STATE.name == "Cool & Wet"


def test_state_index_lookup():
    """state_index finds canonical states and reports unknown ones as -1."""
    for idx, state in enumerate(WEATHER_STATES):
        assert state_index(state) == idx

    unknown = WeatherState("fog", "Fog", (0, 10), (0, 1), (90, 100))
    assert state_index(unknown) == -1


# =============================================================================
# CLASSIFICATION
# =============================================================================

def test_classify_representative_values():
    """Each state's representative values classify back to that state."""
    for idx, values in STATE_VALUES.items():
        assert classify_index(make_observation(*values)) == idx


def test_classify_warm_dry_region():
    """Warm temperatures, no rain and clear skies are Warm & Dry."""
    for temp in [15.0, 18.3, 24.99]:
        for precip in [0.0, 0.5, 0.99]:
            for cloud in [0.0, 15.0, 29.9]:
                state = classify(make_observation(temp, precip, cloud))
                assert state.name == "Warm & Dry"


def test_temperature_upper_bound_is_exclusive():
    """25.0°C belongs to the hot band, not the warm one."""
    assert classify(make_observation(25.0, 0.0, 10.0)).id == "hot-dry"
    assert classify(make_observation(24.999, 0.0, 10.0)).id == "warm-dry"


def test_precipitation_boundary():
    """1 mm of rain with cloud cover is wet."""
    assert classify(make_observation(10.0, 1.0, 50.0)).id == "cool-wet"
    assert classify(make_observation(10.0, 0.99, 10.0)).id == "cool-dry"


def test_unmatched_values_fall_back_to_default():
    """Out-of-range temperatures, full cloud or mixed signals use the default."""
    assert classify(make_observation(40.0, 0.0, 10.0)) is DEFAULT_STATE
    assert classify(make_observation(-10.5, 0.0, 10.0)) is DEFAULT_STATE
    assert classify(make_observation(10.0, 5.0, 100.0)) is DEFAULT_STATE
    # dry but cloudy matches neither moisture band
    assert classify(make_observation(20.0, 0.0, 60.0)) is DEFAULT_STATE


def test_nan_values_fall_back_to_default():
    """Missing measurements never raise."""
    assert classify(make_observation(math.nan, 0.0, 10.0)) is DEFAULT_STATE
    assert classify(make_observation(20.0, math.nan, 10.0)) is DEFAULT_STATE


def test_classify_accepts_mappings():
    """Plain dicts can be classified too."""
    assert classify({'mean_temp': 30.0, 'precipitation': 3.0, 'cloud_cover': 50.0}).id == "hot-wet"
    assert classify({'mean_temp': 30.0}) is DEFAULT_STATE


def test_classify_is_total_over_grid():
    """Every point of a coarse grid maps to one of the canonical states."""
    for temp in np.linspace(-20, 45, 14):
        for precip in [0.0, 0.5, 1.0, 20.0, 150.0]:
            for cloud in [0.0, 29.0, 30.0, 99.0, 100.0]:
                state = classify(make_observation(temp, precip, cloud))
                assert state in WEATHER_STATES


# =============================================================================
# VECTORISED CLASSIFICATION
# =============================================================================

def test_classify_frame_matches_classify():
    """classify_frame agrees with classify row by row."""
    rows = list(STATE_VALUES.values()) + [
        (25.0, 0.0, 10.0),
        (40.0, 0.0, 10.0),
        (20.0, 0.0, 60.0),
        (math.nan, 1.0, 50.0),
        (-10.0, 1.0, 30.0),
    ]
    df = pd.DataFrame(rows, columns=['mean_temp', 'precipitation', 'cloud_cover'])

    expected = [classify_index(make_observation(*row)) for row in rows]
    assert classify_frame(df).tolist() == expected


def test_classify_frame_empty():
    """An empty frame gives an empty index array."""
    df = pd.DataFrame(columns=['mean_temp', 'precipitation', 'cloud_cover'])
    assert classify_frame(df).size == 0
