"""Configuration settings for the Markov-chain weather forecaster."""

import os

import numpy as np

# ============================================================
# RANDOM SEED CONFIGURATION
# ============================================================
RANDOM_STATE = 42


def make_rng(seed=RANDOM_STATE):
    """Return a numpy Generator; pass seed=None for an unseeded one."""
    return np.random.default_rng(seed)


# ============================================================
# DATA CONFIGURATION
# ============================================================
DATA_PATH_DAILY = os.getenv("WEATHER_MARKOV_DATA_PATH", "data/london_weather.csv")

OBSERVATION_COLUMNS = [
    'cloud_cover', 'sunshine', 'global_radiation', 'max_temp', 'mean_temp',
    'min_temp', 'precipitation', 'pressure', 'snow_depth'
]

# ============================================================
# STATE SPACE
# ============================================================
NUM_STATES = 8
DEFAULT_STATE_INDEX = 5  # Cool & Wet
ROW_SUM_TOLERANCE = 1e-9

# ============================================================
# ACCURACY EVALUATION
# ============================================================
ACCURACY_HORIZONS = [1, 2, 3, 4, 5, 6, 7]
TRAIN_TEST_SPLIT_RATIO = 0.8
MIN_EVALUATION_SAMPLES = 30

# Used whenever there is too little data to estimate accuracy
FALLBACK_ACCURACY = {
    1: 92,
    2: 87,
    3: 82,
    4: 76,
    5: 70,
    6: 65,
    7: 60
}

EVALUATION_METHODS = ('stochastic', 'matrix_power')

# ============================================================
# SYNTHETIC OBSERVATION GENERATION
# ============================================================
GENERATION_CONFIG = {
    'temp_spread_min': 2.0,  # max/min temp sit at least 2°C from the mean
    'temp_spread_jitter': 3.0,
    'max_sunshine_hours': 12.0,
    'base_pressure': 1013.0,  # hPa
    'pressure_jitter': 5.0,
    'snow_fraction': 0.1  # snow depth per mm of precipitation below 0°C
}
