"""Markov-Chain Weather Forecasting

Short-term weather prediction for a single location with a first-order
Markov chain fitted to historical daily observations:
- Classification of days into 8 temperature/moisture states
- Empirical transition matrix estimation
- Stochastic multi-day forecasts and synthetic weather generation
- Walk-forward accuracy evaluation for 1-7 day horizons

Basic Usage:
    from weather_markov import (
        load_weather_data, build_transition_matrix, classify_index,
        predict_weather_states, evaluate_accuracy, make_rng,
    )

    history = load_weather_data("data/london_weather.csv")
    matrix = build_transition_matrix(history)
    path = predict_weather_states(classify_index(history[-1]), matrix, 7, make_rng())
    accuracy = evaluate_accuracy(history, rng=make_rng())
"""

__version__ = "1.0.0"

from weather_markov.config import FALLBACK_ACCURACY, make_rng
from weather_markov.data_loader import (
    CsvObservationProvider,
    DataUnavailableError,
    FallbackObservationLoader,
    SampleObservationProvider,
    calculate_stats,
    filter_by_date_range,
    load_weather_data,
)
from weather_markov.evaluation import (
    accuracy_frame,
    evaluate_accuracy,
    evaluate_confusion,
    split_train_test,
)
from weather_markov.observations import (
    Observation,
    observations_from_frame,
    observations_to_frame,
)
from weather_markov.predictor import (
    generate_weather_data,
    predict_next_state,
    predict_weather_data,
    predict_weather_states,
    state_distribution,
)
from weather_markov.states import (
    STATE_NAMES,
    WEATHER_STATES,
    WeatherState,
    classify,
    classify_frame,
    classify_index,
    get_weather_states,
    state_index,
)
from weather_markov.transition_matrix import (
    build_transition_matrix,
    build_transition_matrix_from_states,
    count_transitions,
    degenerate_rows,
    is_row_stochastic,
    transition_matrix_frame,
)

__all__ = [
    "__version__",
    # Config
    "FALLBACK_ACCURACY",
    "make_rng",
    # Data
    "Observation",
    "observations_from_frame",
    "observations_to_frame",
    "CsvObservationProvider",
    "SampleObservationProvider",
    "FallbackObservationLoader",
    "DataUnavailableError",
    "load_weather_data",
    "filter_by_date_range",
    "calculate_stats",
    # States
    "WeatherState",
    "WEATHER_STATES",
    "STATE_NAMES",
    "get_weather_states",
    "classify",
    "classify_index",
    "classify_frame",
    "state_index",
    # Transition matrix
    "build_transition_matrix",
    "build_transition_matrix_from_states",
    "count_transitions",
    "degenerate_rows",
    "is_row_stochastic",
    "transition_matrix_frame",
    # Prediction
    "predict_next_state",
    "predict_weather_states",
    "state_distribution",
    "generate_weather_data",
    "predict_weather_data",
    # Evaluation
    "split_train_test",
    "evaluate_accuracy",
    "evaluate_confusion",
    "accuracy_frame",
]
