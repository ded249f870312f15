"""Walk-forward accuracy evaluation of the Markov-chain forecaster."""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix
from tqdm.auto import tqdm

from .config import (
    ACCURACY_HORIZONS,
    EVALUATION_METHODS,
    FALLBACK_ACCURACY,
    MIN_EVALUATION_SAMPLES,
    NUM_STATES,
    TRAIN_TEST_SPLIT_RATIO,
)
from .predictor import predict_next_state, state_distribution
from .states import STATE_NAMES, classify, classify_index, state_index
from .transition_matrix import build_transition_matrix

logger = logging.getLogger(__name__)


def split_train_test(sequence: Sequence, ratio: float = TRAIN_TEST_SPLIT_RATIO) -> Tuple[List, List]:
    """Chronological split: first `ratio` of the sequence trains, the rest tests."""
    split_idx = int(len(sequence) * ratio)
    return list(sequence[:split_idx]), list(sequence[split_idx:])


def round_percentage(fraction: float) -> int:
    """Fraction to a whole percentage, halves rounded up."""
    return int(np.floor(fraction * 100 + 0.5))


def _predict_after(start_idx, transition_matrix, horizon, method, rng):
    if method == 'stochastic':
        predicted = start_idx
        for _ in range(horizon):
            predicted = predict_next_state(predicted, transition_matrix, rng)
        return predicted

    distribution = state_distribution(start_idx, transition_matrix, horizon)
    if not distribution.any():
        return NUM_STATES - 1
    return int(np.argmax(distribution))


def collect_predictions(
    train,
    test,
    horizon: int,
    method: str = 'stochastic',
    rng=None,
    transition_matrix=None
) -> Tuple[List[int], List[int]]:
    """
    Walk forward over the test slice and predict `horizon` days ahead.

    Parameters:
    -----------
    train : list of Observation
        Training observations, used only to fit the transition matrix
    test : list of Observation
        Test observations in chronological order
    horizon : int
        Number of days ahead
    method : str
        'stochastic' rolls the chain with single-step samples (a fresh path
        per test point); 'matrix_power' takes the most likely state of the
        exact h-step distribution
    rng : numpy.random.Generator, optional
        Random source for the stochastic method
    transition_matrix : ndarray, optional
        Matrix already fitted on train; built from train when omitted

    Returns:
    --------
    y_true, y_pred : list of int
        Actual and predicted state indices for every counted test point
    """
    if method not in EVALUATION_METHODS:
        raise ValueError(f'Unknown evaluation method: {method!r}')
    if rng is None:
        rng = np.random.default_rng()

    if transition_matrix is None:
        transition_matrix = build_transition_matrix(train)
    y_true, y_pred = [], []

    for i in range(len(test) - horizon):
        start_idx = state_index(classify(test[i]))
        if start_idx == -1:
            continue

        y_pred.append(_predict_after(start_idx, transition_matrix, horizon, method, rng))
        y_true.append(classify_index(test[i + horizon]))

    return y_true, y_pred


def evaluate_accuracy(
    sequence: Sequence,
    horizons: List[int] = ACCURACY_HORIZONS,
    rng=None,
    method: str = 'stochastic',
    show_progress: bool = False
) -> Dict[int, int]:
    """
    Percentage of correct state predictions per forecast horizon.

    The sequence is split 80/20 in chronological order; the transition
    matrix is fitted on the first part and predictions are scored on the
    second. Stochastic results vary between runs unless rng is seeded.

    Parameters:
    -----------
    sequence : list of Observation
        Historical observations sorted by date ascending
    horizons : list
        Forecast horizons in days
    rng : numpy.random.Generator, optional
        Random source for the stochastic method
    method : str
        'stochastic' (default) or 'matrix_power'
    show_progress : bool
        Show a tqdm progress bar over horizons

    Returns:
    --------
    accuracy : dict
        {horizon: percentage correct}. With fewer than MIN_EVALUATION_SAMPLES
        observations the fixed fallback table is returned instead.
    """
    if method not in EVALUATION_METHODS:
        raise ValueError(f'Unknown evaluation method: {method!r}')

    if len(sequence) < MIN_EVALUATION_SAMPLES:
        logger.info("Only %d observations (< %d), using fallback accuracy table",
                    len(sequence), MIN_EVALUATION_SAMPLES)
        return dict(FALLBACK_ACCURACY)

    if rng is None:
        rng = np.random.default_rng()

    train, test = split_train_test(sequence)
    transition_matrix = build_transition_matrix(train)
    accuracy = {}

    for horizon in tqdm(horizons, desc='Evaluating horizons', disable=not show_progress):
        y_true, y_pred = collect_predictions(train, test, horizon, method, rng, transition_matrix)

        if not y_true:
            logger.warning("No test points for horizon %d, using fallback accuracy", horizon)
            accuracy[horizon] = FALLBACK_ACCURACY.get(horizon, 0)
            continue

        accuracy[horizon] = round_percentage(accuracy_score(y_true, y_pred))
        logger.debug("Horizon %d: %d%% over %d predictions", horizon, accuracy[horizon], len(y_true))

    return accuracy


def evaluate_confusion(sequence: Sequence, horizon: int = 1, rng=None, method: str = 'stochastic') -> pd.DataFrame:
    """
    Confusion matrix of actual vs predicted states for one horizon.

    Rows are actual states, columns predicted states, both labelled with
    state names. Requires at least MIN_EVALUATION_SAMPLES observations.
    """
    if len(sequence) < MIN_EVALUATION_SAMPLES:
        raise ValueError('Not enough observations to evaluate the model.')

    train, test = split_train_test(sequence)
    y_true, y_pred = collect_predictions(train, test, horizon, method, rng)
    matrix = confusion_matrix(y_true, y_pred, labels=list(range(NUM_STATES)))

    return pd.DataFrame(
        matrix,
        index=pd.Index(STATE_NAMES, name='actual'),
        columns=pd.Index(STATE_NAMES, name='predicted')
    )


def accuracy_frame(accuracy: Dict[int, int]) -> pd.DataFrame:
    """
    Tabular view of per-horizon accuracy.

    Parameters:
    -----------
    accuracy : dict
        {horizon: percentage} as returned by evaluate_accuracy

    Returns:
    --------
    accuracy_df : DataFrame
        Columns Horizon, Days ("1 Day", "2 Days", ...) and Accuracy
    """
    rows = [
        {
            'Horizon': horizon,
            'Days': f"{horizon} Day" if horizon == 1 else f"{horizon} Days",
            'Accuracy': value
        }
        for horizon, value in sorted(accuracy.items())
    ]
    return pd.DataFrame(rows, columns=['Horizon', 'Days', 'Accuracy'])
