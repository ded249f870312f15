"""Empirical first-order transition matrix estimation."""

import logging
from typing import List, Sequence

import numpy as np
import pandas as pd

from .config import NUM_STATES, ROW_SUM_TOLERANCE
from .states import STATE_NAMES, classify_index

logger = logging.getLogger(__name__)


def count_transitions(state_indices: Sequence[int]) -> np.ndarray:
    """
    Count day-to-day transitions between consecutive states.

    Parameters:
    -----------
    state_indices : sequence of int
        Chronologically ordered state indices

    Returns:
    --------
    counts : ndarray (NUM_STATES, NUM_STATES)
        counts[i, j] is the number of days in state i followed by state j
    """
    counts = np.zeros((NUM_STATES, NUM_STATES), dtype=np.int64)
    states = np.asarray(state_indices, dtype=int)
    if states.size < 2:
        return counts

    np.add.at(counts, (states[:-1], states[1:]), 1)
    return counts


def build_transition_matrix_from_states(state_indices: Sequence[int]) -> np.ndarray:
    """Row-normalise transition counts; rows with no occurrences stay all-zero."""
    counts = count_transitions(state_indices)
    totals = counts.sum(axis=1, keepdims=True)

    matrix = np.zeros((NUM_STATES, NUM_STATES), dtype=float)
    np.divide(counts, totals, out=matrix, where=totals > 0)
    return matrix


def build_transition_matrix(sequence) -> np.ndarray:
    """
    Build the transition matrix of a chronologically ordered observation sequence.

    Ordering is not checked and no smoothing is applied: transitions never
    seen in the sequence get probability zero, and states never seen as a
    predecessor leave an all-zero (degenerate) row.

    Parameters:
    -----------
    sequence : list of Observation
        Historical observations sorted by date ascending

    Returns:
    --------
    matrix : ndarray (NUM_STATES, NUM_STATES)
        Row i is the next-state distribution given current state i
    """
    state_indices = [classify_index(obs) for obs in sequence]
    matrix = build_transition_matrix_from_states(state_indices)

    empty_rows = degenerate_rows(matrix)
    if len(state_indices) >= 2 and empty_rows:
        logger.debug("States never observed as predecessors: %s", empty_rows)
    return matrix


def degenerate_rows(matrix) -> List[int]:
    """Indices of all-zero rows."""
    matrix = np.asarray(matrix, dtype=float)
    return [int(i) for i in np.flatnonzero(~matrix.any(axis=1))]


def is_row_stochastic(matrix, tol: float = ROW_SUM_TOLERANCE) -> bool:
    """Check every row either sums to 1 within tol or is all zero."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (NUM_STATES, NUM_STATES) or (matrix < 0).any():
        return False

    row_sums = matrix.sum(axis=1)
    return bool(np.all((np.abs(row_sums - 1.0) <= tol) | ~matrix.any(axis=1)))


def transition_matrix_frame(matrix) -> pd.DataFrame:
    """Label a transition matrix with state names (rows: from, columns: to)."""
    return pd.DataFrame(
        np.asarray(matrix, dtype=float),
        index=pd.Index(STATE_NAMES, name='from'),
        columns=pd.Index(STATE_NAMES, name='to')
    )
