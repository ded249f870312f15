"""
Main forecasting script for the Markov-chain weather model.

Loads the historical record, fits the transition matrix, forecasts the
next week and reports walk-forward accuracy per horizon.
"""

import logging
import sys
from pathlib import Path

import pandas as pd

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from weather_markov.config import *
from weather_markov.data_loader import DataUnavailableError, calculate_stats, load_weather_data
from weather_markov.evaluation import accuracy_frame, evaluate_accuracy
from weather_markov.predictor import generate_weather_data, predict_weather_states
from weather_markov.states import STATE_NAMES, classify_index
from weather_markov.transition_matrix import build_transition_matrix, degenerate_rows, transition_matrix_frame

FORECAST_DAYS = 7


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    rng = make_rng(RANDOM_STATE)

    print("\n" + "="*80)
    print("MARKOV CHAIN WEATHER FORECAST")
    print("="*80)

    # ============================================================
    # STEP 1: Load Data
    # ============================================================
    print("\n[1/4] Loading data...")
    try:
        history = load_weather_data(DATA_PATH_DAILY)
    except DataUnavailableError as e:
        print(f"✗ No weather data available: {e}")
        return 1

    print(f"✓ Observations loaded: {len(history)} ({history[0].date} to {history[-1].date})")
    stats = calculate_stats(history)
    print(f"✓ Mean temperature: {stats['temperature']['mean']:.1f}°C "
          f"(std {stats['temperature']['std']:.1f})")
    print(f"✓ Mean precipitation: {stats['precipitation']['mean']:.1f} mm "
          f"(std {stats['precipitation']['std']:.1f})")

    # ============================================================
    # STEP 2: Transition Matrix
    # ============================================================
    print("\n[2/4] Building transition matrix...")
    matrix = build_transition_matrix(history)
    with pd.option_context('display.precision', 2, 'display.width', 160):
        print(transition_matrix_frame(matrix).to_string())

    unseen = degenerate_rows(matrix)
    if unseen:
        print(f"⚠ States never followed by another day: {', '.join(STATE_NAMES[i] for i in unseen)}")

    # ============================================================
    # STEP 3: Forecast
    # ============================================================
    print(f"\n[3/4] Forecasting {FORECAST_DAYS} days...")
    current_idx = classify_index(history[-1])
    state_path = predict_weather_states(current_idx, matrix, FORECAST_DAYS, rng)

    for day, state_idx in enumerate(state_path):
        sample = generate_weather_data(state_idx, rng)
        label = "today" if day == 0 else f"day +{day}"
        print(f"  {label:>7}: {STATE_NAMES[state_idx]:<11} "
              f"{sample['mean_temp']:5.1f}°C, {sample['precipitation']:5.1f} mm, "
              f"{sample['cloud_cover']:4.0f}% cloud")

    # ============================================================
    # STEP 4: Accuracy
    # ============================================================
    print("\n[4/4] Evaluating accuracy...")
    if len(history) < MIN_EVALUATION_SAMPLES:
        print(f"⚠ Fewer than {MIN_EVALUATION_SAMPLES} observations, showing reference accuracy")

    stochastic = accuracy_frame(evaluate_accuracy(history, rng=rng, show_progress=True))
    exact = accuracy_frame(evaluate_accuracy(history, method='matrix_power'))
    summary = stochastic.rename(columns={'Accuracy': 'Stochastic'})
    summary['MatrixPower'] = exact['Accuracy']
    print(summary.to_string(index=False))

    print("\n" + "="*80)
    print("✅ FORECAST COMPLETE!")
    print("="*80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
