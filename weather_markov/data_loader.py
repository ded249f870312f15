"""Loading, filtering and summarising historical weather observations."""

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .config import DATA_PATH_DAILY, OBSERVATION_COLUMNS
from .observations import Observation, observations_from_frame

logger = logging.getLogger(__name__)


class DataUnavailableError(Exception):
    """Raised when no observation source can provide data."""


# Small built-in record used when the historical CSV is unavailable.
SAMPLE_RECORDS = [
    {
        'date': '2020-01-01',
        'cloud_cover': 75,
        'sunshine': 1.2,
        'global_radiation': 1.5,
        'max_temp': 8.2,
        'mean_temp': 5.7,
        'min_temp': 3.1,
        'precipitation': 2.5,
        'pressure': 1012,
        'snow_depth': 0
    },
    {
        'date': '2020-01-02',
        'cloud_cover': 80,
        'sunshine': 0.8,
        'global_radiation': 1.2,
        'max_temp': 7.5,
        'mean_temp': 5.2,
        'min_temp': 2.8,
        'precipitation': 4.2,
        'pressure': 1008,
        'snow_depth': 0
    },
]


def _parse_dates(values: pd.Series) -> pd.Series:
    """Parse each date on its own; blank or unparseable cells become NaT."""
    text = values.astype('string').str.strip()
    # London weather exports store dates as YYYYMMDD integers
    compact = text.str.fullmatch(r'\d{8}').fillna(False).astype(bool)
    other = (~compact & text.fillna('').ne('')).astype(bool)

    parsed = pd.Series(pd.NaT, index=values.index, dtype='datetime64[ns]')
    parsed.loc[compact] = pd.to_datetime(text[compact], format='%Y%m%d', errors='coerce')
    parsed.loc[other] = pd.to_datetime(text[other], format='ISO8601', errors='coerce')
    return parsed


class CsvObservationProvider:
    """Read observations from a CSV file with one row per day."""

    def __init__(self, path=DATA_PATH_DAILY):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return f"csv:{self.path}"

    def load(self) -> List[Observation]:
        """
        Read, validate and sort the CSV.

        Returns:
        --------
        observations : list of Observation
            Sorted by date ascending; rows without a parseable date are dropped

        Raises:
        -------
        DataUnavailableError
            If the file is missing, unreadable or lacks required columns
        """
        if not self.path.exists():
            raise DataUnavailableError(f"Data file not found: {self.path}")

        try:
            df = pd.read_csv(self.path, dtype={'date': str})
        except (OSError, ValueError) as e:
            raise DataUnavailableError(f"Could not read {self.path}: {e}") from e

        missing = [col for col in ['date'] + OBSERVATION_COLUMNS if col not in df.columns]
        if missing:
            raise DataUnavailableError(f"{self.path} is missing columns: {', '.join(missing)}")

        df['date'] = _parse_dates(df['date'])
        n_rows = len(df)
        df = df.dropna(subset=['date'])
        if len(df) < n_rows:
            logger.warning("Dropped %d rows without a valid date from %s", n_rows - len(df), self.path)

        for col in OBSERVATION_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors='coerce')

        df = df.sort_values('date').reset_index(drop=True)
        logger.info("Loaded %d observations from %s", len(df), self.path)
        return observations_from_frame(df)


class SampleObservationProvider:
    """Serve the built-in sample observations."""

    name = "sample"

    def __init__(self, records: Sequence[Dict] = None):
        self.records = list(SAMPLE_RECORDS if records is None else records)

    def load(self) -> List[Observation]:
        if not self.records:
            raise DataUnavailableError("No sample records configured")
        try:
            observations = [Observation.from_mapping(record) for record in self.records]
        except (KeyError, ValueError) as e:
            raise DataUnavailableError(f"Invalid sample record: {e}") from e
        return sorted(observations, key=lambda obs: obs.date)


class FallbackObservationLoader:
    """
    Try observation providers in order and return the first usable result.

    Each provider exposes `name` and `load()`; a provider fails by raising
    DataUnavailableError or returning no observations.
    """

    def __init__(self, providers):
        if not providers:
            raise ValueError('At least one observation provider is required.')
        self.providers = list(providers)

    def load(self) -> List[Observation]:
        errors = []
        for provider in self.providers:
            try:
                observations = provider.load()
            except DataUnavailableError as e:
                logger.warning("Provider %s unavailable: %s", provider.name, e)
                errors.append(f"{provider.name}: {e}")
                continue

            if observations:
                return observations

            logger.warning("Provider %s returned no observations", provider.name)
            errors.append(f"{provider.name}: no observations")

        raise DataUnavailableError("All observation providers failed (" + "; ".join(errors) + ")")


def load_weather_data(path=DATA_PATH_DAILY, use_sample_fallback: bool = True) -> List[Observation]:
    """Load observations from the CSV at `path`, falling back to sample data."""
    providers = [CsvObservationProvider(path)]
    if use_sample_fallback:
        providers.append(SampleObservationProvider())
    return FallbackObservationLoader(providers).load()


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def filter_by_date_range(observations: Sequence[Observation], start_date, end_date) -> List[Observation]:
    """Observations dated between start_date and end_date, both inclusive."""
    start = _as_date(start_date)
    end = _as_date(end_date)
    return [obs for obs in observations if start <= obs.date <= end]


def calculate_stats(observations: Sequence[Observation]) -> Dict[str, Dict[str, float]]:
    """
    Summary statistics of mean temperature and precipitation.

    Parameters:
    -----------
    observations : list of Observation
        Non-empty sequence of observations

    Returns:
    --------
    stats : dict
        {'temperature': {...}, 'precipitation': {...}}, each with min, max,
        mean and std (population standard deviation); NaN values are ignored
    """
    if not observations:
        raise ValueError('Cannot compute statistics of an empty sequence.')

    columns = {'temperature': 'mean_temp', 'precipitation': 'precipitation'}
    stats = {}
    for label, attr in columns.items():
        values = np.array([getattr(obs, attr) for obs in observations], dtype=float)
        stats[label] = {
            'min': float(np.nanmin(values)),
            'max': float(np.nanmax(values)),
            'mean': float(np.nanmean(values)),
            'std': float(np.nanstd(values))
        }
    return stats
