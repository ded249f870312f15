"""Daily observation records and their DataFrame conversions."""

import math
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Dict, Iterable, List

import pandas as pd

from .config import OBSERVATION_COLUMNS


def _to_float(value) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(str(value)).date()


@dataclass(frozen=True)
class Observation:
    """One calendar day of measurements for a single location.

    Attributes:
        date: Calendar day, the chronological key
        cloud_cover: Cloud cover in percent (0-100)
        sunshine: Sunshine in hours
        global_radiation: Global radiation
        max_temp: Daily maximum temperature in °C
        mean_temp: Daily mean temperature in °C
        min_temp: Daily minimum temperature in °C
        precipitation: Precipitation in mm
        pressure: Pressure in hPa
        snow_depth: Snow depth in cm

    Missing measurements are stored as NaN.
    """
    date: date
    cloud_cover: float
    sunshine: float
    global_radiation: float
    max_temp: float
    mean_temp: float
    min_temp: float
    precipitation: float
    pressure: float
    snow_depth: float

    @classmethod
    def from_mapping(cls, mapping) -> "Observation":
        """Build an observation from a dict-like record (e.g. a CSV row)."""
        values = {col: _to_float(mapping.get(col)) for col in OBSERVATION_COLUMNS}
        return cls(date=_to_date(mapping['date']), **values)

    def to_dict(self) -> Dict:
        return asdict(self)


OBSERVATION_FIELDS = [f.name for f in fields(Observation)]


def observations_from_frame(df: pd.DataFrame) -> List[Observation]:
    """
    Convert a DataFrame into a list of observations, keeping row order.

    Parameters:
    -----------
    df : DataFrame
        Must contain a 'date' column; missing numeric columns become NaN

    Returns:
    --------
    observations : list
        One Observation per row
    """
    return [Observation.from_mapping(row) for row in df.to_dict(orient='records')]


def observations_to_frame(observations: Iterable[Observation]) -> pd.DataFrame:
    """Convert observations back into a DataFrame with one row per day."""
    rows = [obs.to_dict() for obs in observations]
    return pd.DataFrame(rows, columns=OBSERVATION_FIELDS)
