"""Sampling-frequency inference for dated return series."""
from __future__ import annotations

from enum import Enum
from typing import Iterable

import numpy as np
import pandas as pd

TRADING_DAYS_PER_YEAR = 252
DAYS_PER_YEAR = 365.25


class Periodicity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"


PERIODS_PER_YEAR = {
    Periodicity.DAILY: TRADING_DAYS_PER_YEAR,
    Periodicity.WEEKLY: 52,
    Periodicity.MONTHLY: 12,
    Periodicity.QUARTERLY: 4,
    Periodicity.SEMI_ANNUAL: 2,
    Periodicity.ANNUAL: 1,
}

# Upper bound (calendar days, inclusive) of the median spacing for each bucket.
_SPACING_THRESHOLDS = (
    (4.0, Periodicity.DAILY),
    (10.0, Periodicity.WEEKLY),
    (45.0, Periodicity.MONTHLY),
    (135.0, Periodicity.QUARTERLY),
    (270.0, Periodicity.SEMI_ANNUAL),
)


def _sorted_unique_dates(dates: Iterable) -> pd.DatetimeIndex:
    index = pd.DatetimeIndex(pd.to_datetime(list(dates)))
    return index.dropna().unique().sort_values()


def estimate_periodicity(dates: Iterable) -> Periodicity:
    """Classify a set of dates by the median gap between consecutive dates.

    The median is used so that weekends, holidays and the odd missing row do not
    move a daily series into the weekly bucket. Raises ``ValueError`` when fewer
    than two distinct dates are provided.
    """

    index = _sorted_unique_dates(dates)
    if len(index) < 2:
        raise ValueError("At least two distinct dates are required to infer periodicity")
    gaps = np.diff(index.values).astype("timedelta64[s]").astype(float) / 86_400.0
    median_gap = float(np.median(gaps))
    for upper, periodicity in _SPACING_THRESHOLDS:
        if median_gap <= upper:
            return periodicity
    return Periodicity.ANNUAL


def get_periods_per_year(periodicity: Periodicity) -> int:
    return PERIODS_PER_YEAR[Periodicity(periodicity)]


def get_annualization_multiplier(dates: Iterable) -> float:
    """Square-root-of-time factor that scales per-period volatility to annual."""

    return float(np.sqrt(get_periods_per_year(estimate_periodicity(dates))))
