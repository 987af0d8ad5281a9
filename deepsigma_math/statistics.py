"""Statistical helpers for return series (risk, performance, regression).

Plain sequences, numpy arrays and pandas Series are all accepted. Functions that
need calendar information (annualized return, volatility and tracking error)
expect a ``pd.Series`` indexed by dates; the index is sorted before use.
Sample estimators use ``ddof=1``.
"""
from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np
import pandas as pd
from scipy import stats

from .periodicity import (
    DAYS_PER_YEAR,
    estimate_periodicity,
    get_annualization_multiplier,
    get_periods_per_year,
)

LOGGER = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


def _as_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _dated_series(series: pd.Series) -> pd.Series:
    if not isinstance(series, pd.Series):
        raise TypeError("A date-indexed pandas Series is required")
    clean = pd.to_numeric(series, errors="coerce").dropna()
    clean.index = pd.to_datetime(clean.index)
    return clean.sort_index()


def _require_same_length(first: ArrayLike, second: ArrayLike) -> None:
    if len(first) != len(second):
        raise ValueError("Return streams must have the same length.")


# --- Normal distribution ----------------------------------------------------


def calculate_cdf(mean: float, std: float, x: float) -> float:
    """Normal cumulative distribution function at ``x``."""

    return float(stats.norm.cdf(x, loc=mean, scale=std))


def calculate_norm_inverse(p: float, mean: float, std: float) -> float:
    """Inverse of the normal CDF (quantile function) at probability ``p``."""

    return float(stats.norm.ppf(p, loc=mean, scale=std))


def calculate_pdf(mean: float, std: float, x: float) -> float:
    """Normal probability density at ``x``."""

    return float(stats.norm.pdf(x, loc=mean, scale=std))


def calculate_z_score(value: float, mean: float, std: float) -> float:
    return (value - mean) / std


# --- Returns ----------------------------------------------------------------


def calculate_total_return(returns: ArrayLike) -> float:
    """Compound a series of periodic returns into a single total return."""

    values = _as_array(returns)
    if values.size == 0:
        return 0.0
    return float(np.prod(1.0 + values) - 1.0)


def calculate_annualized_return(series: pd.Series) -> float:
    """Geometric annualized return of a date-indexed return series.

    The sampling frequency is inferred from the index; the number of periods the
    series covers is the calendar span divided by the length of one period.
    """

    clean = _dated_series(series)
    if len(clean) < 2:
        raise ValueError("At least two observations are required to annualize a return")
    span_days = (clean.index.max() - clean.index.min()).days
    if span_days <= 0:
        raise ValueError("Return series must span more than one calendar day")

    total_return = calculate_total_return(clean.values)
    periods_per_year = get_periods_per_year(estimate_periodicity(clean.index))
    days_per_period = DAYS_PER_YEAR / periods_per_year
    periods_within_series = span_days / days_per_period
    annualization_factor = periods_per_year / periods_within_series
    LOGGER.debug(
        "Annualizing total return %.6f over %.2f periods (%d per year)",
        total_return,
        periods_within_series,
        periods_per_year,
    )
    return float((1.0 + total_return) ** annualization_factor - 1.0)


def calculate_excess_return_series(portfolio: pd.Series, market: pd.Series) -> pd.Series:
    """Portfolio minus market returns, aligned by position on the portfolio dates."""

    _require_same_length(portfolio, market)
    ordered = portfolio.sort_index()
    market_values = market.sort_index().to_numpy(dtype=float)
    return pd.Series(ordered.to_numpy(dtype=float) - market_values, index=ordered.index)


# --- Dispersion -------------------------------------------------------------


def calculate_sample_variance(dataset: ArrayLike) -> float:
    values = _as_array(dataset)
    if values.size < 2:
        raise ValueError("At least two observations are required for a sample variance")
    return float(np.var(values, ddof=1))


def calculate_sample_standard_deviation(dataset: ArrayLike) -> float:
    return float(np.sqrt(calculate_sample_variance(dataset)))


def calculate_annualized_volatility(series: pd.Series) -> float:
    """Sample standard deviation scaled by the square root of periods per year."""

    clean = _dated_series(series)
    std = calculate_sample_standard_deviation(clean.values)
    return std * get_annualization_multiplier(clean.index)


def calculate_annualized_tracking_error(portfolio: pd.Series, market: pd.Series) -> float:
    """Annualized volatility of the portfolio's excess returns over the market."""

    _require_same_length(portfolio, market)
    return calculate_annualized_volatility(calculate_excess_return_series(portfolio, market))


# --- Co-movement ------------------------------------------------------------


def calculate_covariance(portfolio_returns: ArrayLike, market_returns: ArrayLike) -> float:
    _require_same_length(portfolio_returns, market_returns)
    first = _as_array(portfolio_returns)
    second = _as_array(market_returns)
    if first.size < 2:
        raise ValueError("At least two observations are required for a covariance")
    return float(np.cov(first, second, ddof=1)[0, 1])


def calculate_correlation(dataset1: ArrayLike, dataset2: ArrayLike) -> float:
    """Pearson correlation in ``[-1, 1]``."""

    covariance = calculate_covariance(dataset1, dataset2)
    std1 = calculate_sample_standard_deviation(dataset1)
    std2 = calculate_sample_standard_deviation(dataset2)
    return covariance / (std1 * std2)


def calculate_r_squared(portfolio_returns: ArrayLike, market_returns: ArrayLike) -> float:
    return calculate_correlation(portfolio_returns, market_returns) ** 2


def calculate_beta(portfolio_returns: ArrayLike, market_returns: ArrayLike) -> float:
    """Sensitivity of the portfolio to the market: cov(p, m) / var(m)."""

    _require_same_length(portfolio_returns, market_returns)
    covariance = calculate_covariance(portfolio_returns, market_returns)
    return covariance / calculate_sample_variance(market_returns)


def calculate_jensens_alpha(
    portfolio_return: float, market_return: float, risk_free_rate: float, beta: float
) -> float:
    """Return in excess of what CAPM predicts for the given beta."""

    return portfolio_return - (risk_free_rate + beta * (market_return - risk_free_rate))


# --- Path -------------------------------------------------------------------


def calculate_max_drawdown(returns: ArrayLike) -> float:
    """Largest peak-to-trough decline of the compounded path, as a positive fraction.

    Peaks are taken from the compounded values themselves, so a loss in the very
    first period does not register as a drawdown.
    """

    values = _as_array(returns)
    if values.size == 0:
        return 0.0
    wealth = np.cumprod(1.0 + values)
    peaks = np.maximum.accumulate(wealth)
    drawdowns = (peaks - wealth) / peaks
    return float(max(drawdowns.max(), 0.0))
