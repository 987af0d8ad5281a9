import numpy as np
import pandas as pd
import pytest

from deepsigma_math.statistics import (
    calculate_annualized_return,
    calculate_annualized_tracking_error,
    calculate_annualized_volatility,
    calculate_beta,
    calculate_cdf,
    calculate_correlation,
    calculate_covariance,
    calculate_excess_return_series,
    calculate_jensens_alpha,
    calculate_max_drawdown,
    calculate_norm_inverse,
    calculate_pdf,
    calculate_r_squared,
    calculate_sample_standard_deviation,
    calculate_sample_variance,
    calculate_total_return,
    calculate_z_score,
)


def test_normal_distribution_helpers():
    assert calculate_cdf(0.0, 1.0, 0.0) == pytest.approx(0.5)
    assert calculate_cdf(10.0, 2.0, 10.0 + 1.96 * 2.0) == pytest.approx(0.975, abs=1e-4)
    assert calculate_pdf(0.0, 1.0, 0.0) == pytest.approx(1.0 / np.sqrt(2 * np.pi))
    assert calculate_norm_inverse(0.975, 0.0, 1.0) == pytest.approx(1.959964, abs=1e-6)
    assert calculate_norm_inverse(calculate_cdf(3.0, 0.5, 3.7), 3.0, 0.5) == pytest.approx(3.7)


def test_z_score():
    assert calculate_z_score(12.0, 10.0, 4.0) == pytest.approx(0.5)


def test_total_return_compounds():
    assert calculate_total_return([0.10, 0.10]) == pytest.approx(0.21)
    assert calculate_total_return([0.5, -0.5]) == pytest.approx(-0.25)
    assert calculate_total_return([]) == 0.0


def test_sample_variance_and_std():
    data = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
    assert calculate_sample_variance(data) == pytest.approx(32.0 / 7.0)
    assert calculate_sample_standard_deviation(data) == pytest.approx(np.sqrt(32.0 / 7.0))


def test_sample_variance_needs_two_points():
    with pytest.raises(ValueError):
        calculate_sample_variance([1.0])


def test_covariance_correlation_beta():
    market = [0.01, -0.02, 0.03, 0.00, 0.015]
    portfolio = [2 * r for r in market]
    assert calculate_covariance(portfolio, market) == pytest.approx(2 * calculate_sample_variance(market))
    assert calculate_beta(portfolio, market) == pytest.approx(2.0)
    assert calculate_correlation(portfolio, market) == pytest.approx(1.0)
    assert calculate_r_squared(portfolio, market) == pytest.approx(1.0)

    inverse = [-r for r in market]
    assert calculate_correlation(inverse, market) == pytest.approx(-1.0)


def test_length_mismatch_raises():
    with pytest.raises(ValueError, match="same length"):
        calculate_covariance([0.1, 0.2], [0.1])
    with pytest.raises(ValueError, match="same length"):
        calculate_beta([0.1, 0.2], [0.1])


def test_jensens_alpha():
    # CAPM expects 0.02 + 1.2 * (0.08 - 0.02) = 0.092
    assert calculate_jensens_alpha(0.10, 0.08, 0.02, 1.2) == pytest.approx(0.008)


def test_max_drawdown():
    assert calculate_max_drawdown([0.10, -0.20, 0.05]) == pytest.approx(0.20)
    assert calculate_max_drawdown([0.10, -0.10, -0.10]) == pytest.approx(0.19)
    assert calculate_max_drawdown([0.01, 0.02, 0.03]) == 0.0
    assert calculate_max_drawdown([]) == 0.0


def test_first_period_loss_is_not_a_drawdown():
    assert calculate_max_drawdown([-0.10]) == 0.0


def test_annualized_return_monthly():
    dates = pd.date_range("2020-01-01", periods=13, freq="MS")
    series = pd.Series([0.0] + [0.01] * 12, index=dates)
    span_days = (dates[-1] - dates[0]).days
    periods = span_days / (365.25 / 12)
    expected = (1.01 ** 12) ** (12 / periods) - 1
    assert calculate_annualized_return(series) == pytest.approx(expected)
    assert calculate_annualized_return(series) == pytest.approx(1.01 ** 12 - 1, rel=1e-2)


def test_annualized_return_ignores_index_order():
    dates = pd.date_range("2021-01-01", periods=30, freq="B")
    series = pd.Series(np.linspace(-0.01, 0.02, 30), index=dates)
    assert calculate_annualized_return(series.iloc[::-1]) == pytest.approx(
        calculate_annualized_return(series)
    )


def test_annualized_return_requires_span():
    with pytest.raises(ValueError):
        calculate_annualized_return(pd.Series([0.01], index=pd.to_datetime(["2024-01-01"])))


def test_annualized_volatility_scales_by_sqrt_periods():
    dates = pd.date_range("2022-01-03", periods=60, freq="B")
    values = np.tile([0.01, -0.01], 30)
    series = pd.Series(values, index=dates)
    expected = np.std(values, ddof=1) * np.sqrt(252)
    assert calculate_annualized_volatility(series) == pytest.approx(expected)

    weekly = pd.Series(values, index=pd.date_range("2022-01-07", periods=60, freq="W-FRI"))
    assert calculate_annualized_volatility(weekly) == pytest.approx(np.std(values, ddof=1) * np.sqrt(52))


def test_annualized_volatility_requires_series():
    with pytest.raises(TypeError):
        calculate_annualized_volatility([0.01, 0.02])


def test_excess_return_series_and_tracking_error():
    dates = pd.date_range("2023-01-01", periods=12, freq="MS")
    market = pd.Series(np.linspace(-0.02, 0.03, 12), index=dates)
    portfolio = market + np.tile([0.005, -0.005], 6)

    excess = calculate_excess_return_series(portfolio, market)
    assert list(excess.index) == list(dates)
    assert excess.to_numpy() == pytest.approx(np.tile([0.005, -0.005], 6))

    expected = np.std(excess.to_numpy(), ddof=1) * np.sqrt(12)
    assert calculate_annualized_tracking_error(portfolio, market) == pytest.approx(expected)


def test_tracking_error_length_mismatch():
    dates = pd.date_range("2023-01-01", periods=3, freq="MS")
    with pytest.raises(ValueError):
        calculate_annualized_tracking_error(pd.Series([0.1, 0.2, 0.3], index=dates), pd.Series([0.1], index=dates[:1]))
