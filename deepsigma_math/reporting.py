"""Summaries, console output and export helpers."""
from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import numpy as np
import pandas as pd

from .optimization import OptimizationResult
from .randomization import WeightedRandom
from .statistics import (
    calculate_annualized_return,
    calculate_annualized_tracking_error,
    calculate_annualized_volatility,
    calculate_beta,
    calculate_correlation,
    calculate_jensens_alpha,
    calculate_max_drawdown,
    calculate_r_squared,
    calculate_total_return,
)


def _format_float(value: Optional[float], precision: int = 4) -> str:
    if value is None or np.isnan(value):
        return "NaN"
    return f"{value:.{precision}f}"


def summarize_draws(selector: WeightedRandom, draws: Iterable[Any]) -> pd.DataFrame:
    """Compare empirical draw frequencies with the configured probabilities.

    Items added more than once are merged; their expected probability is the sum
    of their entries.
    """

    counts = Counter(draws)
    total = sum(counts.values())
    payloads = selector.items()
    expected: Dict[Any, float] = {}
    for index, probability in selector.probabilities().items():
        item = payloads[index]
        expected[item] = expected.get(item, 0.0) + probability

    rows = []
    for item, probability in expected.items():
        count = counts.get(item, 0)
        rows.append(
            {
                "item": item,
                "expected": probability,
                "count": count,
                "frequency": count / total if total else np.nan,
            }
        )
    return pd.DataFrame(rows, columns=["item", "expected", "count", "frequency"])


def summarize_risk(
    portfolio: pd.Series,
    benchmark: Optional[pd.Series] = None,
    risk_free_rate: float = 0.0,
) -> Dict[str, float]:
    """Headline performance and risk metrics for a date-indexed return series."""

    summary: Dict[str, float] = {
        "observations": int(len(portfolio)),
        "total_return": calculate_total_return(portfolio.values),
        "annualized_return": calculate_annualized_return(portfolio),
        "annualized_volatility": calculate_annualized_volatility(portfolio),
        "max_drawdown": calculate_max_drawdown(portfolio.values),
    }
    if benchmark is None:
        return summary

    beta = calculate_beta(portfolio.values, benchmark.values)
    benchmark_return = calculate_annualized_return(benchmark)
    summary.update(
        {
            "benchmark_annualized_return": benchmark_return,
            "beta": beta,
            "correlation": calculate_correlation(portfolio.values, benchmark.values),
            "r_squared": calculate_r_squared(portfolio.values, benchmark.values),
            "jensens_alpha": calculate_jensens_alpha(
                summary["annualized_return"], benchmark_return, risk_free_rate, beta
            ),
            "tracking_error": calculate_annualized_tracking_error(portfolio, benchmark),
        }
    )
    return summary


def summarize_optimization(result: OptimizationResult) -> Dict[str, Any]:
    return {
        "status": result.status,
        "success": result.success,
        "parameters": list(result.parameters),
        "objective": result.objective,
        "iterations": result.iterations,
    }


def print_draw_summary(summary: pd.DataFrame) -> None:
    if summary.empty:
        print("Aucun tirage effectué.")
        return
    print("\nFréquences observées vs attendues:")
    printable = summary.copy()
    for column in ("expected", "frequency"):
        printable[column] = printable[column].map(_format_float)
    print(printable.to_string(index=False))


def print_risk_summary(summary: Dict[str, float]) -> None:
    print("\n=== Rapport de risque ===")
    for key, value in summary.items():
        if key == "observations":
            print(f"{key:<28} {value}")
        else:
            print(f"{key:<28} {_format_float(value)}")


def print_optimization_summary(summary: Dict[str, Any]) -> None:
    print("\n=== Optimisation SLSQP ===")
    print(f"status      {summary['status']}")
    print(f"success     {summary['success']}")
    print("parameters  " + ", ".join(_format_float(v, 6) for v in summary["parameters"]))
    print(f"objective   {_format_float(summary['objective'], 8)}")
    print(f"iterations  {summary['iterations']}")


def write_json(payload: Dict[str, Any], path: Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, default=str, indent=2), encoding="utf-8")
    return output_path


def write_csv(df: pd.DataFrame, path: Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    return output_path
