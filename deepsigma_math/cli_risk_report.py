"""CLI computing a performance and risk report from a returns CSV."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .cli import configure_logging
from .config import ConfigError, load_settings
from .reporting import print_risk_summary, summarize_risk, write_json
from .returns import load_returns

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Return-series risk report")
    parser.add_argument("--returns", type=str, required=True, help="Returns CSV (date + return columns)")
    parser.add_argument("--config", type=str, default=None, help="Optional YAML configuration file")
    parser.add_argument("--portfolio-column", type=str, default=None, help="Portfolio return column")
    parser.add_argument("--benchmark-column", type=str, default=None, help="Benchmark return column")
    parser.add_argument(
        "--no-benchmark",
        action="store_true",
        help="Ignore the benchmark column even if present",
    )
    parser.add_argument("--risk-free-rate", type=float, default=None, help="Annual risk-free rate")
    parser.add_argument("--output-json", type=str, default=None, help="Optional JSON output")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        LOGGER.error("Configuration invalide: %s", exc)
        raise SystemExit(1) from exc

    stats = settings.statistics
    portfolio_column = args.portfolio_column or stats.portfolio_column
    benchmark_column = None if args.no_benchmark else (args.benchmark_column or stats.benchmark_column)
    risk_free_rate = args.risk_free_rate if args.risk_free_rate is not None else float(stats.risk_free_rate)

    returns_path = Path(args.returns)
    available = set(pd.read_csv(returns_path, nrows=0).columns)
    if benchmark_column and benchmark_column not in available:
        LOGGER.info("Colonne benchmark '%s' absente ; rapport sans benchmark", benchmark_column)
        benchmark_column = None

    columns = [portfolio_column] + ([benchmark_column] if benchmark_column else [])
    df = load_returns(returns_path, columns)
    if df.empty:
        LOGGER.warning("Aucun rendement exploitable dans %s", returns_path)
        return

    benchmark = df[benchmark_column] if benchmark_column else None
    try:
        summary = summarize_risk(df[portfolio_column], benchmark, risk_free_rate)
    except ValueError as exc:
        LOGGER.error("Rapport impossible pour %s: %s", returns_path, exc)
        raise SystemExit(1) from exc
    print_risk_summary(summary)

    if args.output_json:
        write_json(summary, args.output_json)
        LOGGER.info("Résultats écrits dans %s", args.output_json)


if __name__ == "__main__":  # pragma: no cover
    main()
