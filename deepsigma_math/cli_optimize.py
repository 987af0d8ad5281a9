"""CLI running the SLSQP optimization demo."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .cli import configure_logging
from .config import ConfigError, load_settings
from .optimization import run_test_optimization
from .reporting import print_optimization_summary, summarize_optimization, write_json

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Constrained optimization demo (SLSQP)")
    parser.add_argument("--config", type=str, default=None, help="Optional YAML configuration file")
    parser.add_argument("--max-iterations", type=int, default=None, help="Solver iteration cap")
    parser.add_argument("--tolerance", type=float, default=None, help="Solver tolerance")
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

    optim = settings.optimization
    maximum_iterations = (
        args.max_iterations if args.max_iterations is not None else int(optim.maximum_iterations)
    )
    tolerance = args.tolerance if args.tolerance is not None else float(optim.tolerance)
    try:
        result = run_test_optimization(maximum_iterations=maximum_iterations, tolerance=tolerance)
    except ValueError as exc:
        LOGGER.error("Paramètres du solveur invalides: %s", exc)
        raise SystemExit(1) from exc
    if not result.success:
        LOGGER.warning("Le solveur n'a pas convergé : %s", result.status)

    summary = summarize_optimization(result)
    print_optimization_summary(summary)

    if args.output_json:
        write_json(summary, args.output_json)
        LOGGER.info("Résultats écrits dans %s", args.output_json)


if __name__ == "__main__":  # pragma: no cover
    main()
