"""Command-line interface for weighted random draws."""
from __future__ import annotations

import argparse
import json
import logging
import math
from typing import Dict, List, Optional

from .config import ConfigError, load_settings
from .randomization import WeightedRandom
from .reporting import print_draw_summary, summarize_draws, write_json

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Weighted random sampling with replacement")
    parser.add_argument(
        "items",
        nargs="*",
        help="Items as NAME=WEIGHT pairs (added after any items from --config)",
    )
    parser.add_argument("--draws", type=int, default=None, help="Number of draws")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible draws")
    parser.add_argument("--config", type=str, default=None, help="Optional YAML configuration file")
    parser.add_argument("--output-json", type=str, default=None, help="Optional JSON output")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(message)s")


def parse_item_pairs(pairs: List[str]) -> Dict[str, float]:
    """Parse ``NAME=WEIGHT`` tokens; later duplicates override earlier ones."""

    items: Dict[str, float] = {}
    for token in pairs:
        name, sep, raw_weight = token.rpartition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=WEIGHT, got {token!r}")
        try:
            weight = float(raw_weight)
        except ValueError as exc:
            raise ValueError(f"Invalid weight for {name!r}: {raw_weight!r}") from exc
        if math.isnan(weight) or weight == math.inf:
            raise ValueError(f"Weight for {name!r} must be finite (got {raw_weight!r})")
        items[name] = weight
    return items


def build_selector(items: Dict[str, float], seed: Optional[int] = None) -> WeightedRandom[str]:
    selector: WeightedRandom[str] = WeightedRandom(seed=seed)
    for name, weight in items.items():
        selector.add_item(name, weight)
    skipped = len(items) - len(selector)
    if skipped:
        LOGGER.info("%d élément(s) ignoré(s) (poids <= 0)", skipped)
    return selector


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        LOGGER.error("Configuration invalide: %s", exc)
        raise SystemExit(1) from exc

    items = dict(settings.sampler.items)
    draws = args.draws if args.draws is not None else settings.sampler.draws
    seed = args.seed if args.seed is not None else settings.sampler.seed

    try:
        items.update(parse_item_pairs(args.items))
        selector = build_selector(items, seed)
    except ValueError as exc:
        LOGGER.error("Poids invalide: %s", exc)
        raise SystemExit(1) from exc
    if not selector:
        LOGGER.error("Aucun élément de poids positif : impossible de tirer")
        raise SystemExit(1)
    results = selector.sample(draws)

    summary = summarize_draws(selector, results)
    print_draw_summary(summary)

    if args.output_json:
        payload = {
            "draws": draws,
            "seed": seed,
            "total_weight": selector.total_weight,
            "results": json.loads(summary.to_json(orient="records")),
        }
        write_json(payload, args.output_json)
        LOGGER.info("Résultats écrits dans %s", args.output_json)


if __name__ == "__main__":  # pragma: no cover
    main()
