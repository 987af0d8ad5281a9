"""Configuration helpers for the DeepSigma math toolbox."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

LOGGER = logging.getLogger(__name__)

DEFAULT_DRAWS = 100_000


@dataclass
class SamplerSettings:
    """Weighted sampler run parameters."""

    draws: int = DEFAULT_DRAWS
    seed: Optional[int] = None
    items: Dict[str, float] = field(default_factory=dict)


@dataclass
class StatisticsSettings:
    """Inputs for the risk report."""

    risk_free_rate: float = 0.0
    portfolio_column: str = "portfolio"
    benchmark_column: str = "benchmark"


@dataclass
class OptimizationSettings:
    """Solver limits for the optimization demo."""

    maximum_iterations: int = 1000
    tolerance: float = 1e-6


@dataclass
class Settings:
    sampler: SamplerSettings = field(default_factory=SamplerSettings)
    statistics: StatisticsSettings = field(default_factory=StatisticsSettings)
    optimization: OptimizationSettings = field(default_factory=OptimizationSettings)


class ConfigError(ValueError):
    """Raised when the provided YAML configuration is invalid."""


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML config file if available."""

    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        LOGGER.warning("Configuration file %s not found; using defaults", path)
        return {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        LOGGER.warning("Configuration file %s must define a mapping", path)
        return {}
    return data


def _update_dataclass(instance: Any, data: Dict[str, Any]) -> None:
    """Assign known fields from ``data`` onto ``instance``."""

    if not data:
        return
    valid_fields = {field_.name for field_ in fields(instance)}
    for key, value in data.items():
        if key in valid_fields:
            setattr(instance, key, value)
        else:
            LOGGER.debug("Ignoring unknown %s key '%s'", type(instance).__name__, key)


def build_settings_from_config(config_data: Dict[str, Any]) -> Settings:
    """Instantiate settings from a parsed YAML mapping."""

    settings = Settings()
    if not config_data:
        return settings

    sampler_data = dict(config_data.get("sampler") or {})
    items = sampler_data.pop("items", None)
    _update_dataclass(settings.sampler, sampler_data)
    if isinstance(items, dict):
        settings.sampler.items = {str(name): weight for name, weight in items.items()}
    elif items is not None:
        raise ConfigError("sampler.items must be a mapping of item -> weight")

    _update_dataclass(settings.statistics, config_data.get("statistics") or {})
    _update_dataclass(settings.optimization, config_data.get("optimization") or {})
    return settings


def _require_positive(value: float, label: str, errors: List[str]) -> None:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number")
        return
    if numeric <= 0:
        errors.append(f"{label} must be > 0 (got {value!r})")


def _require_number(value: Any, label: str, errors: List[str]) -> None:
    if isinstance(value, bool):
        errors.append(f"{label} must be a number")
        return
    try:
        float(value)
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number")


def _require_weight(value: Any, label: str, errors: List[str]) -> None:
    """Item weights may be zero or negative (ignored) but not NaN or +inf."""

    count = len(errors)
    _require_number(value, label, errors)
    if len(errors) > count:
        return
    numeric = float(value)
    if math.isnan(numeric) or numeric == math.inf:
        errors.append(f"{label} must be finite (got {value!r})")


def validate_settings(settings: Settings) -> None:
    """Raise ``ConfigError`` if the instantiated settings are inconsistent."""

    errors: List[str] = []

    sampler = settings.sampler
    if not isinstance(sampler.draws, int) or isinstance(sampler.draws, bool) or sampler.draws < 0:
        errors.append(f"sampler.draws must be a non-negative integer (got {sampler.draws!r})")
    if sampler.seed is not None and (not isinstance(sampler.seed, int) or isinstance(sampler.seed, bool)):
        errors.append(f"sampler.seed must be an integer (got {sampler.seed!r})")
    for name, weight in sampler.items.items():
        _require_weight(weight, f"sampler.items.{name}", errors)

    stats = settings.statistics
    _require_number(stats.risk_free_rate, "statistics.risk_free_rate", errors)
    if not stats.portfolio_column:
        errors.append("statistics.portfolio_column must be provided")

    optim = settings.optimization
    _require_positive(optim.maximum_iterations, "optimization.maximum_iterations", errors)
    _require_positive(optim.tolerance, "optimization.tolerance", errors)

    if errors:
        raise ConfigError("; ".join(errors))


def load_settings(config_path: Optional[str]) -> Settings:
    """Convenience helper for CLI layers."""

    settings = build_settings_from_config(load_yaml_config(config_path))
    validate_settings(settings)
    return settings
