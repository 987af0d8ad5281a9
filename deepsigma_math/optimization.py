"""Constrained nonlinear optimization demo built on SciPy's SLSQP solver."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.optimize import minimize

LOGGER = logging.getLogger(__name__)

TARGET = np.array([0.2, 0.8])
INITIAL_GUESS = (0.5, 0.5)
CONSTRAINT_TOLERANCE = 1e-8


@dataclass
class OptimizationResult:
    """Outcome of a solver run."""

    status: str
    success: bool
    parameters: Tuple[float, ...]
    objective: Optional[float]
    iterations: int


def _objective(variables: np.ndarray) -> float:
    return float(np.sum((variables - TARGET) ** 2))


def _objective_gradient(variables: np.ndarray) -> np.ndarray:
    return 2.0 * (variables - TARGET)


def _budget_constraint(variables: np.ndarray) -> float:
    return float(variables[0] + variables[1] - 1.0)


def _budget_constraint_jacobian(variables: np.ndarray) -> np.ndarray:
    return np.array([1.0, 1.0])


def run_test_optimization(
    maximum_iterations: int = 1000, tolerance: float = 1e-6
) -> OptimizationResult:
    """Minimize ``(x - 0.2)^2 + (y - 0.8)^2`` s.t. ``x + y = 1`` and ``0 <= x, y <= 1``.

    Gradients are supplied analytically. The optimum is ``(0.2, 0.8)`` with an
    objective of zero.
    """

    if maximum_iterations <= 0:
        raise ValueError(f"maximum_iterations must be > 0 (got {maximum_iterations})")
    if tolerance <= 0:
        raise ValueError(f"tolerance must be > 0 (got {tolerance})")

    result = minimize(
        _objective,
        x0=np.array(INITIAL_GUESS),
        jac=_objective_gradient,
        method="SLSQP",
        bounds=((0.0, 1.0), (0.0, 1.0)),
        constraints=(
            {"type": "eq", "fun": _budget_constraint, "jac": _budget_constraint_jacobian},
        ),
        options={"maxiter": int(maximum_iterations), "ftol": float(tolerance)},
    )

    violation = abs(_budget_constraint(result.x))
    if violation > CONSTRAINT_TOLERANCE:
        LOGGER.warning("Equality constraint violated by %.3g after optimization", violation)
    LOGGER.debug("SLSQP finished after %s iterations: %s", result.nit, result.message)

    objective = float(result.fun) if result.fun is not None else None
    return OptimizationResult(
        status=str(result.message),
        success=bool(result.success),
        parameters=tuple(float(value) for value in result.x),
        objective=objective,
        iterations=int(result.nit),
    )
