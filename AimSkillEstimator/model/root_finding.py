"""
Root Finding

Brent's method on a known bracket, and a variant that first widens the
bracket geometrically until the function changes sign.
"""

import logging
from typing import Callable

import numpy as np
from scipy.optimize import brentq

from ..constants import (
    BRACKET_EXPANSION_FACTOR,
    BRACKET_MAX_EXPANSIONS,
    ROOT_MAX_ITERATIONS,
    TP_PRECISION,
)

logger = logging.getLogger(__name__)


class RootFindingError(RuntimeError):
    """No root could be bracketed or the solver did not converge."""


def find_root(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = TP_PRECISION,
    max_iterations: int = ROOT_MAX_ITERATIONS,
) -> float:
    """
    Find x in [lower, upper] with f(x) = 0.

    f(lower) and f(upper) must differ in sign (or one of them be zero).
    Works for functions that saturate near the root and for step functions,
    where the jump location is returned.
    """
    try:
        return float(
            brentq(f, lower, upper, xtol=tolerance, maxiter=max_iterations)
        )
    except (ValueError, RuntimeError) as e:
        raise RootFindingError(
            f"Root search on [{lower}, {upper}] failed: {e}"
        ) from e


def expand_bracket(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    factor: float = BRACKET_EXPANSION_FACTOR,
    max_expansions: int = BRACKET_MAX_EXPANSIONS,
) -> tuple[float, float]:
    """
    Widen [lower, upper] until f changes sign across it.

    Each step moves the bound whose value is closer to zero outward by
    factor times the current width. Zero counts as its own sign.

    Raises:
        RootFindingError: If no sign change is found within max_expansions
    """
    if lower >= upper:
        raise ValueError(f"Invalid bracket [{lower}, {upper}]")

    f_lower = f(lower)
    f_upper = f(upper)

    for _ in range(max_expansions):
        if np.sign(f_lower) != np.sign(f_upper):
            return lower, upper

        if abs(f_lower) < abs(f_upper):
            lower += factor * (lower - upper)
            f_lower = f(lower)
        else:
            upper += factor * (upper - lower)
            f_upper = f(upper)

        logger.debug("Expanded bracket to [%g, %g]", lower, upper)

    if np.sign(f_lower) != np.sign(f_upper):
        return lower, upper

    raise RootFindingError(
        f"No sign change found after {max_expansions} expansions "
        f"(bracket [{lower}, {upper}], f = [{f_lower}, {f_upper}])"
    )


def find_root_expand(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float = TP_PRECISION,
    max_iterations: int = ROOT_MAX_ITERATIONS,
    factor: float = BRACKET_EXPANSION_FACTOR,
    max_expansions: int = BRACKET_MAX_EXPANSIONS,
) -> float:
    """Expand [lower, upper] until it brackets a root, then find_root."""
    lower, upper = expand_bracket(f, lower, upper, factor, max_expansions)
    return find_root(f, lower, upper, tolerance, max_iterations)
