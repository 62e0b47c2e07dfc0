"""
Fitts's Law Hit Probability Model

Maps a movement (distance, allotted time) and a player throughput to the
probability of hitting the target:

    p = erf(2.066 / d * (2^(mt * tp) - 1) / sqrt(2))

Stationary movements (d = 0) always hit, movements with no time (mt <= 0)
always miss, and mt * tp > 100 is treated as a certain hit.
"""

import math

import numpy as np
from scipy.special import erf

from ..constants import FITTS_SCALE, PROBABILITY_EPSILON, SATURATION_EXPONENT
from ..data.movement import MovementArrays


def hit_probabilities(distance, movement_time, tp: float) -> np.ndarray:
    """
    Vectorized hit probability.

    Args:
        distance: Normalized distances [N]
        movement_time: Allotted movement times [N]
        tp: Player throughput

    Returns:
        Hit probabilities [N] in [0, 1]
    """
    d = np.asarray(distance, dtype=np.float64)
    mt = np.asarray(movement_time, dtype=np.float64)
    exponent = mt * tp

    # Evaluate erf only where the closed form applies to keep numpy quiet
    valid = (d != 0) & (exponent <= SATURATION_EXPONENT) & (mt > 0)
    safe_d = np.where(valid, d, 1.0)
    safe_exponent = np.where(valid, exponent, 0.0)
    p = erf(FITTS_SCALE / safe_d * np.expm1(safe_exponent * math.log(2)) / math.sqrt(2))

    # Later rules win, matching the scalar precedence
    p = np.where(mt <= 0, 0.0, p)
    p = np.where(exponent > SATURATION_EXPONENT, 1.0, p)
    p = np.where(d == 0, 1.0, p)
    return p


def hit_probability(d: float, mt: float, tp: float) -> float:
    """Hit probability of a single movement."""
    if d == 0:
        return 1.0

    if mt * tp > SATURATION_EXPONENT:
        return 1.0

    if mt <= 0:
        return 0.0

    return float(erf(FITTS_SCALE / d * (2.0 ** (mt * tp) - 1) / math.sqrt(2)))


def index_of_performance(relative_d, mt):
    """log2(relative_d + 1) / mt, used for diagnostics only."""
    if np.ndim(relative_d) == 0 and np.ndim(mt) == 0:
        return math.log2(relative_d + 1) / (mt + PROBABILITY_EPSILON)
    return np.log2(np.asarray(relative_d) + 1) / (
        np.asarray(mt) + PROBABILITY_EPSILON
    )


def cheese_movement_times(movements: MovementArrays, cheese_level: float) -> np.ndarray:
    """Movement times extended by cheesing at the given level."""
    return movements.movement_time * (1 + cheese_level * movements.cheesable_ratio)


def cheese_hit_probabilities(
    movements: MovementArrays, tp: float, cheese_level: float
) -> np.ndarray:
    """Hit probability of every movement when cheesed at cheese_level."""
    return hit_probabilities(
        movements.distance, cheese_movement_times(movements, cheese_level), tp
    )
