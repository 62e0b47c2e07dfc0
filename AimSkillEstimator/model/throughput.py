"""
Throughput Inversion

Finds the player throughput at which a movement sequence becomes
full-comboable, either by probability (P(FC) reaches a fixed threshold) or by
expected time (the expected time to get a full combo fits a practice budget).
"""

import logging
import math

import numpy as np
from scipy.special import logsumexp

from ..constants import (
    DEFAULT_CHEESE_LEVEL,
    DEFAULT_CONFIG,
    FC_TIME_BASE,
    PROBABILITY_EPSILON,
    AimConfig,
)
from ..data.movement import MovementArrays, MovementsLike, as_movement_arrays
from .fitts import cheese_hit_probabilities
from .root_finding import find_root

logger = logging.getLogger(__name__)


def fc_probability(
    movements: MovementArrays, tp: float, cheese_level: float = DEFAULT_CHEESE_LEVEL
) -> float:
    """Probability of hitting every movement, assuming independent trials."""
    return float(np.prod(cheese_hit_probabilities(movements, tp, cheese_level)))


def log_expected_fc_time(
    movements: MovementArrays,
    tp: float,
    cheese_level: float = DEFAULT_CHEESE_LEVEL,
    base_time: float = FC_TIME_BASE,
) -> float:
    """
    Natural log of the expected time to full combo the movements.

    Each movement is a gate that restarts the attempt on failure:

        E_0 = base_time
        E_i = (E_{i-1} + raw_mt_i) / (p_i + 1e-10)

    Unrolled, E_n = base_time / prod(p) + sum_i raw_mt_i / prod_{j >= i}(p_j),
    which is summed here in log space so long maps do not overflow.
    """
    p = cheese_hit_probabilities(movements, tp, cheese_level) + PROBABILITY_EPSILON
    log_p = np.log(p)

    # suffix[i] = sum_{j >= i} log p_j
    suffix = np.cumsum(log_p[::-1])[::-1]
    total = suffix[0] if len(suffix) else 0.0

    raw = movements.raw_movement_time
    log_raw = np.where(raw > 0, np.log(np.where(raw > 0, raw, 1.0)), -np.inf)

    terms = np.concatenate([[math.log(base_time) - total], log_raw - suffix])
    return float(logsumexp(terms))


def expected_fc_time(
    movements: MovementArrays,
    tp: float,
    cheese_level: float = DEFAULT_CHEESE_LEVEL,
    base_time: float = FC_TIME_BASE,
) -> float:
    """Expected time to full combo the movements (inf when it overflows)."""
    log_time = log_expected_fc_time(movements, tp, cheese_level, base_time)
    return math.exp(log_time) if log_time < 709.0 else math.inf


def fc_prob_tp(
    movements: MovementsLike,
    cheese_level: float = DEFAULT_CHEESE_LEVEL,
    config: AimConfig = DEFAULT_CONFIG,
) -> float:
    """
    Throughput at which the full-combo probability equals the threshold.

    Args:
        movements: Movement sequence
        cheese_level: How much of each movement's cheesable time is used
        config: Threshold and throughput range

    Returns:
        Throughput, clamped to [tp_min, tp_max]
    """
    arrays = as_movement_arrays(movements)
    threshold = config.probability_threshold

    if fc_probability(arrays, config.tp_min, cheese_level) >= threshold:
        logger.debug("FC probability reaches threshold at tp_min")
        return config.tp_min

    if fc_probability(arrays, config.tp_max, cheese_level) <= threshold:
        logger.debug("FC probability stays below threshold at tp_max")
        return config.tp_max

    def fc_prob_minus_threshold(tp: float) -> float:
        return fc_probability(arrays, tp, cheese_level) - threshold

    return find_root(
        fc_prob_minus_threshold, config.tp_min, config.tp_max, config.tp_precision
    )


def fc_time_threshold(movements: MovementArrays, config: AimConfig = DEFAULT_CONFIG) -> float:
    """Practice budget plus the time span of the movements."""
    return config.time_threshold_base + movements.duration


def fc_time_tp(movements: MovementsLike, config: AimConfig = DEFAULT_CONFIG) -> float:
    """
    Throughput at which the expected time to full combo equals the budget.

    The budget is time_threshold_base plus the time span of the movements.
    Returns 0 for an empty sequence.
    """
    arrays = as_movement_arrays(movements)

    if len(arrays) == 0:
        return 0.0

    log_threshold = math.log(fc_time_threshold(arrays, config))
    cheese_level = config.default_cheese_level
    base_time = config.fc_time_base

    def log_fc_time(tp: float) -> float:
        return log_expected_fc_time(arrays, tp, cheese_level, base_time)

    if log_fc_time(config.tp_min) <= log_threshold:
        return config.tp_min

    if log_fc_time(config.tp_max) >= log_threshold:
        logger.debug("Expected FC time exceeds budget at tp_max")
        return config.tp_max

    # Same root as E(tp) - threshold, E decreasing in tp
    def log_fc_time_minus_threshold(tp: float) -> float:
        return log_fc_time(tp) - log_threshold

    return find_root(
        log_fc_time_minus_threshold, config.tp_min, config.tp_max, config.tp_precision
    )
