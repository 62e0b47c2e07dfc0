"""
Miss count estimation.

For throughputs below the full-combo throughput, estimate how many misses a
player would have with the same probability of success that a full combo
has at the full-combo throughput.
"""

import logging
from typing import Sequence

import numpy as np

from ..constants import (
    DEFAULT_CHEESE_LEVEL,
    DEFAULT_CONFIG,
    MISS_COUNT_BRACKET,
    MISS_COUNT_RELATIVE_TOLERANCE,
    MISS_TP_EXPONENT,
    MISS_TP_STEP,
    AimConfig,
)
from ..data.movement import MovementArrays, MovementsLike, as_movement_arrays
from .fitts import cheese_hit_probabilities
from .poisson_binomial import PoissonBinomial
from .root_finding import find_root_expand
from .throughput import fc_probability

logger = logging.getLogger(__name__)


def miss_probabilities(movements: MovementArrays, tp: float) -> np.ndarray:
    """Probability of missing each movement at throughput tp."""
    # Miss estimation always uses the default cheese level
    return 1 - cheese_hit_probabilities(movements, tp, DEFAULT_CHEESE_LEVEL)


def miss_count(p: float, miss_probs: Sequence[float]) -> float:
    """
    Smallest miss count reached with at least probability p.

    Args:
        p: Target cumulative probability
        miss_probs: Miss probability of each movement

    Returns:
        Miss count k with CDF(k) = p, root-found on the miss distribution
    """
    distribution = PoissonBinomial(miss_probs)
    target = p * (1 - MISS_COUNT_RELATIVE_TOLERANCE)

    def cdf_minus_prob(count: float) -> float:
        return distribution.cdf(count) - target

    lower, upper = MISS_COUNT_BRACKET
    return find_root_expand(cdf_minus_prob, lower, upper)


def miss_tps_miss_counts(
    movements: MovementsLike,
    fc_time_tp: float,
    config: AimConfig = DEFAULT_CONFIG,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Miss counts for a ladder of throughputs below fc_time_tp.

    Returns:
        (miss_tps, miss_counts), each [difficulty_count]
    """
    arrays = as_movement_arrays(movements)
    count = config.difficulty_count

    miss_tps = np.zeros(count)
    miss_counts = np.zeros(count)
    fc_prob = fc_probability(arrays, fc_time_tp, DEFAULT_CHEESE_LEVEL)

    for i in range(count):
        miss_tp = fc_time_tp * (1 - i**MISS_TP_EXPONENT * MISS_TP_STEP)
        miss_tps[i] = miss_tp
        miss_counts[i] = miss_count(fc_prob, miss_probabilities(arrays, miss_tp))

    logger.debug(
        "Miss counts range from %.3f to %.3f", miss_counts[0], miss_counts[-1]
    )
    return miss_tps, miss_counts
