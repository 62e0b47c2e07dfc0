"""
Cheese Model

Cheesing extends the effective time of a movement by cheese_level times its
cheesable ratio. These curves describe how much that lowers the required
throughput and how many notes are likely to be cheesed.
"""

import numpy as np
from scipy.special import expit

from ..constants import (
    CHEESE_NOTE_CENTER,
    CHEESE_NOTE_STEEPNESS,
    DEFAULT_CONFIG,
    AimConfig,
)
from ..data.movement import MovementsLike, as_movement_arrays
from .throughput import fc_prob_tp as calculate_fc_prob_tp


def cheese_levels(config: AimConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Evenly spaced cheese levels in [0, 1]."""
    count = config.cheese_level_count
    return np.arange(count) / (count - 1)


def cheese_levels_vs_factors(
    movements: MovementsLike,
    fc_prob_tp: float,
    config: AimConfig = DEFAULT_CONFIG,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Required throughput at each cheese level relative to the default level.

    Args:
        movements: Movement sequence
        fc_prob_tp: fc_prob_tp at the default cheese level
        config: Curve sizes and inversion settings

    Returns:
        (cheese_levels, cheese_factors), each [cheese_level_count]
    """
    arrays = as_movement_arrays(movements)
    levels = cheese_levels(config)
    factors = np.array(
        [calculate_fc_prob_tp(arrays, level, config) / fc_prob_tp for level in levels]
    )
    return levels, factors


def cheese_note_count(movements: MovementsLike, tp: float) -> float:
    """Logistic-weighted count of notes a player at throughput tp would cheese."""
    arrays = as_movement_arrays(movements)
    cheeseness = (
        expit((arrays.ip12 / tp - CHEESE_NOTE_CENTER) * CHEESE_NOTE_STEEPNESS)
        * arrays.cheesability
    )
    return float(cheeseness.sum())
