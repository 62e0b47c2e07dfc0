"""
Segment difficulty profile.

For every combo length fraction i / 20, find the hardest contiguous window of
that length and report the throughput needed to full combo it in time.
"""

import numpy as np

from ..constants import DEFAULT_CONFIG, AimConfig
from ..data.movement import MovementsLike, as_movement_arrays
from .throughput import fc_time_tp


def segment_bounds(n: int, length: int, offset: int, count: int) -> tuple[int, int]:
    """
    Inclusive [start, end] indices of window `offset` spanning length/count of n.

    end < start when the window holds no movement.
    """
    start = n * offset // count
    end = n * (offset + length) // count - 1
    return start, end


def combo_tps(movements: MovementsLike, config: AimConfig = DEFAULT_CONFIG) -> np.ndarray:
    """
    Minimum window throughput for each combo length.

    Returns:
        Array [difficulty_count] where entry i - 1 is the smallest fc_time_tp
        over the windows covering i / difficulty_count of the map
    """
    arrays = as_movement_arrays(movements)
    count = config.difficulty_count
    n = len(arrays)
    tps = np.full(count, np.inf)

    for length in range(1, count + 1):
        for offset in range(count - length + 1):
            start, end = segment_bounds(n, length, offset, count)
            part_tp = fc_time_tp(arrays[start : end + 1], config)
            tps[length - 1] = min(tps[length - 1], part_tp)

    return tps
