"""
AimSkillEstimator Unit Tests - Segment Difficulty Profile
"""

import numpy as np
import pytest

from AimSkillEstimator.data import MovementArrays
from AimSkillEstimator.model.segments import combo_tps, segment_bounds
from AimSkillEstimator.model.throughput import fc_time_tp


def brute_force_combo_tps(movements, count=20):
    """Recompute every window throughput from plain movement lists."""
    n = len(movements)
    result = []
    for i in range(1, count + 1):
        window_tps = []
        for j in range(count - i + 1):
            start = n * j // count
            end = n * (j + i) // count - 1
            window_tps.append(fc_time_tp(movements[start : end + 1]))
        result.append(min(window_tps))
    return np.array(result)


class TestSegmentBounds:
    def test_proportional_mapping(self):
        assert segment_bounds(100, 1, 0, 20) == (0, 4)
        assert segment_bounds(100, 20, 0, 20) == (0, 99)
        assert segment_bounds(100, 3, 17, 20) == (85, 99)

    def test_empty_window_for_short_maps(self):
        start, end = segment_bounds(5, 1, 0, 20)
        assert end < start


class TestComboTPs:
    def test_matches_brute_force_on_small_map(self, small_map):
        np.testing.assert_allclose(
            combo_tps(small_map), brute_force_combo_tps(small_map), rtol=0, atol=1e-12
        )

    def test_matches_brute_force_on_sample_map(self, movement_factory):
        movements = movement_factory(45, seed=5)
        np.testing.assert_allclose(
            combo_tps(movements), brute_force_combo_tps(movements), rtol=0, atol=1e-12
        )

    def test_shape(self, sample_map):
        assert combo_tps(sample_map).shape == (20,)

    def test_full_length_bucket_is_whole_map(self, sample_map):
        tps = combo_tps(sample_map)
        assert tps[-1] == pytest.approx(fc_time_tp(sample_map), abs=1e-12)

    def test_each_entry_is_window_minimum(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        tps = combo_tps(arrays)
        n = len(arrays)
        for i in [1, 7, 13]:
            for j in range(20 - i + 1):
                start, end = segment_bounds(n, i, j, 20)
                assert tps[i - 1] <= fc_time_tp(arrays[start : end + 1]) + 1e-12

    def test_short_map_has_empty_windows(self, small_map):
        # Windows shorter than one movement have zero throughput
        assert combo_tps(small_map)[0] == 0.0
