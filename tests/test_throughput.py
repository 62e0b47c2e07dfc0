"""
AimSkillEstimator Unit Tests - Throughput Inversion
"""

import math

import numpy as np
import pytest
from scipy.optimize import brentq
from scipy.special import erf

from AimSkillEstimator.constants import TP_MAX, TP_MIN, AimConfig
from AimSkillEstimator.data import Movement, MovementArrays
from AimSkillEstimator.model.fitts import hit_probability
from AimSkillEstimator.model.throughput import (
    expected_fc_time,
    fc_prob_tp,
    fc_probability,
    fc_time_threshold,
    fc_time_tp,
    log_expected_fc_time,
)


def recurrence_fc_time(movements, tp, cheese_level=0.3):
    """The expected-time recurrence, one movement at a time."""
    fc_time = 5.0
    for m in movements:
        mt = m.movement_time * (1 + cheese_level * m.cheesable_ratio)
        fc_time = (fc_time + m.raw_movement_time) / (hit_probability(m.distance, mt, tp) + 1e-10)
    return fc_time


class TestFCProbTP:
    def test_single_movement_round_trip(self):
        movement = Movement(time=0.0, distance=5.0, movement_time=0.3, raw_movement_time=0.3)

        def target(tp):
            return erf(2.066 / 5 * (2 ** (0.3 * tp) - 1) / math.sqrt(2)) - 0.02

        expected = brentq(target, 0.1, 100, xtol=1e-12)
        assert fc_prob_tp([movement]) == pytest.approx(expected, abs=1e-6)

    def test_stationary_map_is_trivial(self, stationary_map):
        assert fc_prob_tp(stationary_map) == TP_MIN

    def test_impossible_map_clamps_to_max(self):
        movements = [
            Movement(time=0.0, distance=2.0, movement_time=0.2, raw_movement_time=0.2),
            Movement(time=0.1, distance=2.0, movement_time=0.0, raw_movement_time=0.1),
        ]
        assert fc_prob_tp(movements) == TP_MAX

    def test_probability_at_root_equals_threshold(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        tp = fc_prob_tp(arrays)
        assert TP_MIN < tp < TP_MAX
        assert fc_probability(arrays, tp) == pytest.approx(0.02, abs=1e-6)

    def test_non_increasing_in_cheese_level(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        tps = [fc_prob_tp(arrays, level) for level in np.linspace(0, 1, 6)]
        assert all(b <= a + 1e-9 for a, b in zip(tps, tps[1:]))

    def test_higher_threshold_needs_more_skill(self, sample_map):
        low = fc_prob_tp(sample_map, config=AimConfig(probability_threshold=0.02))
        high = fc_prob_tp(sample_map, config=AimConfig(probability_threshold=0.5))
        assert high > low


class TestExpectedFCTime:
    def test_matches_recurrence(self, movement_factory):
        movements = movement_factory(15, seed=3)
        arrays = MovementArrays.from_movements(movements)
        for tp in [8.0, 15.0, 40.0]:
            assert expected_fc_time(arrays, tp) == pytest.approx(
                recurrence_fc_time(movements, tp), rel=1e-9
            )

    def test_decreasing_in_tp(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        times = [expected_fc_time(arrays, tp) for tp in [5.0, 10.0, 20.0, 50.0]]
        assert all(b < a for a, b in zip(times, times[1:]))

    def test_trivial_map_costs_setup_plus_play_time(self, stationary_map):
        arrays = MovementArrays.from_movements(stationary_map)
        expected = 5.0 + arrays.raw_movement_time.sum()
        assert expected_fc_time(arrays, 1.0) == pytest.approx(expected, rel=1e-6)

    def test_long_map_does_not_overflow(self, movement_factory):
        arrays = MovementArrays.from_movements(movement_factory(2000, seed=11))
        log_time = log_expected_fc_time(arrays, TP_MIN)
        assert math.isfinite(log_time)
        assert expected_fc_time(arrays, TP_MIN) == math.inf


class TestFCTimeTP:
    def test_empty(self):
        assert fc_time_tp([]) == 0.0

    def test_stationary_map_is_trivial(self, stationary_map):
        assert fc_time_tp(stationary_map) == TP_MIN

    def test_expected_time_at_root_equals_budget(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        tp = fc_time_tp(arrays)
        assert TP_MIN < tp < TP_MAX
        threshold = fc_time_threshold(arrays)
        assert threshold == pytest.approx(3600 + arrays.time[-1] - arrays.time[0])
        assert expected_fc_time(arrays, tp) == pytest.approx(threshold, rel=1e-5)

    def test_impossible_map_clamps_to_max(self):
        movements = [
            Movement(time=0.0, distance=2.0, movement_time=0.0, raw_movement_time=0.2),
        ]
        assert fc_time_tp(movements) == TP_MAX

    def test_longer_budget_needs_less_skill(self, sample_map):
        short = fc_time_tp(sample_map, AimConfig(time_threshold_base=600))
        long = fc_time_tp(sample_map, AimConfig(time_threshold_base=36000))
        assert long < short
