"""
AimSkillEstimator Unit Tests - Hit Probability Model
"""

import math
import warnings

import numpy as np
import pytest
from scipy.special import erf

from AimSkillEstimator.data import MovementArrays
from AimSkillEstimator.model.fitts import (
    cheese_hit_probabilities,
    hit_probabilities,
    hit_probability,
    index_of_performance,
)


class TestHitProbability:
    """Tests for the scalar hit probability rules."""

    @pytest.mark.parametrize("mt", [-1.0, 0.0, 0.05, 0.3, 2.0])
    @pytest.mark.parametrize("tp", [0.1, 5.0, 100.0])
    def test_stationary_always_hits(self, mt, tp):
        assert hit_probability(0.0, mt, tp) == 1.0

    @pytest.mark.parametrize("mt", [0.0, -0.1, -5.0])
    def test_no_time_always_misses(self, mt):
        assert hit_probability(2.5, mt, 20.0) == 0.0

    def test_saturation(self):
        """mt * tp above 100 is a certain hit, even for huge distances."""
        assert hit_probability(1e6, 1.01, 100.0) == 1.0

    def test_closed_form(self):
        d, mt, tp = 5.0, 0.3, 4.0
        expected = erf(2.066 / d * (2 ** (mt * tp) - 1) / math.sqrt(2))
        assert hit_probability(d, mt, tp) == pytest.approx(expected, rel=1e-12)

    def test_non_decreasing_in_tp(self):
        for d in [0.5, 2.0, 8.0]:
            for mt in [0.05, 0.2, 0.6]:
                probs = [hit_probability(d, mt, tp) for tp in np.linspace(0.1, 100, 400)]
                assert all(b >= a for a, b in zip(probs, probs[1:]))

    def test_in_unit_interval(self):
        for tp in np.linspace(0.1, 100, 50):
            p = hit_probability(3.0, 0.17, tp)
            assert 0.0 <= p <= 1.0


class TestHitProbabilities:
    """Tests for the vectorized form."""

    def test_matches_scalar(self):
        d = np.array([0.0, 1.0, 3.0, 7.5, 2.0, 4.0])
        mt = np.array([0.2, 0.1, 0.25, 0.4, -0.1, 1.5])
        tp = 12.0

        vectorized = hit_probabilities(d, mt, tp)
        scalar = [hit_probability(di, mti, tp) for di, mti in zip(d, mt)]

        np.testing.assert_allclose(vectorized, scalar, rtol=1e-12, atol=1e-15)

    def test_rule_precedence(self):
        # d == 0 beats mt <= 0; saturation beats everything but d == 0
        d = np.array([0.0, 0.0, 2.0, 2.0])
        mt = np.array([-1.0, 5.0, -1.0, 5.0])
        probs = hit_probabilities(d, mt, 30.0)
        np.testing.assert_array_equal(probs, [1.0, 1.0, 0.0, 1.0])

    def test_no_numpy_warnings(self):
        d = np.array([0.0, 1e-12, 3.0, 1.0])
        mt = np.array([0.0, 50.0, 0.0, 1e9])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            probs = hit_probabilities(d, mt, 100.0)
        assert np.all(np.isfinite(probs))


class TestIndexOfPerformance:
    def test_scalar(self):
        assert index_of_performance(3.0, 0.5) == pytest.approx(4.0, rel=1e-8)

    def test_zero_time_is_finite(self):
        assert math.isfinite(index_of_performance(1.0, 0.0))

    def test_array(self):
        ip = index_of_performance(np.array([0.0, 1.0, 3.0]), np.array([0.1, 0.5, 1.0]))
        np.testing.assert_allclose(ip, [0.0, 2.0, 2.0], rtol=1e-8)


class TestCheeseHitProbabilities:
    def test_cheese_only_helps(self, sample_map):
        arrays = MovementArrays.from_movements(sample_map)
        plain = cheese_hit_probabilities(arrays, 10.0, 0.0)
        cheesed = cheese_hit_probabilities(arrays, 10.0, 1.0)
        assert np.all(cheesed >= plain)
        assert np.any(cheesed > plain)
