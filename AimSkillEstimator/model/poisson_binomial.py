"""
Poisson Binomial Distribution

Distribution of the number of successes among independent Bernoulli trials
with individual success probabilities. The probability mass function is
built by convolving the per-trial generating functions (1 - q + q z) one
trial at a time, which only adds non-negative terms and stays stable for
thousands of trials.
"""

import math
from typing import Sequence

import numpy as np


class PoissonBinomial:
    """
    Poisson binomial distribution over 0..n successes.

    Args:
        probabilities: Success probability of each trial, each in [0, 1]
    """

    def __init__(self, probabilities: Sequence[float]):
        q = np.asarray(probabilities, dtype=np.float64).ravel()

        if not np.all(np.isfinite(q)):
            raise ValueError("Probabilities must be finite")
        if np.any((q < 0) | (q > 1)):
            raise ValueError("Probabilities must lie in [0, 1]")

        self.probabilities = q
        self.n = len(q)
        self._pmf = self._convolve(q)
        self._cdf = np.minimum(np.cumsum(self._pmf), 1.0)

    @staticmethod
    def _convolve(q: np.ndarray) -> np.ndarray:
        pmf = np.zeros(len(q) + 1)
        pmf[0] = 1.0

        for i, p in enumerate(q):
            # Coefficients above i + 1 are still zero
            upper = pmf[: i + 2].copy()
            pmf[: i + 2] *= 1 - p
            pmf[1 : i + 2] += upper[: i + 1] * p

        return pmf

    @property
    def mean(self) -> float:
        return float(self.probabilities.sum())

    @property
    def variance(self) -> float:
        return float((self.probabilities * (1 - self.probabilities)).sum())

    def pmf(self, k: int) -> float:
        """P(X = k)."""
        if k < 0 or k > self.n or k != int(k):
            return 0.0
        return float(self._pmf[int(k)])

    def cdf(self, k: float) -> float:
        """P(X <= k), with real k floored."""
        if math.isnan(k):
            raise ValueError("cdf is undefined for NaN")
        if k < 0:
            return 0.0
        if k >= self.n:
            return 1.0
        return float(self._cdf[int(math.floor(k))])

    def sf(self, k: float) -> float:
        """P(X > k)."""
        return 1.0 - self.cdf(k)
