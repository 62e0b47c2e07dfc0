"""
AimSkillEstimator Test Configuration and Fixtures
=================================================
Shared fixtures for building synthetic movement sequences.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from AimSkillEstimator.data import Movement  # noqa: E402


def build_movements(
    n: int,
    distance: float = 3.0,
    movement_time: float = 0.15,
    cheesable_ratio: float = 0.2,
    cheesability: float = 0.5,
    jitter: float = 0.3,
    seed: int = 42,
) -> list[Movement]:
    """Evenly spaced movements with reproducible random variation."""
    rng = np.random.default_rng(seed)
    movements = []
    t = 0.0
    for _ in range(n):
        d = distance * (1 + jitter * rng.uniform(-1, 1))
        mt = movement_time * (1 + jitter * rng.uniform(-1, 1))
        t += mt
        movements.append(
            Movement(
                time=t,
                distance=d,
                movement_time=mt,
                raw_movement_time=mt,
                cheesable_ratio=cheesable_ratio,
                cheesability=cheesability,
                ip12=float(np.log2(d + 1) / mt),
            )
        )
    return movements


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def movement_factory():
    """Factory for synthetic movement sequences."""
    return build_movements


@pytest.fixture
def small_map() -> list[Movement]:
    """Five movements, fewer than the number of combo buckets."""
    return build_movements(5, seed=1)


@pytest.fixture
def sample_map() -> list[Movement]:
    """A short but non-trivial map."""
    return build_movements(60, seed=7)


@pytest.fixture
def stationary_map() -> list[Movement]:
    """Movements that never require aiming."""
    return [
        Movement(
            time=0.2 * i,
            distance=0.0,
            movement_time=0.2,
            raw_movement_time=0.2,
            cheesable_ratio=0.5,
            cheesability=0.7,
            ip12=0.0,
        )
        for i in range(30)
    ]
