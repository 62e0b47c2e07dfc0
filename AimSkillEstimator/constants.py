"""
Centralized Constants for AimSkillEstimator

Consolidates the probability model coefficients, throughput bounds and
curve sizes used across modules, plus the AimConfig bundle that lets
callers override the tunable ones.
"""

from dataclasses import asdict, dataclass, fields
from typing import Tuple

# =============================================================================
# Hit Probability Model (Fitts's Law)
# =============================================================================

FITTS_SCALE = 2.066  # Distance scale of the index-of-performance model
SATURATION_EXPONENT = 100.0  # mt * tp above this is a certain hit
PROBABILITY_EPSILON = 1e-10  # Guard for divisions by a saturated probability

# =============================================================================
# Throughput Inversion
# =============================================================================

PROBABILITY_THRESHOLD = 0.02  # Target full-combo probability
TIME_THRESHOLD_BASE = 3600.0  # Seconds of practice budget on top of map length
FC_TIME_BASE = 5.0  # Fixed setup cost of one full-combo attempt (seconds)
TP_MIN = 0.1
TP_MAX = 100.0
TP_PRECISION = 1e-8

# =============================================================================
# Curves
# =============================================================================

DIFFICULTY_COUNT = 20  # Combo buckets and miss levels
DEFAULT_CHEESE_LEVEL = 0.3
CHEESE_LEVEL_COUNT = 11

# Miss throughput levels: tp * (1 - i ** MISS_TP_EXPONENT * MISS_TP_STEP)
MISS_TP_EXPONENT = 1.5
MISS_TP_STEP = 0.005

# Initial bracket for the miss-count search (expanded when needed)
MISS_COUNT_BRACKET: Tuple[float, float] = (-100.0, 1000.0)
MISS_COUNT_RELATIVE_TOLERANCE = 1e-9

# Logistic weighting of cheesable notes: expit((ip / tp - center) * steepness)
CHEESE_NOTE_CENTER = 0.6
CHEESE_NOTE_STEEPNESS = 15.0

# =============================================================================
# Root Finding
# =============================================================================

ROOT_MAX_ITERATIONS = 500
BRACKET_EXPANSION_FACTOR = 1.6
BRACKET_MAX_EXPANSIONS = 50


@dataclass(frozen=True)
class AimConfig:
    """Tunable parameters of the aim attribute calculation."""

    # Inversion targets
    probability_threshold: float = PROBABILITY_THRESHOLD
    time_threshold_base: float = TIME_THRESHOLD_BASE
    fc_time_base: float = FC_TIME_BASE

    # Throughput search range
    tp_min: float = TP_MIN
    tp_max: float = TP_MAX
    tp_precision: float = TP_PRECISION

    # Curves
    default_cheese_level: float = DEFAULT_CHEESE_LEVEL
    cheese_level_count: int = CHEESE_LEVEL_COUNT
    difficulty_count: int = DIFFICULTY_COUNT

    def __post_init__(self):
        if self.tp_min <= 0:
            raise ValueError(f"tp_min must be positive, got {self.tp_min}")
        if self.tp_max <= self.tp_min:
            raise ValueError(
                f"tp_max ({self.tp_max}) must be greater than tp_min ({self.tp_min})"
            )
        if not 0 < self.probability_threshold < 1:
            raise ValueError(
                f"probability_threshold must be in (0, 1), got {self.probability_threshold}"
            )
        if self.tp_precision <= 0:
            raise ValueError(f"tp_precision must be positive, got {self.tp_precision}")
        if self.cheese_level_count < 2:
            raise ValueError("cheese_level_count must be at least 2")
        if self.difficulty_count < 1:
            raise ValueError("difficulty_count must be at least 1")

    @classmethod
    def from_dict(cls, values: dict) -> "AimConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_CONFIG = AimConfig()
