"""
Movement Records for Aim Difficulty

A Movement describes one cursor movement between two targets, as produced by
the upstream feature extractor. MovementArrays is the columnar view that the
probability model works on, built once per calculation.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

# Column order of Movement.to_array() and MovementArrays.stack()
MOVEMENT_FIELDS = [
    "time",
    "distance",
    "movement_time",
    "raw_movement_time",
    "cheesable_ratio",
    "cheesability",
    "ip12",
]


@dataclass(frozen=True)
class Movement:
    """A single targeting movement."""

    time: float  # Timestamp of the target object in seconds
    distance: float  # Normalized target separation (0 = stationary)
    movement_time: float  # Effective time allotted to the movement
    raw_movement_time: float  # Unadjusted time delta
    cheesable_ratio: float = 0.0  # Fraction by which movement_time can be extended
    cheesability: float = 0.0  # How exploitable this movement is (0-1)
    ip12: float = 0.0  # Precomputed index of performance

    def to_array(self) -> np.ndarray:
        """Convert to vector representation in MOVEMENT_FIELDS order."""
        return np.array(
            [getattr(self, name) for name in MOVEMENT_FIELDS], dtype=np.float64
        )


@dataclass(frozen=True)
class MovementArrays:
    """
    Struct-of-arrays view of a movement sequence.

    All arrays share the same length and are in chronological order.
    Slicing returns another MovementArrays over the same window.
    """

    time: np.ndarray
    distance: np.ndarray
    movement_time: np.ndarray
    raw_movement_time: np.ndarray
    cheesable_ratio: np.ndarray
    cheesability: np.ndarray
    ip12: np.ndarray

    @classmethod
    def from_movements(cls, movements: Sequence[Movement]) -> "MovementArrays":
        if len(movements) == 0:
            return cls(*(np.zeros(0) for _ in MOVEMENT_FIELDS))

        matrix = np.stack([m.to_array() for m in movements])
        columns = [matrix[:, i].copy() for i in range(len(MOVEMENT_FIELDS))]
        for column in columns:
            column.flags.writeable = False
        return cls(*columns)

    def __len__(self) -> int:
        return len(self.time)

    def __getitem__(self, index: slice) -> "MovementArrays":
        if not isinstance(index, slice):
            raise TypeError("MovementArrays only supports slice indexing")
        return MovementArrays(
            *(getattr(self, name)[index] for name in MOVEMENT_FIELDS)
        )

    @property
    def duration(self) -> float:
        """Time between the first and last movement."""
        if len(self) == 0:
            return 0.0
        return float(self.time[-1] - self.time[0])

    def stack(self) -> np.ndarray:
        """Return an [n, 7] matrix in MOVEMENT_FIELDS order."""
        return np.column_stack([getattr(self, name) for name in MOVEMENT_FIELDS])

    def to_movements(self) -> list[Movement]:
        return [Movement(*map(float, row)) for row in self.stack()]


MovementsLike = Union[Sequence[Movement], MovementArrays]


def as_movement_arrays(movements: MovementsLike) -> MovementArrays:
    """Accept either a movement sequence or an existing MovementArrays."""
    if isinstance(movements, MovementArrays):
        return movements
    return MovementArrays.from_movements(movements)
