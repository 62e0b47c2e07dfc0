"""
AimSkillEstimator Data Model

Provides the Movement record, its columnar numpy view, JSONL IO and the
hit-object to movement extraction seam.
"""

from .extraction import MovementExtractor, create_movements
from .io import load_movements, movement_from_dict, save_movements
from .movement import (
    MOVEMENT_FIELDS,
    Movement,
    MovementArrays,
    MovementsLike,
    as_movement_arrays,
)

__all__ = [
    "Movement",
    "MovementArrays",
    "MovementsLike",
    "MOVEMENT_FIELDS",
    "as_movement_arrays",
    "load_movements",
    "save_movements",
    "movement_from_dict",
    "MovementExtractor",
    "create_movements",
]
