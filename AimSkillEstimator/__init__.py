"""
AimSkillEstimator

Estimates the aim skill (throughput) needed to full combo a rhythm-game map
from its sequence of targeting movements.
"""

from .constants import DEFAULT_CONFIG, AimConfig
from .data import Movement, MovementArrays, load_movements
from .model import AimAttributes, calculate_aim_attributes

__all__ = [
    "AimConfig",
    "DEFAULT_CONFIG",
    "Movement",
    "MovementArrays",
    "load_movements",
    "AimAttributes",
    "calculate_aim_attributes",
]
