"""
Aim Attribute Calculation

Runs the full pipeline over a movement sequence:
fc_prob_tp -> fc_time_tp -> graph text -> combo tps -> miss counts ->
cheese factors -> cheese note count.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ..constants import DEFAULT_CONFIG, AimConfig
from ..data.extraction import MovementExtractor, create_movements
from ..data.movement import MovementsLike, as_movement_arrays
from .cheese import cheese_levels_vs_factors, cheese_note_count
from .diagnostics import graph_text
from .misses import miss_tps_miss_counts
from .segments import combo_tps
from .throughput import fc_prob_tp, fc_time_tp

logger = logging.getLogger(__name__)


@dataclass
class AimAttributes:
    """Output of the aim attribute calculation."""

    fc_prob_tp: float  # Throughput for a 2% full-combo chance
    fc_time_tp: float  # Throughput to full combo within the time budget
    combo_tps: np.ndarray  # [difficulty_count] hardest window per combo length
    miss_tps: np.ndarray  # [difficulty_count] throughputs below fc_time_tp
    miss_counts: np.ndarray  # [difficulty_count] expected misses at miss_tps
    cheese_note_count: float
    cheese_levels: np.ndarray  # [cheese_level_count]
    cheese_factors: np.ndarray  # [cheese_level_count] tp relative to default level
    graph_text: str

    @classmethod
    def empty(cls, config: AimConfig = DEFAULT_CONFIG) -> "AimAttributes":
        """Zero-valued attributes for a map without movements."""
        return cls(
            fc_prob_tp=0.0,
            fc_time_tp=0.0,
            combo_tps=np.zeros(config.difficulty_count),
            miss_tps=np.zeros(config.difficulty_count),
            miss_counts=np.zeros(config.difficulty_count),
            cheese_note_count=0.0,
            cheese_levels=np.zeros(config.cheese_level_count),
            cheese_factors=np.zeros(config.cheese_level_count),
            graph_text="",
        )

    def astuple(self) -> tuple:
        """The attributes in output order."""
        return (
            self.fc_prob_tp,
            self.fc_time_tp,
            self.combo_tps,
            self.miss_tps,
            self.miss_counts,
            self.cheese_note_count,
            self.cheese_levels,
            self.cheese_factors,
            self.graph_text,
        )

    def to_dict(self, include_graph: bool = True) -> dict:
        """JSON-serializable dict (arrays become lists)."""
        result = {
            "fc_prob_tp": float(self.fc_prob_tp),
            "fc_time_tp": float(self.fc_time_tp),
            "combo_tps": [float(x) for x in self.combo_tps],
            "miss_tps": [float(x) for x in self.miss_tps],
            "miss_counts": [float(x) for x in self.miss_counts],
            "cheese_note_count": float(self.cheese_note_count),
            "cheese_levels": [float(x) for x in self.cheese_levels],
            "cheese_factors": [float(x) for x in self.cheese_factors],
        }
        if include_graph:
            result["graph_text"] = self.graph_text
        return result


def calculate_aim_attributes(
    movements: MovementsLike, config: AimConfig = DEFAULT_CONFIG
) -> AimAttributes:
    """
    Compute every aim attribute of a movement sequence.

    Args:
        movements: Chronological movements (or their MovementArrays)
        config: Thresholds, throughput range and curve sizes

    Returns:
        AimAttributes; all zeros for an empty sequence
    """
    arrays = as_movement_arrays(movements)

    if len(arrays) == 0:
        return AimAttributes.empty(config)

    prob_tp = fc_prob_tp(arrays, config.default_cheese_level, config)
    time_tp = fc_time_tp(arrays, config)

    text = graph_text(arrays, prob_tp, config.default_cheese_level)

    combo = combo_tps(arrays, config)
    # Miss estimation stays at the fixed default cheese level
    miss_tps, miss_counts = miss_tps_miss_counts(arrays, time_tp, config)
    levels, factors = cheese_levels_vs_factors(arrays, prob_tp, config)
    note_count = cheese_note_count(arrays, prob_tp)

    logger.debug(
        "Aim attributes for %d movements: fc_prob_tp=%.4f fc_time_tp=%.4f",
        len(arrays),
        prob_tp,
        time_tp,
    )

    return AimAttributes(
        fc_prob_tp=prob_tp,
        fc_time_tp=time_tp,
        combo_tps=combo,
        miss_tps=miss_tps,
        miss_counts=miss_counts,
        cheese_note_count=note_count,
        cheese_levels=levels,
        cheese_factors=factors,
        graph_text=text,
    )


def calculate_aim_attributes_from_objects(
    hit_objects: Sequence[Any],
    clock_rate: float,
    strain_history: Sequence[Any],
    extractor: MovementExtractor,
    config: AimConfig = DEFAULT_CONFIG,
) -> AimAttributes:
    """Extract movements from hit objects, then calculate_aim_attributes."""
    movements = create_movements(hit_objects, clock_rate, strain_history, extractor)
    return calculate_aim_attributes(movements, config)
