"""
AimSkillEstimator Model Package

Provides the probabilistic aim difficulty engine:
- Fitts's Law hit probability model
- Throughput inversion by full-combo probability and expected time
- Segment, miss count and cheese curves
- Graph text diagnostics
"""

from .aim import AimAttributes, calculate_aim_attributes, calculate_aim_attributes_from_objects
from .cheese import cheese_levels_vs_factors, cheese_note_count
from .diagnostics import graph_text, parse_graph_text
from .fitts import hit_probabilities, hit_probability, index_of_performance
from .misses import miss_count, miss_probabilities, miss_tps_miss_counts
from .poisson_binomial import PoissonBinomial
from .root_finding import RootFindingError, find_root, find_root_expand
from .segments import combo_tps
from .throughput import expected_fc_time, fc_prob_tp, fc_probability, fc_time_tp

__all__ = [
    # Probability model
    "hit_probability",
    "hit_probabilities",
    "index_of_performance",
    "PoissonBinomial",
    # Root finding
    "find_root",
    "find_root_expand",
    "RootFindingError",
    # Inversion
    "fc_probability",
    "expected_fc_time",
    "fc_prob_tp",
    "fc_time_tp",
    # Curves
    "combo_tps",
    "miss_probabilities",
    "miss_count",
    "miss_tps_miss_counts",
    "cheese_levels_vs_factors",
    "cheese_note_count",
    # Diagnostics
    "graph_text",
    "parse_graph_text",
    # Orchestration
    "AimAttributes",
    "calculate_aim_attributes",
    "calculate_aim_attributes_from_objects",
]
