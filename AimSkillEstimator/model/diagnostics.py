"""
Graph text diagnostics.

One line per movement: "{time} {ip_raw} {ip_corrected} {miss_probability}".
"""

import numpy as np

from ..constants import DEFAULT_CHEESE_LEVEL
from ..data.movement import MovementsLike, as_movement_arrays
from .fitts import cheese_hit_probabilities, cheese_movement_times, index_of_performance

GRAPH_COLUMNS = ["time", "ip_raw", "ip_corrected", "miss_probability"]


def graph_text(
    movements: MovementsLike, tp: float, cheese_level: float = DEFAULT_CHEESE_LEVEL
) -> str:
    """
    Serialize per-movement performance and miss probability at throughput tp.

    ip_corrected and miss_probability are evaluated at cheese_level, which
    should be the level tp was found at.
    """
    arrays = as_movement_arrays(movements)
    if len(arrays) == 0:
        return ""

    ip_corrected = index_of_performance(
        arrays.distance, cheese_movement_times(arrays, cheese_level)
    )
    miss_probs = 1 - cheese_hit_probabilities(arrays, tp, cheese_level)

    lines = []
    for time, ip_raw, ip, miss_prob in zip(
        arrays.time, arrays.ip12, ip_corrected, miss_probs
    ):
        lines.append(f"{float(time)} {float(ip_raw)} {float(ip)} {float(miss_prob)}")

    return "\n".join(lines) + "\n"


def parse_graph_text(text: str) -> np.ndarray:
    """Read graph text back into an [n, 4] array in GRAPH_COLUMNS order."""
    rows = []
    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        fields = line.split()
        if len(fields) != len(GRAPH_COLUMNS):
            raise ValueError(
                f"Line {line_number}: expected {len(GRAPH_COLUMNS)} fields, got {len(fields)}"
            )
        rows.append([float(x) for x in fields])

    return np.array(rows, dtype=np.float64).reshape(-1, len(GRAPH_COLUMNS))
