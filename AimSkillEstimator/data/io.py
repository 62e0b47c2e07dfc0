"""
JSONL reading and writing of movement sequences.

Each line holds one movement as a JSON object keyed by the Movement field
names. Optional fields default to 0.
"""

import json
from dataclasses import asdict
from typing import Iterable, Optional

from .movement import Movement

REQUIRED_KEYS = ["time", "distance", "movement_time", "raw_movement_time"]
OPTIONAL_KEYS = ["cheesable_ratio", "cheesability", "ip12"]


def movement_from_dict(record: dict, line_number: Optional[int] = None) -> Movement:
    """Build a Movement from a dict, validating the required keys."""
    missing = [key for key in REQUIRED_KEYS if key not in record]
    if missing:
        where = f" on line {line_number}" if line_number is not None else ""
        raise ValueError(f"Movement record{where} is missing keys: {missing}")

    values = {key: float(record[key]) for key in REQUIRED_KEYS}
    for key in OPTIONAL_KEYS:
        values[key] = float(record.get(key, 0.0))
    return Movement(**values)


def load_movements(path: str) -> list[Movement]:
    """Read a JSONL movement file, skipping blank lines."""
    movements = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_number}: {e}") from e
            movements.append(movement_from_dict(record, line_number))

    # Upstream order is chronological; keep it stable for equal timestamps
    movements.sort(key=lambda m: m.time)
    return movements


def save_movements(movements: Iterable[Movement], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for movement in movements:
            f.write(json.dumps(asdict(movement)) + "\n")
