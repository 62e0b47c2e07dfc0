"""
Bridge between hit objects and movements.

Feature extraction itself (geometry, tap strain correction, cheese ratios)
lives with the caller; this module only walks the hit objects in the window
shape the extractor expects.
"""

from typing import Any, Optional, Protocol, Sequence

from .movement import Movement


class MovementExtractor(Protocol):
    """Turns hit objects into movements."""

    def extract_first(self, obj: Any) -> Sequence[Movement]:
        ...

    def extract(
        self,
        obj0: Optional[Any],
        obj1: Any,
        obj2: Any,
        obj3: Optional[Any],
        tap_strain: Any,
        clock_rate: float,
    ) -> Sequence[Movement]:
        ...


def create_movements(
    hit_objects: Sequence[Any],
    clock_rate: float,
    strain_history: Sequence[Any],
    extractor: MovementExtractor,
) -> list[Movement]:
    """
    Build the movement sequence for a map.

    Args:
        hit_objects: Hit objects in chronological order
        clock_rate: Playback rate, passed through to the extractor
        strain_history: Tap strain per hit object (aligned with hit_objects)
        extractor: Feature extractor

    Returns:
        Movements from every object, in order
    """
    movements: list[Movement] = []

    if not hit_objects:
        return movements

    if len(strain_history) != len(hit_objects):
        raise ValueError(
            f"strain_history has {len(strain_history)} entries for "
            f"{len(hit_objects)} hit objects"
        )

    # The first object has nothing to move from
    movements.extend(extractor.extract_first(hit_objects[0]))

    for i in range(1, len(hit_objects)):
        obj0 = hit_objects[i - 2] if i > 1 else None
        obj1 = hit_objects[i - 1]
        obj2 = hit_objects[i]
        obj3 = hit_objects[i + 1] if i < len(hit_objects) - 1 else None

        movements.extend(
            extractor.extract(obj0, obj1, obj2, obj3, strain_history[i], clock_rate)
        )

    return movements
