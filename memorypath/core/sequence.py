"""Target sequence generation for the memory grid."""

from __future__ import annotations

import random
from typing import List, Optional

from memorypath.core.settings import SequenceRules


def sequence_length(level: int, rules: Optional[SequenceRules] = None) -> int:
    """Length of the target sequence at ``level``.

    Starts at ``base_length`` and grows by one every ``levels_per_step``
    levels, capped at ``max_length``.
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    rules = rules or SequenceRules()
    return min(rules.base_length + (level - 1) // rules.levels_per_step, rules.max_length)


def generate_sequence(length: int, rng: random.Random, tile_count: int = 9) -> List[int]:
    """Random tile indices with no entry equal to the one before it."""
    sequence: List[int] = []
    last = -1
    for _ in range(length):
        index = rng.randrange(tile_count)
        while index == last and length > 1:
            index = rng.randrange(tile_count)
        sequence.append(index)
        last = index
    return sequence
