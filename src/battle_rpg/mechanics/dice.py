"""Random rolls for combat: pure math, no I/O.

Every function takes the caller's ``random.Random`` so a whole battle draws
from a single stream that tests can seed or script.
"""
from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass
class DiceResult:
    expression: str
    individual_rolls: list[int]
    modifier: int = 0
    total: int = 0


def roll_spread(base: int, spread: int, rng: random.Random) -> DiceResult:
    """Roll ``base + uniform(0, spread)`` with both ends inclusive."""
    if spread < 0:
        raise ValueError(f"Invalid spread: {spread}")
    bonus = rng.randint(0, spread)
    return DiceResult(
        expression=f"{base}+0..{spread}",
        individual_rolls=[bonus],
        modifier=base,
        total=base + bonus,
    )


def percent_check(chance: int, rng: random.Random) -> bool:
    """Succeed with ``chance`` percent probability (0 never, 100 always)."""
    return rng.randrange(100) < chance


def roll_quantity(minimum: int, maximum: int, rng: random.Random) -> int:
    """Uniform quantity in ``[minimum, maximum]``; a reversed range is swapped."""
    low, high = sorted((max(minimum, 0), max(maximum, 0)))
    return rng.randint(low, high)
