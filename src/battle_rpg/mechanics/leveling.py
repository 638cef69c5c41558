"""Experience and level-up mechanics: pure math, no I/O."""
from __future__ import annotations

EXP_PER_LEVEL = 50

LEVEL_UP_HP_BONUS = 20
LEVEL_UP_MANA_BONUS = 15
LEVEL_UP_ATTACK_BONUS = 5
LEVEL_UP_DEFENSE_BONUS = 3
LEVEL_UP_HP_REGEN_BONUS = 0.3
LEVEL_UP_MANA_REGEN_BONUS = 0.2


def exp_for_next_level(level: int) -> int:
    """Experience needed to leave ``level``. Counted from zero at each level."""
    return max(level, 1) * EXP_PER_LEVEL


def can_level_up(level: int, exp: int) -> bool:
    return exp >= exp_for_next_level(level)


def resolve_levels(level: int, exp: int) -> tuple[int, int]:
    """Apply every pending level-up. Returns (new_level, leftover_exp).

    Experience above a threshold rolls into the next level until it is
    below the threshold for the level reached.
    """
    while can_level_up(level, exp):
        exp -= exp_for_next_level(level)
        level += 1
    return level, exp


def total_exp_to_reach(level: int) -> int:
    """Cumulative experience a level-1 character needs to reach ``level``."""
    return sum(exp_for_next_level(lvl) for lvl in range(1, max(level, 1)))
