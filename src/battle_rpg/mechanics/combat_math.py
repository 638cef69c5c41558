"""Combat math: pure functions, no I/O."""
from __future__ import annotations

import math
import random

from battle_rpg.mechanics.dice import DiceResult, percent_check, roll_spread

PLAYER_ATTACK_SPREAD = 4
MONSTER_ATTACK_SPREAD = 2
ESCAPE_CHANCE = 50
DROP_CHANCE = 20

LOW_HP_RATIO = 0.4
CRITICAL_HP_RATIO = 0.2


def mitigate(raw_damage: int, defense: int) -> int:
    """Damage left after defense, never less than 1."""
    return max(1, raw_damage - defense)


def player_attack_roll(attack: int, rng: random.Random, spread: int = PLAYER_ATTACK_SPREAD) -> DiceResult:
    """Basic attack: effective attack + 0..spread."""
    return roll_spread(attack, spread, rng)


def monster_attack_roll(attack: int, rng: random.Random, spread: int = MONSTER_ATTACK_SPREAD) -> DiceResult:
    """Monster counter-attack: attack + 0..spread, before the player's defense."""
    return roll_spread(attack, spread, rng)


def skill_damage(attack: int, multiplier: float) -> int:
    """Attack skill damage, truncated toward zero."""
    return int(attack * multiplier)


def escape_succeeds(rng: random.Random, chance: int = ESCAPE_CHANCE) -> bool:
    return percent_check(chance, rng)


def regeneration_amount(max_stat: int, rate: float) -> int:
    """Post-battle regeneration: ``max_stat * rate / 100`` rounded half up, at least 1."""
    return max(1, math.floor(max_stat * rate / 100.0 + 0.5))


def hp_warning(hp: int, max_hp: int) -> str | None:
    """Classify remaining health. Returns 'critical', 'low' or None."""
    if max_hp <= 0:
        return None
    ratio = hp / max_hp
    if ratio <= CRITICAL_HP_RATIO:
        return "critical"
    if ratio <= LOW_HP_RATIO:
        return "low"
    return None
