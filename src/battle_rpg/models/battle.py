from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from battle_rpg.mechanics.combat_math import (
    DROP_CHANCE,
    ESCAPE_CHANCE,
    MONSTER_ATTACK_SPREAD,
    PLAYER_ATTACK_SPREAD,
)


class BattleAction(str, Enum):
    ATTACK = "attack"
    SKILL = "skill"
    ITEM = "item"
    ESCAPE = "escape"


class BattleResult(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"
    ESCAPED = "escaped"
    ERROR = "error"


@dataclass
class ActionOutcome:
    action: BattleAction
    turn_consumed: bool = False
    escaped: bool = False
    messages: list[str] = field(default_factory=list)


@dataclass
class RewardSummary:
    exp: int = 0
    gold: int = 0
    leveled_up: bool = False
    new_level: int = 1
    new_skills: list[str] = field(default_factory=list)
    drops: list[str] = field(default_factory=list)
    equipment: list[str] = field(default_factory=list)
    discarded: list[str] = field(default_factory=list)


class BattleConfig(BaseModel):
    escape_chance: int = Field(default=ESCAPE_CHANCE, ge=0, le=100)
    drop_chance: int = Field(default=DROP_CHANCE, ge=0, le=100)
    attack_spread: int = Field(default=PLAYER_ATTACK_SPREAD, ge=0)
    monster_attack_spread: int = Field(default=MONSTER_ATTACK_SPREAD, ge=0)
    drop_pool: list[str] = Field(default_factory=lambda: [
        "health_potion", "mana_potion", "iron_sword", "leather_armor",
    ])
