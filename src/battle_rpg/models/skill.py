from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SkillType(str, Enum):
    ATTACK = "attack"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"


class Skill(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    skill_type: SkillType
    required_level: int = Field(default=1, ge=1)
    mana_cost: int = Field(default=0, ge=0)
    cooldown: int = Field(default=0, ge=0)
    damage_multiplier: float = 1.0
    heal_amount: int = Field(default=0, ge=0)
    buff_duration: int = Field(default=0, ge=0)

    def summary(self) -> str:
        if self.skill_type == SkillType.ATTACK:
            effect = f"{int(self.damage_multiplier * 100)}% damage"
        elif self.skill_type == SkillType.HEAL:
            effect = f"heals {self.heal_amount} HP"
        else:
            effect = f"{self.buff_duration} turns"
        return f"{self.name} [{self.skill_type.value}] - {effect}, {self.mana_cost} mana, cooldown {self.cooldown}"


@dataclass
class SkillResult:
    success: bool
    message: str
    value: int = 0


class SkillBook(BaseModel):
    """Skills a player has learned and the turns left on each cooldown."""

    model_config = ConfigDict(from_attributes=True)

    learned: list[str] = Field(default_factory=list)
    cooldowns: dict[str, int] = Field(default_factory=dict)

    def knows(self, skill_id: str) -> bool:
        return skill_id in self.learned

    def learn(self, skill_id: str) -> bool:
        if skill_id in self.learned:
            return False
        self.learned.append(skill_id)
        return True

    def remaining(self, skill_id: str) -> int:
        return self.cooldowns.get(skill_id, 0)

    def start_cooldown(self, skill_id: str, turns: int) -> None:
        if turns > 0:
            self.cooldowns[skill_id] = turns
        else:
            self.cooldowns.pop(skill_id, None)

    def tick(self) -> None:
        """One round passes: every cooldown drops by one and expired ones are removed."""
        self.cooldowns = {
            skill_id: turns - 1
            for skill_id, turns in self.cooldowns.items()
            if turns - 1 > 0
        }
