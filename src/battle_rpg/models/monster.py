from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battle_rpg.mechanics.combat_math import mitigate
from battle_rpg.models.character import InvalidAmountError

logger = logging.getLogger(__name__)


class DropEntry(BaseModel):
    item_id: str
    drop_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: int = Field(default=1, ge=1)


class Monster(BaseModel):
    """A monster instance for one encounter. Never persisted."""

    model_config = ConfigDict(from_attributes=True)

    id: str = ""
    name: str
    description: str = ""
    hp: Optional[int] = None
    max_hp: int = Field(ge=1)
    attack: int = Field(default=0, ge=0)
    defense: int = Field(default=1, ge=0)
    speed: int = 5
    critical_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    exp_reward: int = Field(default=0, ge=0)
    gold_reward: int = Field(default=0, ge=0)
    rarity: str = "common"
    abilities: list[str] = Field(default_factory=list)
    drop_table: list[DropEntry] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    min_level: int = 1
    max_level: int = 99

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Monster name cannot be empty")
        return value

    @model_validator(mode="after")
    def _fill_defaults(self) -> Monster:
        if self.hp is None:
            self.hp = self.max_hp
        self.hp = max(0, min(self.hp, self.max_hp))
        if not self.id:
            self.id = "unknown_" + self.name.lower().replace(" ", "_")
        return self

    @classmethod
    def from_template(cls, data: dict[str, Any]) -> Monster:
        """Fresh, full-health monster from a catalog entry."""
        fields = {k: v for k, v in data.items() if k != "hp"}
        monster = cls.model_validate(fields)
        logger.debug("Spawned %s (HP %d, attack %d, defense %d)", monster.name, monster.hp, monster.attack, monster.defense)
        return monster

    def is_alive(self) -> bool:
        return self.hp > 0

    def is_suitable_for_level(self, player_level: int) -> bool:
        return self.min_level <= player_level <= self.max_level

    def take_damage(self, raw_damage: int) -> int:
        """Apply defense-mitigated damage. Returns the damage actually taken."""
        if raw_damage < 0:
            logger.warning("Rejected negative damage against %s: %d", self.name, raw_damage)
            raise InvalidAmountError(f"damage must be 0 or more, got {raw_damage}")
        actual = mitigate(raw_damage, self.defense)
        self.hp = max(0, self.hp - actual)
        logger.debug("%s took %d damage (%d raw, defense %d), HP %d/%d",
                     self.name, actual, raw_damage, self.defense, self.hp, self.max_hp)
        return actual
