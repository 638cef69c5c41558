from __future__ import annotations

import logging
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from battle_rpg.mechanics import leveling
from battle_rpg.mechanics.combat_math import mitigate, regeneration_amount
from battle_rpg.models.inventory import EquipmentBonus, Inventory
from battle_rpg.models.item import Equipment, EquipmentSlot
from battle_rpg.models.skill import SkillBook

logger = logging.getLogger(__name__)

INITIAL_MAX_HP = 100
INITIAL_MAX_MANA = 50
INITIAL_ATTACK = 10
INITIAL_DEFENSE = 5
INITIAL_GOLD = 100
INITIAL_REGEN_RATE = 1.0


class InvalidAmountError(ValueError):
    """A combatant mutator was called with a negative amount."""


def _require_non_negative(what: str, amount: int) -> None:
    if amount < 0:
        logger.warning("Rejected negative %s: %d", what, amount)
        raise InvalidAmountError(f"{what} must be 0 or more, got {amount}")


class Player(BaseModel):
    """The player's combatant.

    Fields are only changed through the mutator methods below; they keep
    ``0 <= hp <= effective_max_hp`` and ``0 <= mana <= max_mana``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    level: int = Field(default=1, ge=1, le=1000)
    hp: Optional[int] = None
    max_hp: int = Field(default=INITIAL_MAX_HP, ge=1)
    mana: Optional[int] = None
    max_mana: int = Field(default=INITIAL_MAX_MANA, ge=0)
    exp: int = Field(default=0, ge=0)
    base_attack: int = Field(default=INITIAL_ATTACK, ge=1)
    base_defense: int = Field(default=INITIAL_DEFENSE, ge=0)
    gold: int = Field(default=INITIAL_GOLD, ge=0)
    hp_regen_rate: float = INITIAL_REGEN_RATE
    mana_regen_rate: float = INITIAL_REGEN_RATE
    inventory: Inventory = Field(default_factory=Inventory)
    skill_book: SkillBook = Field(default_factory=SkillBook)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Character name cannot be empty")
        return value

    @model_validator(mode="after")
    def _clamp_pools(self) -> Player:
        if self.hp is None:
            self.hp = self.effective_max_hp
        if self.mana is None:
            self.mana = self.max_mana
        self.hp = max(0, min(self.hp, self.effective_max_hp))
        self.mana = max(0, min(self.mana, self.max_mana))
        self.hp_regen_rate = max(1.0, self.hp_regen_rate)
        self.mana_regen_rate = max(1.0, self.mana_regen_rate)
        return self

    # -- Effective stats --

    @property
    def equipment_bonus(self) -> EquipmentBonus:
        return self.inventory.total_bonus()

    @property
    def effective_attack(self) -> int:
        return self.base_attack + self.equipment_bonus.attack

    @property
    def effective_defense(self) -> int:
        return self.base_defense + self.equipment_bonus.defense

    @property
    def effective_max_hp(self) -> int:
        return self.max_hp + self.equipment_bonus.hp

    def is_alive(self) -> bool:
        return self.hp > 0

    def exp_to_next_level(self) -> int:
        return leveling.exp_for_next_level(self.level)

    # -- Mutators --

    def take_damage(self, raw_damage: int) -> int:
        """Apply defense-mitigated damage. Returns the damage actually taken."""
        _require_non_negative("damage", raw_damage)
        actual = mitigate(raw_damage, self.effective_defense)
        old_hp = self.hp
        self.hp = max(0, self.hp - actual)
        logger.debug("%s took %d damage (%d raw, defense %d): %d -> %d",
                     self.name, actual, raw_damage, self.effective_defense, old_hp, self.hp)
        if not self.is_alive():
            logger.info("%s has fallen", self.name)
        return actual

    def heal(self, amount: int) -> int:
        """Restore HP up to the effective maximum. Returns the HP actually gained."""
        _require_non_negative("heal amount", amount)
        old_hp = self.hp
        self.hp = min(self.hp + amount, self.effective_max_hp)
        logger.debug("%s healed %d -> %d (+%d requested)", self.name, old_hp, self.hp, amount)
        return self.hp - old_hp

    def use_mana(self, amount: int) -> bool:
        _require_non_negative("mana cost", amount)
        if amount > self.mana:
            return False
        self.mana -= amount
        logger.debug("%s spent %d mana (%d left)", self.name, amount, self.mana)
        return True

    def restore_mana(self, amount: int) -> int:
        _require_non_negative("mana amount", amount)
        old_mana = self.mana
        self.mana = min(self.mana + amount, self.max_mana)
        return self.mana - old_mana

    def set_gold(self, gold: int) -> None:
        _require_non_negative("gold", gold)
        logger.debug("%s gold %d -> %d", self.name, self.gold, gold)
        self.gold = gold

    def gain_exp(self, amount: int) -> bool:
        """Add experience and apply every level-up it pays for.

        Returns True when at least one level was gained.
        """
        _require_non_negative("experience", amount)
        if amount == 0:
            return False

        old_level = self.level
        new_level, leftover = leveling.resolve_levels(self.level, self.exp + amount)
        self.exp = leftover
        gained = new_level - old_level
        if gained == 0:
            logger.debug("%s gained %d exp (%d/%d)", self.name, amount, self.exp, self.exp_to_next_level())
            return False

        self.level = new_level
        self.max_hp += leveling.LEVEL_UP_HP_BONUS * gained
        self.max_mana += leveling.LEVEL_UP_MANA_BONUS * gained
        self.base_attack += leveling.LEVEL_UP_ATTACK_BONUS * gained
        self.base_defense += leveling.LEVEL_UP_DEFENSE_BONUS * gained
        self.hp_regen_rate += leveling.LEVEL_UP_HP_REGEN_BONUS * gained
        self.mana_regen_rate += leveling.LEVEL_UP_MANA_REGEN_BONUS * gained
        self.hp = self.effective_max_hp
        self.mana = self.max_mana
        logger.info("%s leveled up: %d -> %d (max HP %d, max mana %d, attack %d, defense %d)",
                    self.name, old_level, self.level, self.max_hp, self.max_mana,
                    self.base_attack, self.base_defense)
        return True

    def post_battle_regeneration(self) -> tuple[int, int]:
        """Recover a share of HP and mana after a battle. Returns (hp, mana) recovered."""
        hp_gain = self.heal(regeneration_amount(self.effective_max_hp, self.hp_regen_rate))
        mana_gain = self.restore_mana(regeneration_amount(self.max_mana, self.mana_regen_rate))
        logger.debug("%s regenerated %d HP and %d mana", self.name, hp_gain, mana_gain)
        return hp_gain, mana_gain

    # -- Equipment --

    def equip(self, equipment: Equipment) -> Equipment | None:
        previous = self.inventory.equip(equipment)
        self._clamp_hp()
        return previous

    def unequip(self, slot: EquipmentSlot) -> Equipment | None:
        removed = self.inventory.unequip(slot)
        self._clamp_hp()
        return removed

    def _clamp_hp(self) -> None:
        self.hp = min(self.hp, self.effective_max_hp)
