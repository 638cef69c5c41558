from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from battle_rpg.models.character import Player

logger = logging.getLogger(__name__)


class ItemRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class EquipmentSlot(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


# -- Consumable effects --

class HealHp(BaseModel):
    kind: Literal["heal_hp"] = "heal_hp"
    amount: int = Field(default=0, ge=0)
    percent: bool = False

    def apply(self, player: Player) -> bool:
        amount = int(player.effective_max_hp * self.amount / 100) if self.percent else self.amount
        healed = player.heal(amount)
        return healed > 0

    def describe(self) -> str:
        return f"HP +{self.amount}%" if self.percent else f"HP +{self.amount}"


class HealMana(BaseModel):
    kind: Literal["heal_mana"] = "heal_mana"
    amount: int = Field(default=0, ge=0)
    percent: bool = False

    def apply(self, player: Player) -> bool:
        amount = int(player.max_mana * self.amount / 100) if self.percent else self.amount
        restored = player.restore_mana(amount)
        return restored > 0

    def describe(self) -> str:
        return f"Mana +{self.amount}%" if self.percent else f"Mana +{self.amount}"


class GainExp(BaseModel):
    kind: Literal["gain_exp"] = "gain_exp"
    amount: int = Field(default=0, ge=0)

    def apply(self, player: Player) -> bool:
        if self.amount == 0:
            return False
        player.gain_exp(self.amount)
        return True

    def describe(self) -> str:
        return f"EXP +{self.amount}"


Effect = Annotated[Union[HealHp, HealMana, GainExp], Field(discriminator="kind")]


# -- Items --

class Consumable(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: Literal["consumable"] = "consumable"
    id: str
    name: str
    description: str = ""
    value: int = 0
    rarity: ItemRarity = ItemRarity.COMMON
    effects: list[Effect] = Field(default_factory=list)
    stackable: bool = True

    def use(self, player: Player) -> bool:
        """Apply every effect. True when at least one of them changed the player."""
        applied = False
        for effect in self.effects:
            if effect.apply(player):
                applied = True
        if not applied:
            logger.debug("%s had no effect on %s", self.name, player.name)
        return applied

    def describe_effects(self) -> str:
        if not self.effects:
            return "no effect"
        return ", ".join(effect.describe() for effect in self.effects)


class Equipment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: Literal["equipment"] = "equipment"
    id: str
    name: str
    description: str = ""
    value: int = 0
    rarity: ItemRarity = ItemRarity.COMMON
    slot: EquipmentSlot = EquipmentSlot.WEAPON
    attack_bonus: int = 0
    defense_bonus: int = 0
    hp_bonus: int = 0
    stackable: bool = False

    def use(self, player: Player) -> bool:
        # Equipment is worn, never consumed.
        return False

    def describe_bonus(self) -> str:
        parts = [
            f"{label} +{amount}"
            for label, amount in (("ATK", self.attack_bonus), ("DEF", self.defense_bonus), ("HP", self.hp_bonus))
            if amount
        ]
        return ", ".join(parts) or "no bonus"


Item = Annotated[Union[Consumable, Equipment], Field(discriminator="kind")]


class ItemStack(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item: Item
    quantity: int = Field(default=1, ge=0)
