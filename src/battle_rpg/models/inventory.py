from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from battle_rpg.models.item import Consumable, EquipmentSlot, Equipment, Item, ItemStack

if TYPE_CHECKING:
    from battle_rpg.models.character import Player

logger = logging.getLogger(__name__)

DEFAULT_INVENTORY_SLOTS = 20


class EquipmentBonus(BaseModel):
    attack: int = 0
    defense: int = 0
    hp: int = 0


class Inventory(BaseModel):
    """Slot-limited bag plus three equipment slots.

    Every stack occupies one slot. Stackable items merge into an existing
    stack of the same name and never need a new slot.
    """

    model_config = ConfigDict(from_attributes=True)

    max_slots: int = Field(default=DEFAULT_INVENTORY_SLOTS, ge=1)
    stacks: list[ItemStack] = Field(default_factory=list)
    weapon: Optional[Equipment] = None
    armor: Optional[Equipment] = None
    accessory: Optional[Equipment] = None

    # -- Queries --

    def find(self, name: str) -> ItemStack | None:
        for stack in self.stacks:
            if stack.item.name == name:
                return stack
        return None

    def count(self, name: str) -> int:
        return sum(s.quantity for s in self.stacks if s.item.name == name)

    def is_full(self) -> bool:
        return len(self.stacks) >= self.max_slots

    def free_slots(self) -> int:
        return self.max_slots - len(self.stacks)

    def usable_consumables(self) -> list[ItemStack]:
        return [s for s in self.stacks if isinstance(s.item, Consumable) and s.quantity > 0]

    # -- Mutations --

    def add_item(self, item: Item, quantity: int = 1) -> bool:
        """Add ``quantity`` of ``item``. False when a new slot is needed and none is free."""
        if quantity <= 0:
            logger.warning("Refusing to add %s x%d", item.name, quantity)
            return False

        if item.stackable:
            existing = self.find(item.name)
            if existing is not None:
                existing.quantity += quantity
                logger.debug("Stacked %s x%d (now %d)", item.name, quantity, existing.quantity)
                return True

        if self.is_full():
            logger.warning("Inventory full (%d/%d), cannot add %s", len(self.stacks), self.max_slots, item.name)
            return False

        self.stacks.append(ItemStack(item=item, quantity=quantity))
        logger.debug("New stack %s x%d", item.name, quantity)
        return True

    def remove_item(self, name: str, quantity: int = 1) -> bool:
        stack = self.find(name)
        if stack is None:
            logger.warning("No item named %s to remove", name)
            return False
        if stack.quantity < quantity:
            logger.warning("Not enough %s (wanted %d, have %d)", name, quantity, stack.quantity)
            return False
        stack.quantity -= quantity
        if stack.quantity <= 0:
            self.stacks.remove(stack)
        return True

    def use_item(self, name: str, player: Player) -> bool:
        """Use one ``name`` on ``player``. The stack shrinks only if the item took effect."""
        stack = self.find(name)
        if stack is None:
            logger.warning("No item named %s to use", name)
            return False
        if not stack.item.use(player):
            logger.debug("Item %s was not used", name)
            return False
        stack.quantity -= 1
        if stack.quantity <= 0:
            self.stacks.remove(stack)
        logger.info("%s used %s", player.name, name)
        return True

    # -- Equipment --

    def equipped(self) -> list[Equipment]:
        return [e for e in (self.weapon, self.armor, self.accessory) if e is not None]

    def equip(self, equipment: Equipment) -> Equipment | None:
        """Wear ``equipment`` from the bag. Returns whatever was in that slot before.

        The swap is refused (None, nothing changes) when the item being
        replaced would have nowhere to go in the bag.
        """
        stack = self.find(equipment.name)
        if stack is None or stack.quantity < 1:
            logger.warning("No %s in the bag to equip", equipment.name)
            return None
        slot_attr = equipment.slot.value
        previous = getattr(self, slot_attr)
        if previous is not None and not self._has_room_for(previous, frees_slot=stack.quantity == 1):
            logger.warning("Inventory full (%d/%d), cannot swap %s for %s",
                           len(self.stacks), self.max_slots, previous.name, equipment.name)
            return None
        self.remove_item(equipment.name, 1)
        setattr(self, slot_attr, equipment)
        if previous is not None:
            self.add_item(previous, 1)
        logger.info("Equipped %s (replaced %s)", equipment.name, previous.name if previous else "nothing")
        return previous

    def _has_room_for(self, item: Item, frees_slot: bool = False) -> bool:
        if item.stackable and self.find(item.name) is not None:
            return True
        return frees_slot or not self.is_full()

    def unequip(self, slot: EquipmentSlot) -> Equipment | None:
        current = getattr(self, slot.value)
        if current is None:
            return None
        if not self.add_item(current, 1):
            logger.warning("No room to unequip %s", current.name)
            return None
        setattr(self, slot.value, None)
        logger.info("Unequipped %s", current.name)
        return current

    def total_bonus(self) -> EquipmentBonus:
        bonus = EquipmentBonus()
        for equipment in self.equipped():
            bonus.attack += equipment.attack_bonus
            bonus.defense += equipment.defense_bonus
            bonus.hp += equipment.hp_bonus
        return bonus
