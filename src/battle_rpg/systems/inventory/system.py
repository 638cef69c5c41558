"""Inventory system: item catalog lookups and in-battle item use."""
from __future__ import annotations

import logging

from battle_rpg.models.character import Player
from battle_rpg.models.item import Item, ItemStack

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, catalog: dict[str, Item] | None = None):
        self._catalog = dict(catalog or {})

    def create(self, item_id: str) -> Item | None:
        """A fresh copy of a catalog item, or None for an unknown id."""
        template = self._catalog.get(item_id)
        if template is None:
            logger.warning("Unknown item id: %s", item_id)
            return None
        return template.model_copy(deep=True)

    def give(self, player: Player, item_id: str, quantity: int = 1) -> bool:
        item = self.create(item_id)
        if item is None:
            return False
        return player.inventory.add_item(item, quantity)

    def list_usable_consumables(self, player: Player) -> list[ItemStack]:
        return player.inventory.usable_consumables()

    def use_item(self, name: str, player: Player) -> bool:
        return player.inventory.use_item(name, player)
