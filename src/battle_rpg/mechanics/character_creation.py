"""Character creation: builds a fresh player, no I/O."""
from __future__ import annotations

from battle_rpg.mechanics.leveling import total_exp_to_reach
from battle_rpg.models.character import Player
from battle_rpg.models.inventory import DEFAULT_INVENTORY_SLOTS, Inventory

STARTING_ITEMS: dict[str, int] = {
    "health_potion": 2,
    "mana_potion": 1,
}


def create_player(name: str, level: int = 1, inventory_slots: int = DEFAULT_INVENTORY_SLOTS) -> Player:
    """New player at ``level``, grown through the normal level-up path so stats match."""
    player = Player(name=name, inventory=Inventory(max_slots=inventory_slots))
    if level > 1:
        player.gain_exp(total_exp_to_reach(level))
    return player
