"""Victory rewards: experience, gold and item drops."""
from __future__ import annotations

import logging
import random

from battle_rpg.mechanics.dice import percent_check, roll_quantity
from battle_rpg.models.battle import BattleConfig, RewardSummary
from battle_rpg.models.character import Player
from battle_rpg.models.item import Equipment
from battle_rpg.models.monster import Monster
from battle_rpg.systems.inventory.system import InventoryService
from battle_rpg.systems.skills.system import SkillService

logger = logging.getLogger(__name__)


class RewardCalculator:
    def __init__(
        self,
        rng: random.Random,
        skills: SkillService,
        inventory: InventoryService,
        config: BattleConfig | None = None,
    ):
        self._rng = rng
        self._skills = skills
        self._inventory = inventory
        self._config = config or BattleConfig()

    def grant(self, player: Player, monster: Monster) -> RewardSummary:
        summary = RewardSummary(exp=monster.exp_reward, gold=monster.gold_reward)

        summary.leveled_up = player.gain_exp(monster.exp_reward)
        if summary.leveled_up:
            summary.new_skills = self._skills.learn_new_skills(player)
        summary.new_level = player.level

        player.set_gold(player.gold + monster.gold_reward)

        if self._config.drop_pool and percent_check(self._config.drop_chance, self._rng):
            self._drop(player, self._rng.choice(self._config.drop_pool), 1, summary)

        for entry in monster.drop_table:
            if self._rng.random() < entry.drop_rate:
                quantity = roll_quantity(entry.min_quantity, entry.max_quantity, self._rng)
                self._drop(player, entry.item_id, quantity, summary)

        logger.info("Rewards for %s: %d exp, %d gold, drops=%s, discarded=%s",
                    monster.name, summary.exp, summary.gold, summary.drops, summary.discarded)
        return summary

    def _drop(self, player: Player, item_id: str, quantity: int, summary: RewardSummary) -> None:
        item = self._inventory.create(item_id)
        if item is None:
            return
        label = item.name if quantity == 1 else f"{item.name} x{quantity}"
        if player.inventory.add_item(item, quantity):
            summary.drops.append(label)
            if isinstance(item, Equipment) and item.name not in summary.equipment:
                summary.equipment.append(item.name)
        else:
            summary.discarded.append(label)
