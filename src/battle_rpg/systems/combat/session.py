"""Combat session: the round loop for one player versus one monster."""
from __future__ import annotations

import logging
import random

from battle_rpg.models.battle import BattleConfig, BattleResult, RewardSummary
from battle_rpg.models.character import Player
from battle_rpg.models.monster import Monster
from battle_rpg.systems.base import ActionChooser, BattleNarrator, KillListener
from battle_rpg.systems.combat.resolver import ActionResolver
from battle_rpg.systems.combat.rewards import RewardCalculator
from battle_rpg.systems.inventory.system import InventoryService
from battle_rpg.systems.skills.system import SkillService

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong during the battle. Sorry, this encounter has ended."


class CombatSession:
    """Runs one battle to completion.

    Each round: show status, take the player's action, let the monster
    answer if the player's turn was consumed, then advance skill cooldowns
    once. The only exits are a combatant reaching 0 HP, a successful escape
    or an unexpected error, which ends the battle as ``ERROR``.

    All randomness comes from the single ``rng`` shared with the resolver
    and the reward calculator.
    """

    def __init__(
        self,
        chooser: ActionChooser,
        narrator: BattleNarrator,
        skills: SkillService,
        inventory: InventoryService,
        quests: KillListener | None = None,
        rng: random.Random | None = None,
        config: BattleConfig | None = None,
    ):
        self._chooser = chooser
        self._narrator = narrator
        self._skills = skills
        self._quests = quests
        self._rng = rng or random.Random()
        self._config = config or BattleConfig()
        self.resolver = ActionResolver(self._rng, chooser, skills, inventory, self._config)
        self.rewards = RewardCalculator(self._rng, skills, inventory, self._config)
        self.round_number = 0
        self.last_rewards: RewardSummary | None = None
        self.completed_quests: list[str] = []

    def run(self, player: Player, monster: Monster) -> BattleResult:
        try:
            result = self._run(player, monster)
        except Exception:
            logger.exception("Battle %s vs %s failed in round %d", player.name, monster.name, self.round_number)
            self._narrator.show_error(GENERIC_FAILURE)
            return BattleResult.ERROR
        logger.info("Battle %s vs %s ended after %d round(s): %s",
                    player.name, monster.name, self.round_number, result.value)
        return result

    def _run(self, player: Player, monster: Monster) -> BattleResult:
        if not player.is_alive() or not monster.is_alive():
            logger.warning("Battle refused: %s HP %d, %s HP %d", player.name, player.hp, monster.name, monster.hp)
            self._narrator.show_error("A battle needs two combatants still standing.")
            return BattleResult.ERROR

        logger.info("Battle start: %s (Lv %d) vs %s", player.name, player.level, monster.name)
        self._narrator.show_battle_start(player, monster)

        while player.is_alive() and monster.is_alive():
            self.round_number += 1
            self._narrator.show_status(player, monster, self.round_number)

            action = self._chooser.choose_action()
            outcome = self.resolver.resolve(action, player, monster)
            self._narrator.show_messages(outcome.messages)

            if outcome.escaped:
                player.post_battle_regeneration()
                self._narrator.show_result(BattleResult.ESCAPED)
                return BattleResult.ESCAPED

            if monster.is_alive() and outcome.turn_consumed:
                self._narrator.show_messages(self.resolver.monster_attack(player, monster))

            self._skills.advance_cooldowns(player)

        if not monster.is_alive():
            return self._victory(player, monster)

        self._narrator.show_result(BattleResult.DEFEAT)
        return BattleResult.DEFEAT

    def _victory(self, player: Player, monster: Monster) -> BattleResult:
        self.last_rewards = self.rewards.grant(player, monster)
        if self._quests is not None:
            self.completed_quests = self._quests.notify_kill(monster.name)
        player.post_battle_regeneration()
        self._narrator.show_result(BattleResult.VICTORY, self.last_rewards)
        return BattleResult.VICTORY
