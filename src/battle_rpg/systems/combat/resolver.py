"""Resolution of a single player action and of the monster's counter-attack."""
from __future__ import annotations

import logging
import random

from battle_rpg.mechanics.combat_math import (
    escape_succeeds,
    hp_warning,
    monster_attack_roll,
    player_attack_roll,
)
from battle_rpg.models.battle import ActionOutcome, BattleAction, BattleConfig
from battle_rpg.models.character import InvalidAmountError, Player
from battle_rpg.models.monster import Monster
from battle_rpg.systems.base import ActionChooser
from battle_rpg.systems.combat.skill_invoker import SkillInvoker
from battle_rpg.systems.inventory.system import InventoryService
from battle_rpg.systems.skills.system import SkillService

logger = logging.getLogger(__name__)


class ActionResolver:
    def __init__(
        self,
        rng: random.Random,
        chooser: ActionChooser,
        skills: SkillService,
        inventory: InventoryService,
        config: BattleConfig | None = None,
    ):
        self._rng = rng
        self._chooser = chooser
        self._skills = skills
        self._inventory = inventory
        self._config = config or BattleConfig()
        self._invoker = SkillInvoker(skills)
        self._handlers = {
            BattleAction.ATTACK: self._attack,
            BattleAction.SKILL: self._skill,
            BattleAction.ITEM: self._item,
            BattleAction.ESCAPE: self._escape,
        }

    def resolve(self, action: BattleAction, player: Player, monster: Monster) -> ActionOutcome:
        """Resolve ``action``. ``turn_consumed`` tells the session whether the monster answers."""
        handler = self._handlers[action]
        try:
            return handler(player, monster)
        except InvalidAmountError as e:
            logger.warning("%s aborted: %s", action.value, e)
            return ActionOutcome(action=action, messages=[f"That didn't work: {e}"])

    # -- Player actions --

    def _attack(self, player: Player, monster: Monster) -> ActionOutcome:
        roll = player_attack_roll(player.effective_attack, self._rng, self._config.attack_spread)
        dealt = monster.take_damage(roll.total)
        messages = [f"{player.name} hits {monster.name} for {dealt} damage!"]
        if not monster.is_alive():
            messages.append(f"{monster.name} is defeated!")
        logger.debug("Player attack: %d raw, %d dealt", roll.total, dealt)
        return ActionOutcome(action=BattleAction.ATTACK, turn_consumed=True, messages=messages)

    def _skill(self, player: Player, monster: Monster) -> ActionOutcome:
        skills = self._skills.list_available_skills(player)
        if not skills:
            return ActionOutcome(action=BattleAction.SKILL, messages=["No skills are ready to use."])

        index = self._chooser.choose_skill(skills)
        if index is None:
            return ActionOutcome(action=BattleAction.SKILL, messages=["You lower your hands."])

        skill = skills[index]
        result = self._invoker.invoke(skill, player, monster)
        messages = [result.message]
        if result.success and not monster.is_alive():
            messages.append(f"{monster.name} is defeated!")
        logger.debug("Skill %s: success=%s value=%d", skill.name, result.success, result.value)
        return ActionOutcome(action=BattleAction.SKILL, turn_consumed=result.success, messages=messages)

    def _item(self, player: Player, monster: Monster) -> ActionOutcome:
        stacks = self._inventory.list_usable_consumables(player)
        if not stacks:
            return ActionOutcome(action=BattleAction.ITEM, messages=["You have no usable items."])

        index = self._chooser.choose_item(stacks)
        if index is None:
            return ActionOutcome(action=BattleAction.ITEM, messages=["You put your pack away."])

        name = stacks[index].item.name
        if self._inventory.use_item(name, player):
            return ActionOutcome(
                action=BattleAction.ITEM,
                turn_consumed=True,
                messages=[f"{player.name} uses {name}. (HP {player.hp}/{player.effective_max_hp}, "
                          f"mana {player.mana}/{player.max_mana})"],
            )
        return ActionOutcome(action=BattleAction.ITEM, messages=[f"{name} has no effect right now."])

    def _escape(self, player: Player, monster: Monster) -> ActionOutcome:
        if escape_succeeds(self._rng, self._config.escape_chance):
            logger.debug("Escape succeeded")
            return ActionOutcome(
                action=BattleAction.ESCAPE,
                escaped=True,
                messages=[f"{player.name} escapes from {monster.name}!"],
            )
        logger.debug("Escape failed")
        return ActionOutcome(
            action=BattleAction.ESCAPE,
            turn_consumed=True,
            messages=[f"{player.name} fails to escape!"],
        )

    # -- Monster --

    def monster_attack(self, player: Player, monster: Monster) -> list[str]:
        """Plain counter-attack, mitigated by the player's defense."""
        roll = monster_attack_roll(monster.attack, self._rng, self._config.monster_attack_spread)
        taken = player.take_damage(roll.total)
        messages = [
            f"{monster.name} hits {player.name} for {taken} damage! "
            f"(HP {player.hp}/{player.effective_max_hp})"
        ]
        warning = hp_warning(player.hp, player.effective_max_hp)
        if player.is_alive() and warning == "critical":
            messages.append("Danger! Your health is critically low!")
        elif player.is_alive() and warning == "low":
            messages.append("Your health is running low.")
        logger.debug("Monster attack: %d raw, %d taken", roll.total, taken)
        return messages
