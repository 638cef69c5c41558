"""Skill resolution: mana check, effect dispatch and cooldown bookkeeping."""
from __future__ import annotations

import logging

from battle_rpg.mechanics.combat_math import skill_damage
from battle_rpg.models.character import Player
from battle_rpg.models.monster import Monster
from battle_rpg.models.skill import Skill, SkillResult, SkillType
from battle_rpg.systems.skills.system import SkillService

logger = logging.getLogger(__name__)


class SkillInvoker:
    """Resolves one chosen skill.

    Cooldown gating happens when the skill service lists usable skills, so
    a skill handed to ``invoke`` is never refused for being on cooldown.
    Mana is re-checked here because it is the only cost the invoker pays.
    """

    def __init__(self, skills: SkillService):
        self._skills = skills

    def invoke(self, skill: Skill, player: Player, monster: Monster) -> SkillResult:
        if player.mana < skill.mana_cost:
            logger.debug("%s lacks mana for %s (%d/%d)", player.name, skill.name, player.mana, skill.mana_cost)
            return SkillResult(
                False,
                f"Insufficient mana for {skill.name} (need {skill.mana_cost}, have {player.mana}).",
            )

        # Spent up front, even if the effect turns out to do nothing.
        player.use_mana(skill.mana_cost)

        if skill.skill_type == SkillType.ATTACK:
            result = self._attack(skill, player, monster)
        elif skill.skill_type == SkillType.HEAL:
            result = self._heal(skill, player)
        elif skill.skill_type == SkillType.BUFF:
            result = self._buff(skill, player)
        elif skill.skill_type == SkillType.DEBUFF:
            result = self._debuff(skill, monster)
        else:
            return SkillResult(False, f"{skill.name} has an unknown skill type.")

        self._skills.start_cooldown(player, skill)
        return result

    def _attack(self, skill: Skill, player: Player, monster: Monster) -> SkillResult:
        damage = skill_damage(player.effective_attack, skill.damage_multiplier)
        actual = monster.take_damage(damage)
        logger.debug("Attack skill %s: %d raw -> %d dealt to %s", skill.name, damage, actual, monster.name)
        return SkillResult(True, f"{player.name} uses {skill.name} on {monster.name} for {actual} damage!", actual)

    def _heal(self, skill: Skill, player: Player) -> SkillResult:
        healed = player.heal(skill.heal_amount)
        logger.debug("Heal skill %s restored %d HP", skill.name, healed)
        return SkillResult(True, f"{player.name} uses {skill.name} and recovers {healed} HP!", healed)

    def _buff(self, skill: Skill, player: Player) -> SkillResult:
        # TODO: apply a timed stat modifier for buff_duration turns once combatants carry modifiers.
        logger.debug("Buff skill %s (%d turns)", skill.name, skill.buff_duration)
        return SkillResult(True, f"{player.name} uses {skill.name}! ({skill.buff_duration} turns)")

    def _debuff(self, skill: Skill, monster: Monster) -> SkillResult:
        logger.debug("Debuff skill %s on %s", skill.name, monster.name)
        return SkillResult(True, f"{skill.name} strikes at {monster.name}'s resolve!")
