"""Skill system: learning, availability filtering and cooldown bookkeeping."""
from __future__ import annotations

import logging

from battle_rpg.models.character import Player
from battle_rpg.models.skill import Skill

logger = logging.getLogger(__name__)


class SkillService:
    """Looks up skill templates and manages each player's skill book.

    The catalog is passed in; there is no global registry.
    """

    def __init__(self, catalog: dict[str, Skill]):
        self._catalog = dict(catalog)

    def get(self, skill_id: str) -> Skill | None:
        return self._catalog.get(skill_id)

    def all_skills(self) -> list[Skill]:
        return sorted(self._catalog.values(), key=lambda s: (s.required_level, s.id))

    def learned_skills(self, player: Player) -> list[Skill]:
        skills = []
        for skill_id in player.skill_book.learned:
            skill = self.get(skill_id)
            if skill is None:
                logger.warning("%s knows unknown skill %s", player.name, skill_id)
                continue
            skills.append(skill)
        return skills

    def can_use(self, skill: Skill, player: Player) -> bool:
        book = player.skill_book
        return (
            book.knows(skill.id)
            and player.level >= skill.required_level
            and book.remaining(skill.id) == 0
            and player.mana >= skill.mana_cost
        )

    def list_available_skills(self, player: Player) -> list[Skill]:
        """Learned skills that are off cooldown, level-eligible and affordable right now."""
        return [s for s in self.learned_skills(player) if self.can_use(s, player)]

    def start_cooldown(self, player: Player, skill: Skill) -> None:
        player.skill_book.start_cooldown(skill.id, skill.cooldown)
        logger.debug("%s cooldown started: %d turns", skill.id, skill.cooldown)

    def advance_cooldowns(self, player: Player) -> None:
        player.skill_book.tick()

    def learn_new_skills(self, player: Player) -> list[str]:
        """Learn every catalog skill the player's level now allows. Returns their names."""
        learned = []
        for skill in self.all_skills():
            if skill.required_level <= player.level and player.skill_book.learn(skill.id):
                learned.append(skill.name)
        if learned:
            logger.info("%s learned %d new skill(s) at level %d: %s",
                        player.name, len(learned), player.level, ", ".join(learned))
        return learned
