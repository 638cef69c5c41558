"""Quest system: kill-objective tracking fed by combat victories."""
from __future__ import annotations

import logging

from battle_rpg.models.character import Player
from battle_rpg.models.quest import Quest, QuestStatus
from battle_rpg.systems.base import KillListener

logger = logging.getLogger(__name__)


class QuestTracker(KillListener):
    def __init__(self, quests: list[Quest] | None = None):
        self.quests: list[Quest] = list(quests or [])

    def active_quests(self) -> list[Quest]:
        return [q for q in self.quests if q.status == QuestStatus.ACTIVE]

    def notify_kill(self, monster_name: str) -> list[str]:
        completed = []
        for quest in self.active_quests():
            progressed = False
            for objective in quest.objectives:
                if objective.target_name.lower() == monster_name.lower() and not objective.is_complete:
                    objective.current_count += 1
                    progressed = True
            if progressed:
                logger.debug("Quest %s progressed by killing %s", quest.name, monster_name)
            if progressed and quest.is_complete():
                quest.status = QuestStatus.COMPLETED
                completed.append(quest.name)
                logger.info("Quest completed: %s", quest.name)
        return completed

    def claim_rewards(self, player: Player) -> list[Quest]:
        """Pay out every completed quest that has not been paid yet."""
        claimed = []
        for quest in self.quests:
            if quest.status != QuestStatus.COMPLETED or quest.rewards_claimed:
                continue
            player.gain_exp(quest.exp_reward)
            player.set_gold(player.gold + quest.gold_reward)
            quest.rewards_claimed = True
            claimed.append(quest)
        return claimed
