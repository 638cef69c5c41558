"""Contracts for the collaborators a combat session talks to."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from battle_rpg.models.battle import BattleAction, BattleResult, RewardSummary
    from battle_rpg.models.character import Player
    from battle_rpg.models.item import ItemStack
    from battle_rpg.models.monster import Monster
    from battle_rpg.models.skill import Skill


class ActionChooser(ABC):
    """Blocking source of the player's decisions."""

    @abstractmethod
    def choose_action(self) -> BattleAction: ...

    @abstractmethod
    def choose_skill(self, skills: list[Skill]) -> int | None:
        """Index into ``skills``, or None when the player backs out."""

    @abstractmethod
    def choose_item(self, stacks: list[ItemStack]) -> int | None:
        """Index into ``stacks``, or None when the player backs out."""

    def confirm(self, prompt: str) -> bool:
        """Yes/no question asked between battles. Declines unless overridden."""
        return False


class KillListener(ABC):
    @abstractmethod
    def notify_kill(self, monster_name: str) -> list[str]:
        """Record a kill. Returns the names of quests it completed."""


class BattleNarrator(ABC):
    """Presentation side of a battle. Nothing here changes game state."""

    @abstractmethod
    def show_battle_start(self, player: Player, monster: Monster) -> None: ...

    @abstractmethod
    def show_status(self, player: Player, monster: Monster, round_number: int) -> None: ...

    @abstractmethod
    def show_messages(self, messages: list[str]) -> None: ...

    @abstractmethod
    def show_result(self, result: BattleResult, rewards: RewardSummary | None = None) -> None: ...

    @abstractmethod
    def show_error(self, message: str) -> None: ...
