"""Main application bootstrap: wires all systems together."""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Any

from battle_rpg.models.battle import BattleConfig, BattleResult
from battle_rpg.models.character import Player
from battle_rpg.models.inventory import DEFAULT_INVENTORY_SLOTS
from battle_rpg.models.item import Equipment
from battle_rpg.models.monster import Monster

logger = logging.getLogger(__name__)


def _load_config() -> dict[str, Any]:
    """Load config.toml from project root."""
    import tomllib

    config_path = Path(__file__).parent.parent.parent / "config.toml"
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


def configure_logging(config: dict[str, Any]) -> None:
    """Send log records to a file so the console stays free for the game."""
    log_cfg = config.get("logging", {})
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        filename=log_cfg.get("file", "battle_rpg.log"),
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class GameApp:
    """Main application class that bootstraps and runs battles."""

    def __init__(self, seed: int | None = None, config: dict[str, Any] | None = None):
        self.config = config if config is not None else _load_config()
        self.battle_config = BattleConfig.model_validate(self.config.get("battle", {}))
        self.rng = random.Random(seed)

        # Lazy-initialized components
        self._monster_templates: dict[str, dict] | None = None
        self._skills = None
        self._inventory = None
        self._quests = None
        self._display = None
        self._chooser = None

        self.player: Player | None = None

    # -- Component initialization (lazy) --

    @property
    def monster_templates(self) -> dict[str, dict]:
        if self._monster_templates is None:
            from battle_rpg.content.loader import load_all_monsters

            self._monster_templates = load_all_monsters()
        return self._monster_templates

    @property
    def skills(self):
        if self._skills is None:
            from battle_rpg.content.loader import load_all_skills
            from battle_rpg.systems.skills.system import SkillService

            self._skills = SkillService(load_all_skills())
        return self._skills

    @property
    def inventory(self):
        if self._inventory is None:
            from battle_rpg.content.loader import load_all_items
            from battle_rpg.systems.inventory.system import InventoryService

            self._inventory = InventoryService(load_all_items())
        return self._inventory

    @property
    def quests(self):
        if self._quests is None:
            from battle_rpg.content.loader import load_all_quests
            from battle_rpg.systems.quest.system import QuestTracker

            self._quests = QuestTracker(load_all_quests())
        return self._quests

    @property
    def display(self):
        if self._display is None:
            from battle_rpg.cli.combat_display import CombatDisplay

            self._display = CombatDisplay()
        return self._display

    @property
    def chooser(self):
        if self._chooser is None:
            from battle_rpg.cli.input_handler import ConsoleActionChooser

            self._chooser = ConsoleActionChooser(self.display.console)
        return self._chooser

    # -- Setup --

    def new_player(self, name: str, level: int = 1) -> Player:
        from battle_rpg.mechanics.character_creation import STARTING_ITEMS, create_player

        slots = self.config.get("player", {}).get("inventory_slots", DEFAULT_INVENTORY_SLOTS)
        player = create_player(name, level=level, inventory_slots=slots)
        for item_id, quantity in STARTING_ITEMS.items():
            self.inventory.give(player, item_id, quantity)
        self.skills.learn_new_skills(player)
        logger.info("Created %s at level %d", player.name, player.level)
        self.player = player
        return player

    def spawn_monster(self, monster_id: str | None = None) -> Monster:
        """A fresh monster by id, or a random one suited to the player's level."""
        if monster_id is not None:
            template = self.monster_templates.get(monster_id)
            if template is None:
                raise KeyError(f"Unknown monster: {monster_id}")
            return Monster.from_template(template)

        templates = [Monster.from_template(t) for t in self.monster_templates.values()]
        level = self.player.level if self.player else 1
        suitable = [m for m in templates if m.is_suitable_for_level(level)] or templates
        if not suitable:
            raise LookupError("No monsters are defined")
        return self.rng.choice(suitable)

    def monster_catalog(self) -> list[Monster]:
        monsters = [Monster.from_template(t) for t in self.monster_templates.values()]
        return sorted(monsters, key=lambda m: (m.min_level, m.id))

    # -- Battles --

    def fight(self, monster: Monster) -> BattleResult:
        from battle_rpg.systems.combat.session import CombatSession

        session = CombatSession(
            chooser=self.chooser,
            narrator=self.display,
            skills=self.skills,
            inventory=self.inventory,
            quests=self.quests,
            rng=self.rng,
            config=self.battle_config,
        )
        result = session.run(self.player, monster)
        if result == BattleResult.VICTORY and session.last_rewards is not None:
            self.offer_equipment(session.last_rewards.equipment)
        for name in session.completed_quests:
            self.display.console.print(f"[bold cyan]Quest complete: {name}[/bold cyan]")
        for quest in self.quests.claim_rewards(self.player):
            self.display.console.print(
                f"[cyan]Quest reward for {quest.name}: +{quest.exp_reward} EXP, +{quest.gold_reward} gold[/cyan]"
            )
        for skill_name in self.skills.learn_new_skills(self.player):
            self.display.console.print(f"[bold yellow]New skill: {skill_name}[/bold yellow]")
        return result

    def offer_equipment(self, names: list[str]) -> list[str]:
        """Ask whether to wear each piece of dropped equipment. Returns the names put on."""
        worn = []
        for name in names:
            stack = self.player.inventory.find(name)
            if stack is None or not isinstance(stack.item, Equipment):
                continue
            item = stack.item
            current = getattr(self.player.inventory, item.slot.value)
            replacing = f", replacing {current.name}" if current is not None else ""
            if not self.chooser.confirm(f"Equip {item.name} ({item.describe_bonus()}){replacing}?"):
                continue
            self.player.equip(item)
            if getattr(self.player.inventory, item.slot.value) is item:
                worn.append(item.name)
                self.display.console.print(f"[green]{self.player.name} equips {item.name}.[/green]")
            else:
                self.display.console.print(f"[yellow]No room in the bag to swap out {current.name}.[/yellow]")
        return worn

    def run(self, name: str, level: int = 1, monster_id: str | None = None) -> None:
        """Fight encounters until the player is defeated or declines another."""
        player = self.new_player(name, level)
        self.display.show_character(player)
        self.display.show_quests(self.quests.active_quests())

        while True:
            result = self.fight(self.spawn_monster(monster_id))
            if result in (BattleResult.DEFEAT, BattleResult.ERROR):
                break
            self.display.show_character(player)
            if not self.chooser.confirm("Fight again?"):
                break

        logger.info("Session over for %s at level %d", player.name, player.level)
        self.display.console.print(f"[dim]{player.name} ends the journey at level {player.level}.[/dim]")
