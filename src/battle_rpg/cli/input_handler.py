"""Processes and validates the player's battle input."""
from __future__ import annotations

import re

from rich.console import Console
from rich.table import Table

from battle_rpg.models.battle import BattleAction
from battle_rpg.models.item import ItemStack
from battle_rpg.models.skill import Skill
from battle_rpg.systems.base import ActionChooser

# Numbers first, then words.
PATTERNS: list[tuple[BattleAction, re.Pattern]] = [
    (BattleAction.ATTACK, re.compile(r"^1$")),
    (BattleAction.SKILL, re.compile(r"^2$")),
    (BattleAction.ITEM, re.compile(r"^3$")),
    (BattleAction.ESCAPE, re.compile(r"^4$")),
    (BattleAction.ATTACK, re.compile(r"^(?:a|attack|hit|strike|fight)$", re.I)),
    (BattleAction.SKILL, re.compile(r"^(?:s|skill|skills|cast|ability)$", re.I)),
    (BattleAction.ITEM, re.compile(r"^(?:i|item|items|use|potion|bag)$", re.I)),
    (BattleAction.ESCAPE, re.compile(r"^(?:e|r|escape|run|flee|retreat)$", re.I)),
]


def classify_action(raw_input: str) -> BattleAction | None:
    text = raw_input.strip()
    if not text:
        return None
    for action, pattern in PATTERNS:
        if pattern.match(text):
            return action
    return None


def parse_choice(raw_input: str, low: int, high: int) -> int | None:
    """Integer in ``[low, high]`` or None if the input is not one."""
    try:
        value = int(raw_input.strip())
    except ValueError:
        return None
    if value < low or value > high:
        return None
    return value


class ConsoleActionChooser(ActionChooser):
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def choose_action(self) -> BattleAction:
        self.console.print(
            "  [cyan bold][1][/cyan bold] Attack   [cyan bold][2][/cyan bold] Skill   "
            "[cyan bold][3][/cyan bold] Item   [cyan bold][4][/cyan bold] Escape"
        )
        action = classify_action(self.console.input("[bold cyan]> [/bold cyan]"))
        if action is None:
            self.console.print("[dim]Unrecognized choice, you attack.[/dim]")
            return BattleAction.ATTACK
        return action

    def choose_skill(self, skills: list[Skill]) -> int | None:
        table = Table(title="Skills", show_header=True, header_style="bold")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Skill")
        table.add_column("Type")
        table.add_column("Mana", justify="right")
        for i, skill in enumerate(skills, 1):
            table.add_row(str(i), skill.name, skill.skill_type.value, str(skill.mana_cost))
        self.console.print(table)
        return self._pick("Skill number (0: cancel)", len(skills))

    def choose_item(self, stacks: list[ItemStack]) -> int | None:
        table = Table(title="Items", show_header=True, header_style="bold")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Item")
        table.add_column("Qty", justify="right")
        table.add_column("Effect", style="dim")
        for i, stack in enumerate(stacks, 1):
            table.add_row(str(i), stack.item.name, str(stack.quantity), stack.item.describe_effects())
        self.console.print(table)
        return self._pick("Item number (0: cancel)", len(stacks))

    def confirm(self, prompt: str) -> bool:
        answer = self.console.input(f"[bold cyan]{prompt} [y/N] > [/bold cyan]").strip().lower()
        return answer in ("y", "yes")

    def _pick(self, prompt: str, count: int) -> int | None:
        while True:
            choice = parse_choice(self.console.input(f"[bold cyan]{prompt} > [/bold cyan]"), 0, count)
            if choice is not None:
                return None if choice == 0 else choice - 1
            self.console.print(f"[red]Enter a number between 0 and {count}.[/red]")
