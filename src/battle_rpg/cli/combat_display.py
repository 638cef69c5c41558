"""Combat-specific display helpers: turn-based battle UI."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from battle_rpg.models.battle import BattleResult, RewardSummary
from battle_rpg.models.character import Player
from battle_rpg.models.monster import Monster
from battle_rpg.models.quest import Quest
from battle_rpg.models.skill import Skill
from battle_rpg.systems.base import BattleNarrator


def hp_bar(current: int, maximum: int, width: int = 12) -> str:
    """Rich-markup health bar colored by remaining share."""
    pct = max(0.0, current / maximum) if maximum > 0 else 0.0
    filled = int(pct * width)
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim] [{color}]{current}/{maximum}[/{color}]"


class CombatDisplay(BattleNarrator):
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_battle_start(self, player: Player, monster: Monster) -> None:
        label = "[bold magenta]RARE FOE![/bold magenta]" if monster.rarity in ("rare", "epic", "legendary") else "[bold red]BATTLE![/bold red]"
        self.console.print(Panel(
            f"{label}\n\n{monster.name} appears!\n[dim]{monster.description}[/dim]",
            border_style="red", box=box.HEAVY,
        ))

    def show_status(self, player: Player, monster: Monster, round_number: int) -> None:
        content = Text.from_markup(f"  [bold yellow]Round {round_number}[/bold yellow]\n\n")
        content.append_text(Text.from_markup(f"  {monster.name:<16} {hp_bar(monster.hp, monster.max_hp)}\n"))
        content.append_text(Text.from_markup(
            f"  [bold]{player.name:<16}[/bold] {hp_bar(player.hp, player.effective_max_hp)}"
            f"  [blue]MP {player.mana}/{player.max_mana}[/blue]\n"
        ))
        self.console.print(Panel(content, border_style="red", box=box.ROUNDED, width=60))

    def show_messages(self, messages: list[str]) -> None:
        for message in messages:
            self.console.print(f"  {message}")

    def show_result(self, result: BattleResult, rewards: RewardSummary | None = None) -> None:
        if result == BattleResult.VICTORY:
            content = "[bold green]Victory![/bold green]\n"
            if rewards is not None:
                content += f"\nEXP: +{rewards.exp}\nGold: +{rewards.gold}"
                if rewards.leveled_up:
                    content += f"\n[bold yellow]Level up! You are now level {rewards.new_level}. HP and mana fully restored.[/bold yellow]"
                if rewards.new_skills:
                    content += f"\nNew skills: {', '.join(rewards.new_skills)}"
                if rewards.drops:
                    content += f"\nLoot: {', '.join(rewards.drops)}"
                if rewards.discarded:
                    content += f"\n[dim]Inventory full, left behind: {', '.join(rewards.discarded)}[/dim]"
            self.console.print(Panel(content, border_style="green", box=box.HEAVY))
        elif result == BattleResult.DEFEAT:
            self.console.print(Panel(
                "[bold red]Defeat...[/bold red]\n\nDarkness claims you...",
                border_style="red", box=box.HEAVY,
            ))
        elif result == BattleResult.ESCAPED:
            self.console.print(Panel(
                "[bold yellow]Escaped![/bold yellow]\nYou flee from combat.",
                border_style="yellow", box=box.HEAVY,
            ))

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")

    # -- Outside of battle --

    def show_character(self, player: Player) -> None:
        bonus = player.equipment_bonus
        table = Table(title=f"{player.name} - Level {player.level}", box=box.SIMPLE)
        table.add_column("Stat", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("HP", f"{player.hp}/{player.effective_max_hp}")
        table.add_row("Mana", f"{player.mana}/{player.max_mana}")
        table.add_row("Attack", f"{player.effective_attack} ({player.base_attack}+{bonus.attack})")
        table.add_row("Defense", f"{player.effective_defense} ({player.base_defense}+{bonus.defense})")
        table.add_row("EXP", f"{player.exp}/{player.exp_to_next_level()}")
        table.add_row("Gold", str(player.gold))
        worn = player.inventory.equipped()
        table.add_row("Equipped", ", ".join(e.name for e in worn) if worn else "-")
        self.console.print(table)

    def show_skill_catalog(self, skills: list[Skill]) -> None:
        table = Table(title="Skills", box=box.SIMPLE)
        table.add_column("Lv", justify="right")
        table.add_column("Skill")
        table.add_column("Details", style="dim")
        for skill in skills:
            table.add_row(str(skill.required_level), skill.name, skill.summary())
        self.console.print(table)

    def show_monster_catalog(self, monsters: list[Monster]) -> None:
        table = Table(title="Bestiary", box=box.SIMPLE)
        table.add_column("Id", style="cyan")
        table.add_column("Name")
        table.add_column("Levels", justify="right")
        table.add_column("HP", justify="right")
        table.add_column("ATK", justify="right")
        table.add_column("DEF", justify="right")
        table.add_column("Rewards", style="dim")
        for m in monsters:
            table.add_row(m.id, m.name, f"{m.min_level}-{m.max_level}", str(m.max_hp), str(m.attack),
                          str(m.defense), f"{m.exp_reward} exp / {m.gold_reward} gold")
        self.console.print(table)

    def show_quests(self, quests: list[Quest]) -> None:
        if not quests:
            return
        lines = []
        for quest in quests:
            progress = ", ".join(f"{o.target_name} {o.current_count}/{o.required_count}" for o in quest.objectives)
            lines.append(f"[bold]{quest.name}[/bold] ({quest.status.value}) - {progress}")
        self.console.print(Panel("\n".join(lines), title="Quests", border_style="cyan", box=box.ROUNDED))
