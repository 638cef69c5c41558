"""Typer CLI application."""
from __future__ import annotations

from typing import Optional

import typer

app = typer.Typer(
    name="battle-rpg",
    help="A turn-based console RPG battle engine",
    no_args_is_help=False,
)


@app.command()
def fight(
    monster: Optional[str] = typer.Option(None, "--monster", "-m", help="Monster id to face"),
    name: str = typer.Option("Hero", "--name", "-n", help="Your character's name"),
    level: int = typer.Option(1, "--level", "-l", min=1, help="Starting level"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the battle RNG"),
) -> None:
    """Create a hero and fight monsters until you fall or stop."""
    from pydantic import ValidationError

    from battle_rpg.app import GameApp, configure_logging

    game_app = GameApp(seed=seed)
    configure_logging(game_app.config)
    try:
        if monster is not None:
            game_app.spawn_monster(monster)
        game_app.run(name, level=level, monster_id=monster)
    except (OSError, ValueError, KeyError, LookupError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def monsters() -> None:
    """List every monster in the bestiary."""
    from battle_rpg.app import GameApp

    game_app = GameApp()
    game_app.display.show_monster_catalog(game_app.monster_catalog())


@app.command()
def skills() -> None:
    """List every skill and the level that unlocks it."""
    from battle_rpg.app import GameApp

    game_app = GameApp()
    game_app.display.show_skill_catalog(game_app.skills.all_skills())


if __name__ == "__main__":
    app()
