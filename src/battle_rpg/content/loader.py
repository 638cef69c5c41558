from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from battle_rpg.models.item import Item
from battle_rpg.models.quest import Quest
from battle_rpg.models.skill import Skill

CONTENT_DIR = Path(__file__).parent

_ITEM_ADAPTER: TypeAdapter[Item] = TypeAdapter(Item)

def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)

def _load_entries(subdir: str, key: str, content_dir: Path | None = None) -> dict[str, dict]:
    entries = {}
    directory = (content_dir or CONTENT_DIR) / subdir
    for f in sorted(directory.glob("*.toml")):
        data = load_toml(f)
        for entry in data.get(key, []):
            entries[entry["id"]] = entry
    return entries

def load_all_monsters(content_dir: Path | None = None) -> dict[str, dict]:
    """Raw monster templates keyed by id. Use ``Monster.from_template`` per encounter."""
    return _load_entries("monsters", "monsters", content_dir)

def load_all_skills(content_dir: Path | None = None) -> dict[str, Skill]:
    raw = _load_entries("skills", "skills", content_dir)
    return {skill_id: Skill.model_validate(data) for skill_id, data in raw.items()}

def load_all_items(content_dir: Path | None = None) -> dict[str, Item]:
    raw = _load_entries("items", "items", content_dir)
    return {item_id: _ITEM_ADAPTER.validate_python(data) for item_id, data in raw.items()}

def load_all_quests(content_dir: Path | None = None) -> list[Quest]:
    raw = _load_entries("quests", "quests", content_dir)
    return [Quest.model_validate(data) for data in raw.values()]
