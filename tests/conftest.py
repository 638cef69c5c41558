"""Shared fixtures for the battle-rpg test suite."""
from __future__ import annotations

import random
from typing import Any, Callable

import pytest

from battle_rpg.mechanics.character_creation import create_player
from battle_rpg.models.battle import BattleAction
from battle_rpg.models.item import Consumable, Equipment, EquipmentSlot, HealHp, HealMana
from battle_rpg.models.monster import Monster
from battle_rpg.models.skill import Skill, SkillType
from battle_rpg.systems.base import ActionChooser, BattleNarrator
from battle_rpg.systems.inventory.system import InventoryService
from battle_rpg.systems.skills.system import SkillService


class ScriptedRng(random.Random):
    """A Random whose draws come from scripted queues, then fall back to a seeded stream."""

    def __init__(self, randints=(), randranges=(), randoms=(), choices=()):
        super().__init__(0)
        self.randints = list(randints)
        self.randranges = list(randranges)
        self.randoms = list(randoms)
        self.choices = list(choices)

    def randint(self, a, b):
        if self.randints:
            return self.randints.pop(0)
        return a + self._randbelow(b - a + 1)

    def randrange(self, *args, **kwargs):
        if self.randranges:
            return self.randranges.pop(0)
        return super().randrange(*args, **kwargs)

    def random(self):
        if self.randoms:
            return self.randoms.pop(0)
        return super().random()

    def choice(self, seq):
        if self.choices:
            return self.choices.pop(0)
        return super().choice(seq)


class ScriptedChooser(ActionChooser):
    """Replays a fixed list of decisions. Running out raises, which ends a battle as ERROR."""

    def __init__(self, actions=(), skills=(), items=(), confirms=(), watch: Callable[[], Any] | None = None):
        self.actions = list(actions)
        self.skill_choices = list(skills)
        self.item_choices = list(items)
        self.confirms = list(confirms)
        self.prompts: list[str] = []
        self.watch = watch
        self.observed: list[Any] = []
        self.skill_menus: list[list[str]] = []
        self.item_menus: list[list[str]] = []

    def choose_action(self) -> BattleAction:
        if self.watch is not None:
            self.observed.append(self.watch())
        return self.actions.pop(0)

    def choose_skill(self, skills):
        self.skill_menus.append([s.id for s in skills])
        return self.skill_choices.pop(0)

    def choose_item(self, stacks):
        self.item_menus.append([s.item.name for s in stacks])
        return self.item_choices.pop(0)

    def confirm(self, prompt):
        self.prompts.append(prompt)
        return self.confirms.pop(0)


class RecordingNarrator(BattleNarrator):
    def __init__(self):
        self.started = 0
        self.statuses: list[int] = []
        self.messages: list[str] = []
        self.results: list[tuple] = []
        self.errors: list[str] = []

    def show_battle_start(self, player, monster):
        self.started += 1

    def show_status(self, player, monster, round_number):
        self.statuses.append(round_number)

    def show_messages(self, messages):
        self.messages.extend(messages)

    def show_result(self, result, rewards=None):
        self.results.append((result, rewards))

    def show_error(self, message):
        self.errors.append(message)


SKILLS = {
    "power_strike": Skill(
        id="power_strike", name="Power Strike", skill_type=SkillType.ATTACK,
        required_level=1, mana_cost=10, cooldown=2, damage_multiplier=1.5,
    ),
    "first_aid": Skill(
        id="first_aid", name="First Aid", skill_type=SkillType.HEAL,
        required_level=1, mana_cost=15, cooldown=3, heal_amount=30,
    ),
    "battle_cry": Skill(
        id="battle_cry", name="Battle Cry", skill_type=SkillType.BUFF,
        required_level=3, mana_cost=12, cooldown=5, buff_duration=3,
    ),
    "weaken": Skill(
        id="weaken", name="Weaken", skill_type=SkillType.DEBUFF,
        required_level=5, mana_cost=18, cooldown=4, buff_duration=3,
    ),
}

ITEMS = {
    "health_potion": Consumable(id="health_potion", name="Health Potion", effects=[HealHp(amount=50)]),
    "mana_potion": Consumable(id="mana_potion", name="Mana Potion", effects=[HealMana(amount=30)]),
    "iron_sword": Equipment(id="iron_sword", name="Iron Sword", slot=EquipmentSlot.WEAPON, attack_bonus=8),
    "leather_armor": Equipment(
        id="leather_armor", name="Leather Armor", slot=EquipmentSlot.ARMOR, defense_bonus=6, hp_bonus=10,
    ),
}


@pytest.fixture
def player():
    # hp 100, mana 50, attack 10, defense 5, gold 100
    return create_player("Tester")


@pytest.fixture
def monster():
    return Monster(
        id="slime", name="Slime", max_hp=20, attack=5, defense=2,
        exp_reward=10, gold_reward=5,
    )


@pytest.fixture
def tough_monster():
    return Monster(id="golem", name="Golem", max_hp=500, attack=0, defense=0, exp_reward=100, gold_reward=50)


@pytest.fixture
def skill_service():
    return SkillService(SKILLS)


@pytest.fixture
def inventory_service():
    return InventoryService(ITEMS)


@pytest.fixture
def narrator():
    return RecordingNarrator()


@pytest.fixture
def seeded_rng():
    return random.Random(42)


@pytest.fixture
def scripted_rng():
    """Factory: ``scripted_rng(randints=[...], randranges=[...], randoms=[...], choices=[...])``."""
    return ScriptedRng


@pytest.fixture
def scripted_chooser():
    """Factory: ``scripted_chooser(actions=[...], skills=[...], items=[...], confirms=[...], watch=None)``."""
    return ScriptedChooser
