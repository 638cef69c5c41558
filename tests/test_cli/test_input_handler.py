"""Tests for src/battle_rpg/cli/input_handler.py."""
from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from battle_rpg.cli.input_handler import ConsoleActionChooser, classify_action, parse_choice
from battle_rpg.models.battle import BattleAction
from battle_rpg.models.item import Consumable, HealHp, ItemStack


@pytest.fixture
def scripted_input(monkeypatch):
    """Feed lines to ``input()`` in order."""
    def _feed(*lines):
        answers = iter(lines)
        monkeypatch.setattr("builtins.input", lambda *args: next(answers))
    return _feed


@pytest.fixture
def chooser():
    return ConsoleActionChooser(Console(file=StringIO(), width=100))


def output_of(chooser) -> str:
    return chooser.console.file.getvalue()


class TestClassifyAction:
    @pytest.mark.parametrize("raw, expected", [
        ("1", BattleAction.ATTACK),
        ("attack", BattleAction.ATTACK),
        ("A", BattleAction.ATTACK),
        (" hit ", BattleAction.ATTACK),
        ("2", BattleAction.SKILL),
        ("skill", BattleAction.SKILL),
        ("cast", BattleAction.SKILL),
        ("3", BattleAction.ITEM),
        ("item", BattleAction.ITEM),
        ("potion", BattleAction.ITEM),
        ("4", BattleAction.ESCAPE),
        ("run", BattleAction.ESCAPE),
        ("Flee", BattleAction.ESCAPE),
        ("escape", BattleAction.ESCAPE),
    ])
    def test_recognized(self, raw, expected):
        assert classify_action(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "5", "0", "dance", "attack now", "12"])
    def test_unrecognized(self, raw):
        assert classify_action(raw) is None


class TestParseChoice:
    @pytest.mark.parametrize("raw, expected", [
        ("0", 0), ("2", 2), (" 3 ", 3), ("4", None), ("-1", None), ("two", None), ("", None),
    ])
    def test_range(self, raw, expected):
        assert parse_choice(raw, 0, 3) == expected


class TestConsoleActionChooser:
    def test_action(self, chooser, scripted_input):
        scripted_input("run")
        assert chooser.choose_action() == BattleAction.ESCAPE

    def test_invalid_action_defaults_to_attack(self, chooser, scripted_input):
        scripted_input("dance")
        assert chooser.choose_action() == BattleAction.ATTACK
        assert "Unrecognized" in output_of(chooser)

    def test_skill_menu_reprompts(self, chooser, scripted_input, skill_service):
        skills = skill_service.all_skills()[:2]
        scripted_input("9", "x", "2")
        assert chooser.choose_skill(skills) == 1
        assert output_of(chooser).count("Enter a number between 0 and 2") == 2

    def test_skill_menu_cancel(self, chooser, scripted_input, skill_service):
        scripted_input("0")
        assert chooser.choose_skill(skill_service.all_skills()) is None

    def test_item_menu(self, chooser, scripted_input):
        stacks = [ItemStack(item=Consumable(id="p", name="Potion", effects=[HealHp(amount=5)]), quantity=3)]
        scripted_input("1")
        assert chooser.choose_item(stacks) == 0
        assert "Potion" in output_of(chooser)

    @pytest.mark.parametrize("answer, expected", [("y", True), ("YES", True), ("n", False), ("", False)])
    def test_confirm(self, chooser, scripted_input, answer, expected):
        scripted_input(answer)
        assert chooser.confirm("Again?") is expected
