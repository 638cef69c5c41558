"""Tests for src/battle_rpg/models/skill.py."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from battle_rpg.models.skill import Skill, SkillBook, SkillType


class TestLearning:
    def test_learn_once(self):
        book = SkillBook()
        assert book.learn("power_strike") is True
        assert book.learn("power_strike") is False
        assert book.learned == ["power_strike"]
        assert book.knows("power_strike")


class TestCooldowns:
    def test_start_and_tick(self):
        book = SkillBook()
        book.start_cooldown("power_strike", 2)
        assert book.remaining("power_strike") == 2
        book.tick()
        assert book.remaining("power_strike") == 1
        book.tick()
        assert book.remaining("power_strike") == 0
        assert "power_strike" not in book.cooldowns

    def test_zero_cooldown_clears(self):
        book = SkillBook(cooldowns={"first_aid": 2})
        book.start_cooldown("first_aid", 0)
        assert book.cooldowns == {}

    @pytest.mark.parametrize("start", [1, 2, 3, 7])
    def test_never_negative(self, start):
        book = SkillBook()
        book.start_cooldown("x", start)
        for expected in range(start - 1, -5, -1):
            book.tick()
            assert book.remaining("x") == max(expected, 0)
            assert all(turns > 0 for turns in book.cooldowns.values())

    def test_tick_on_empty(self):
        book = SkillBook()
        book.tick()
        assert book.cooldowns == {}


class TestSkill:
    def test_frozen(self):
        skill = Skill(id="x", name="X", skill_type=SkillType.ATTACK)
        with pytest.raises(ValidationError):
            skill.mana_cost = 5

    def test_summary(self):
        skill = Skill(
            id="power_strike", name="Power Strike", skill_type=SkillType.ATTACK,
            mana_cost=10, cooldown=2, damage_multiplier=1.5,
        )
        assert skill.summary() == "Power Strike [attack] - 150% damage, 10 mana, cooldown 2"
