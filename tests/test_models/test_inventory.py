"""Tests for src/battle_rpg/models/inventory.py and item use."""
from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from battle_rpg.models.inventory import Inventory
from battle_rpg.models.item import (
    Consumable,
    Equipment,
    EquipmentSlot,
    GainExp,
    HealHp,
    HealMana,
    Item,
)

POTION = Consumable(id="health_potion", name="Health Potion", effects=[HealHp(amount=50)])
ETHER = Consumable(id="mana_potion", name="Mana Potion", effects=[HealMana(amount=30)])
TOME = Consumable(id="tome", name="Tome of Insight", effects=[GainExp(amount=40)], stackable=False)
SWORD = Equipment(id="iron_sword", name="Iron Sword", slot=EquipmentSlot.WEAPON, attack_bonus=8)
CHARM = Equipment(id="lucky_charm", name="Lucky Charm", slot=EquipmentSlot.ACCESSORY, hp_bonus=5)


class TestAddItem:
    def test_stackable_merges(self):
        inv = Inventory()
        assert inv.add_item(POTION, 2)
        assert inv.add_item(POTION, 3)
        assert len(inv.stacks) == 1
        assert inv.count("Health Potion") == 5

    def test_non_stackable_takes_a_slot_each(self):
        inv = Inventory()
        inv.add_item(SWORD)
        inv.add_item(SWORD)
        assert len(inv.stacks) == 2

    def test_full_rejects_new_stack(self):
        inv = Inventory(max_slots=1)
        assert inv.add_item(SWORD)
        assert inv.is_full()
        assert inv.add_item(POTION) is False
        assert len(inv.stacks) == 1

    def test_full_still_merges_existing_stack(self):
        inv = Inventory(max_slots=1)
        inv.add_item(POTION)
        assert inv.add_item(POTION, 4)
        assert inv.count("Health Potion") == 5

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_rejected(self, quantity):
        inv = Inventory()
        assert inv.add_item(POTION, quantity) is False
        assert inv.stacks == []

    def test_free_slots(self):
        inv = Inventory(max_slots=3)
        inv.add_item(POTION)
        assert inv.free_slots() == 2


class TestRemoveItem:
    def test_partial(self):
        inv = Inventory()
        inv.add_item(POTION, 3)
        assert inv.remove_item("Health Potion", 2)
        assert inv.count("Health Potion") == 1

    def test_last_one_frees_slot(self):
        inv = Inventory()
        inv.add_item(POTION)
        assert inv.remove_item("Health Potion")
        assert inv.stacks == []

    def test_not_enough(self):
        inv = Inventory()
        inv.add_item(POTION)
        assert inv.remove_item("Health Potion", 2) is False
        assert inv.count("Health Potion") == 1

    def test_missing(self):
        assert Inventory().remove_item("Nothing") is False


class TestUseItem:
    def test_heals_and_consumes(self, player):
        player.take_damage(45)
        player.inventory.add_item(POTION, 2)
        assert player.inventory.use_item("Health Potion", player)
        assert player.hp == 100
        assert player.inventory.count("Health Potion") == 1

    def test_no_effect_keeps_item(self, player):
        player.inventory.add_item(POTION)
        assert player.inventory.use_item("Health Potion", player) is False
        assert player.inventory.count("Health Potion") == 1

    def test_mana_potion(self, player):
        player.use_mana(40)
        player.inventory.add_item(ETHER)
        assert player.inventory.use_item("Mana Potion", player)
        assert player.mana == 40
        assert player.inventory.find("Mana Potion") is None

    def test_percent_heal(self, player):
        elixir = Consumable(id="elixir", name="Elixir", effects=[HealHp(amount=50, percent=True)])
        player.take_damage(85)
        player.inventory.add_item(elixir)
        player.inventory.use_item("Elixir", player)
        assert player.hp == 70

    def test_exp_tome(self, player):
        player.inventory.add_item(TOME)
        assert player.inventory.use_item("Tome of Insight", player)
        assert player.exp == 40

    def test_equipment_is_not_usable(self, player):
        player.inventory.add_item(SWORD)
        assert player.inventory.use_item("Iron Sword", player) is False
        assert player.inventory.count("Iron Sword") == 1

    def test_usable_consumables_lists_only_consumables(self):
        inv = Inventory()
        inv.add_item(SWORD)
        inv.add_item(POTION)
        inv.add_item(ETHER)
        assert [s.item.name for s in inv.usable_consumables()] == ["Health Potion", "Mana Potion"]


class TestEquipmentSlots:
    def test_equip_swaps_previous_back_into_bag(self):
        inv = Inventory()
        better = Equipment(id="steel_sword", name="Steel Sword", slot=EquipmentSlot.WEAPON, attack_bonus=12)
        inv.add_item(SWORD)
        inv.add_item(better)
        inv.equip(SWORD)
        previous = inv.equip(better)
        assert previous is not None and previous.name == "Iron Sword"
        assert inv.weapon.name == "Steel Sword"
        assert inv.count("Iron Sword") == 1

    def test_swap_refused_when_replaced_item_has_no_room(self):
        old = Equipment(id="old_sword", name="Old Sword", slot=EquipmentSlot.WEAPON, attack_bonus=2)
        new = Equipment(id="new_sword", name="New Sword", slot=EquipmentSlot.WEAPON, attack_bonus=6)
        inv = Inventory(max_slots=2)
        inv.add_item(old)
        inv.equip(old)
        inv.add_item(new, 2)
        inv.add_item(POTION)
        assert inv.equip(new) is None
        assert inv.weapon.name == "Old Sword"
        assert inv.count("New Sword") == 2
        assert [s.item.name for s in inv.stacks] == ["New Sword", "Health Potion"]

    def test_swap_allowed_when_last_one_frees_slot(self):
        old = Equipment(id="old_sword", name="Old Sword", slot=EquipmentSlot.WEAPON, attack_bonus=2)
        inv = Inventory(max_slots=2)
        inv.add_item(old)
        inv.equip(old)
        inv.add_item(SWORD)
        inv.add_item(POTION)
        previous = inv.equip(SWORD)
        assert previous is not None and previous.name == "Old Sword"
        assert inv.weapon.name == "Iron Sword"
        assert inv.count("Old Sword") == 1

    def test_unequip_refused_when_full(self):
        inv = Inventory(max_slots=1)
        inv.add_item(SWORD)
        inv.equip(SWORD)
        inv.add_item(POTION)
        assert inv.unequip(EquipmentSlot.WEAPON) is None
        assert inv.weapon is not None

    def test_unequip_empty_slot(self):
        assert Inventory().unequip(EquipmentSlot.ARMOR) is None

    def test_total_bonus(self):
        inv = Inventory()
        inv.add_item(SWORD)
        inv.add_item(CHARM)
        inv.equip(SWORD)
        inv.equip(CHARM)
        bonus = inv.total_bonus()
        assert (bonus.attack, bonus.defense, bonus.hp) == (8, 0, 5)


class TestItemUnion:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(Item)
        item = adapter.validate_python({
            "kind": "consumable", "id": "x", "name": "X",
            "effects": [{"kind": "heal_mana", "amount": 5}],
        })
        assert isinstance(item, Consumable)
        assert isinstance(item.effects[0], HealMana)
        assert isinstance(adapter.validate_python({"kind": "equipment", "id": "y", "name": "Y"}), Equipment)

    def test_describe_effects(self):
        elixir = Consumable(
            id="elixir", name="Elixir",
            effects=[HealHp(amount=50, percent=True), HealMana(amount=30)],
        )
        assert elixir.describe_effects() == "HP +50%, Mana +30"
