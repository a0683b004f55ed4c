"""
Tests for the card model.

Tests:
- Variant construction and validation
- Difficulty and reset behaviour
- Health and stamina pools
"""

import pytest
from pydantic import ValidationError

from ..engine_core.card import (
    BlockZone,
    Card,
    CardData,
    CardType,
    Symbol,
    Vitals,
    ZoneName,
    create_card,
)
from ..engine_core.errors import InvalidCardError


class TestCardConstruction:
    """Tests for building cards from attributes."""

    def test_foundation_defaults(self, make_foundation):
        """A foundation starts in the deck with no payloads."""
        card = make_foundation("f1", check=4)

        assert card.card_type == CardType.FOUNDATION
        assert card.check == 4
        assert card.difficulty == 0
        assert card.zone == ZoneName.DECK
        assert not card.committed
        assert card.vitals is None
        assert card.attack is None

    def test_character_gets_vitals(self, make_character):
        """Characters carry a full health pool and a hand size."""
        card = make_character(health=25, hand_size=7)

        assert card.vitals.maximum == 25
        assert card.vitals.current == 25
        assert card.hand_size == 7

    def test_backup_gets_stamina(self):
        """Backups carry a stamina pool."""
        card = create_card(CardType.BACKUP, id="b1", name="Backup", stamina=4)

        assert card.vitals.current == 4
        assert not card.is_destroyed()

    def test_attack_profile(self, make_attack):
        """Attacks carry speed, damage and zones."""
        card = make_attack("a1", speed=5, damage=4)

        assert card.attack.speed == 5
        assert card.attack.damage == 4
        assert card.attack.current_zones == ["high", "mid"]

    def test_symbols_and_keywords(self):
        """Symbol names are parsed into the Symbol enum."""
        card = create_card(
            CardType.ASSET, id="as1", name="Asset",
            symbols=["fire", "chaos"], keywords=["Ally"],
        )

        assert card.symbols == frozenset({Symbol.FIRE, Symbol.CHAOS})
        assert "Ally" in card.keywords

    def test_character_without_health_rejected(self):
        """A character record needs health."""
        with pytest.raises(ValidationError):
            create_card(CardType.CHARACTER, id="c", name="C", hand_size=6)

    def test_attack_without_speed_rejected(self):
        """An attack record needs speed."""
        with pytest.raises(ValidationError):
            create_card(CardType.ATTACK, id="a", name="A", damage=3)

    def test_unknown_card_type_rejected(self):
        """Card types outside the closed set fail validation."""
        with pytest.raises(ValidationError):
            create_card("spell", id="x", name="X")

    def test_printed_data_is_frozen(self, make_foundation):
        """Printed attributes cannot be reassigned."""
        card = make_foundation("f1")
        with pytest.raises(ValidationError):
            card.data.check = 9

    def test_cards_compare_by_identity(self, make_foundation):
        """Two printings with the same id are still different cards."""
        a = make_foundation("same")
        b = make_foundation("same")

        assert a != b
        assert a == a

    def test_from_record(self):
        """A flat record builds a card."""
        card = Card.from_record({"id": "f9", "name": "Nine", "card_type": "foundation", "check": 5})

        assert isinstance(card.data, CardData)
        assert card.check == 5


class TestDifficulty:
    """Tests for difficulty and reset."""

    def test_difficulty_includes_progressive(self, make_attack):
        """Difficulty is current difficulty plus progressive difficulty."""
        card = make_attack("a1", difficulty=4)
        card.progressive_difficulty = 2

        assert card.base_difficulty == 4
        assert card.difficulty == 6

    def test_reset_restores_printed_state(self, make_attack):
        """reset() undoes every runtime modification."""
        card = make_attack("a1", difficulty=4)
        card.commit()
        card.progressive_difficulty = 3
        card.current_difficulty = 1
        card.current_block_zone = BlockZone.HIGH
        card.attack.add_zone("low")

        card.reset()

        assert not card.committed
        assert card.progressive_difficulty == 0
        assert card.difficulty == 4
        assert card.current_block_zone == BlockZone.MID
        assert card.attack.current_zones == ["high", "mid"]

    def test_commit_uncommit(self, make_foundation):
        """commit() and uncommit() toggle the flag."""
        card = make_foundation("f1")
        card.commit()
        assert card.committed
        card.uncommit()
        assert not card.committed

    def test_can_block(self, make_attack, make_foundation):
        """Only cards with a block zone can block."""
        assert make_attack("a1").can_block()
        assert not make_foundation("f1").can_block()


class TestAttackZones:
    """Tests for attack zone edits."""

    def test_add_and_remove(self, make_attack):
        """Zones are lowercased and never duplicated."""
        profile = make_attack("a1").attack
        profile.add_zone("LOW")
        profile.add_zone("low")
        assert profile.current_zones == ["high", "mid", "low"]

        profile.remove_zone("high")
        assert not profile.has_zone("high")

    def test_set_zones(self, make_attack):
        """set_zones() replaces the zones until reset."""
        profile = make_attack("a1").attack
        profile.set_zones(["Low"])
        assert profile.current_zones == ["low"]
        profile.reset_zones()
        assert profile.current_zones == ["high", "mid"]


class TestVitals:
    """Tests for health and stamina."""

    def test_damage_clamps_at_zero(self):
        """Health never drops below zero."""
        vitals = Vitals(maximum=5)
        vitals.take_damage(9)
        assert vitals.current == 0
        assert vitals.depleted

    def test_heal_clamps_at_maximum(self):
        """Healing never exceeds the maximum."""
        vitals = Vitals(maximum=5)
        vitals.take_damage(3)
        vitals.heal(10)
        assert vitals.current == 5

    def test_character_defeat(self, make_character):
        """A character at zero health is defeated."""
        card = make_character(health=3)
        card.take_damage(3)
        assert card.is_defeated()

    def test_damage_on_foundation_raises(self, make_foundation):
        """Cards without vitals cannot take damage."""
        with pytest.raises(InvalidCardError):
            make_foundation("f1").take_damage(1)

    def test_hand_size_on_non_character_raises(self, make_foundation):
        """Only characters have a hand size."""
        with pytest.raises(InvalidCardError):
            make_foundation("f1").hand_size
