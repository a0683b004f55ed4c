"""
Tests for zones.

Tests:
- Membership and duplicate protection
- Deck order, drawing and shuffling
- Discard pile, card pool and play area helpers
"""

import random
from collections import Counter

import pytest

from ..engine_core.card import CardType, create_card
from ..engine_core.errors import ZoneInvariantError
from ..engine_core.zones import CardPool, Deck, DiscardPile, Hand, PlayArea


class TestCardZone:
    """Tests for the shared container behaviour."""

    def test_add_remove(self, make_foundation):
        """Added cards can be found and removed."""
        hand = Hand()
        card = make_foundation("f1")
        hand.add(card)

        assert hand.contains(card)
        assert hand.count() == 1
        assert hand.remove(card)
        assert hand.is_empty()

    def test_remove_missing_returns_false(self, make_foundation):
        """Removing an absent card reports False."""
        assert not Hand().remove(make_foundation("f1"))

    def test_duplicate_add_raises(self, make_foundation):
        """A card cannot sit in a zone twice."""
        hand = Hand()
        card = make_foundation("f1")
        hand.add(card)

        with pytest.raises(ZoneInvariantError):
            hand.add(card)

    def test_find_and_remove_by_id(self, make_foundation):
        """Cards are looked up by id."""
        hand = Hand()
        card = make_foundation("f1")
        hand.add(card)

        assert hand.find_card("f1") is card
        assert hand.remove_by_id("f1") is card
        assert hand.find("f1") is None
        assert hand.remove_by_id("f1") is None

    def test_get_cards_is_a_snapshot(self, make_foundation):
        """get_cards() does not change with the zone."""
        hand = Hand()
        hand.add(make_foundation("f1"))
        cards = hand.get_cards()
        hand.clear()

        assert len(cards) == 1
        assert len(hand) == 0


class TestDeck:
    """Tests for deck order and shuffling."""

    def test_top_is_index_zero(self, make_foundation):
        """The first card added is drawn first."""
        deck = Deck()
        first, second = make_foundation("f1"), make_foundation("f2")
        deck.add(first)
        deck.add(second)

        assert deck.peek_top() == (first,)
        assert deck.draw() is first

    def test_add_to_top_and_bottom(self, make_foundation):
        """add_to_top() and add_to_bottom() place cards at either end."""
        deck = Deck()
        middle, top, bottom = (make_foundation(n) for n in ("m", "t", "b"))
        deck.add(middle)
        deck.add_to_top(top)
        deck.add_to_bottom(bottom)

        assert [c.id for c in deck] == ["t", "m", "b"]

    def test_draw_from_empty(self):
        """Drawing from an empty deck gives None."""
        assert Deck().draw() is None

    def test_draw_multiple_stops_when_empty(self, make_foundation):
        """Drawing more than the deck holds draws what is there."""
        deck = Deck()
        for i in range(3):
            deck.add(make_foundation(f"f{i}"))

        drawn = deck.draw_multiple(5)

        assert len(drawn) == 3
        assert deck.is_empty()

    @pytest.mark.parametrize("size", [0, 1, 2, 10, 60])
    def test_shuffle_is_permutation(self, make_foundation, size):
        """Shuffling keeps exactly the same cards."""
        deck = Deck(rng=random.Random(size))
        for i in range(size):
            deck.add(make_foundation(f"f{i}"))
        before = Counter(c.id for c in deck)

        deck.shuffle()

        assert Counter(c.id for c in deck) == before

    def test_seeded_shuffle_is_reproducible(self, make_foundation):
        """The same seed gives the same order."""
        orders = []
        for _ in range(2):
            deck = Deck(rng=random.Random(99))
            for i in range(20):
                deck.add(make_foundation(f"f{i}"))
            deck.shuffle()
            orders.append([c.id for c in deck])

        assert orders[0] == orders[1]


class TestDiscardPile:
    """Tests for discard order."""

    def test_add_pushes_to_top(self, make_foundation):
        """The last card discarded is on top."""
        pile = DiscardPile()
        first, second = make_foundation("f1"), make_foundation("f2")
        pile.add(first)
        pile.add(second)

        assert pile.peek_top() is second
        assert pile.peek_top_n(2) == (second, first)

    def test_peek_empty(self):
        """An empty pile has no top card."""
        assert DiscardPile().peek_top() is None


class TestCardPool:
    """Tests for card pool helpers."""

    def test_total_control_sums_check(self, make_foundation, make_attack):
        """Total control is the sum of printed check values."""
        pool = CardPool()
        pool.add(make_foundation("f1", check=3))
        pool.add(make_attack("a1", check=4, difficulty=6))

        assert pool.get_total_control() == 7

    def test_index_of(self, make_foundation):
        """index_of() gives the placement slot."""
        pool = CardPool()
        cards = [make_foundation(f"f{i}") for i in range(3)]
        for card in cards:
            pool.add(card)

        assert pool.index_of(cards[2]) == 2
        assert pool.index_of(make_foundation("other")) is None


class TestPlayArea:
    """Tests for foundations and readying."""

    def test_uncommitted_foundations(self, make_foundation):
        """Committed foundations are excluded from the available ones."""
        area = PlayArea()
        cards = [make_foundation(f"f{i}") for i in range(3)]
        for card in cards:
            area.add(card)
        area.commit_card(cards[0])

        assert area.get_committed_cards() == (cards[0],)
        assert area.get_uncommitted_foundations() == (cards[1], cards[2])

    def test_commit_card_twice(self, make_foundation):
        """A committed card cannot be committed again."""
        area = PlayArea()
        card = make_foundation("f1")
        area.add(card)

        assert area.commit_card(card)
        assert not area.commit_card(card)

    def test_commit_card_not_in_area(self, make_foundation):
        """Only cards in play can be committed."""
        assert not PlayArea().commit_card(make_foundation("f1"))

    def test_ready_all_resets_every_card(self, make_foundation, make_attack):
        """ready_all() resets committed and difficulty state on every card."""
        area = PlayArea()
        cards = [make_foundation("f1"), make_attack("a1", difficulty=4), make_foundation("f2")]
        for card in cards:
            area.add(card)
        cards[0].commit()
        cards[1].progressive_difficulty = 3
        cards[1].current_difficulty = 9

        area.ready_all()

        for card in cards:
            assert not card.committed
            assert card.progressive_difficulty == 0
            assert card.current_difficulty == card.base_difficulty

    def test_assets(self):
        """Assets are listed apart from foundations."""
        area = PlayArea()
        asset = create_card(CardType.ASSET, id="as1", name="Asset")
        area.add(asset)

        assert area.get_assets() == (asset,)
        assert area.get_foundations() == ()
