"""
Tests for check resolution.

Tests:
- Pass rule and minimum commitment
- Progressive difficulty in the card pool
- Reveal / commit flow
- Raw resource checks and milling
"""

import pytest

from ..engine_core.card import ZoneName
from ..engine_core.checks import (
    CheckOutcome,
    CheckResult,
    commit_to_check,
    evaluate_check,
    minimum_commitment,
    mill,
    perform_check,
    place_in_card_pool,
    reveal_check,
)


def put_in_play(player, make_foundation, count):
    for i in range(count):
        card = make_foundation(f"play-{i}")
        player.play_area.add(card)
        card.zone = ZoneName.IN_PLAY


def put_in_hand(player, card):
    player.hand.add(card)
    card.zone = ZoneName.HAND
    return card


class TestPassRule:
    """Pass iff revealed >= required; otherwise commitment covers the gap."""

    @pytest.mark.parametrize("required,revealed,available,expected", [
        (5, 5, 0, CheckOutcome.PASS),
        (5, 7, 0, CheckOutcome.PASS),
        (6, 5, 1, CheckOutcome.PASS_WITH_COMMITMENT),
        (6, 2, 4, CheckOutcome.PASS_WITH_COMMITMENT),
        (6, 2, 3, CheckOutcome.FAIL),
        (3, 0, 0, CheckOutcome.FAIL),
    ])
    def test_evaluate_check(self, required, revealed, available, expected):
        """The outcome follows revealed value and available commitment."""
        assert evaluate_check(required, revealed, available) == expected

    @pytest.mark.parametrize("required,revealed,expected", [
        (6, 5, 1),
        (6, 6, 0),
        (4, 9, 0),
        (7, 0, 7),
    ])
    def test_minimum_commitment(self, required, revealed, expected):
        """The shortfall is never negative."""
        assert minimum_commitment(required, revealed) == expected

    def test_result_derives_total(self):
        """Total and success follow the committed foundations."""
        result = CheckResult(required=6, revealed_value=5)
        assert not result.success
        assert result.foundations_needed == 1

        result.foundations_committed = 1
        assert result.total == 6
        assert result.success
        assert result.foundations_needed == 0

    def test_can_pass_with(self):
        """An empty-deck check can never be passed."""
        assert CheckResult(required=6, revealed_value=4).can_pass_with(2)
        assert not CheckResult(required=6, revealed_value=4).can_pass_with(1)
        assert not CheckResult(required=1, deck_empty=True).can_pass_with(5)


class TestCardPool:
    """Tests for progressive difficulty."""

    def test_kth_card_gets_progressive_k(self, player, make_attack):
        """The k-th card placed in the pool gets progressive difficulty k."""
        cards = [put_in_hand(player, make_attack(f"a{k}", difficulty=4)) for k in range(4)]

        required = [place_in_card_pool(player, card) for card in cards]

        assert [c.progressive_difficulty for c in cards] == [0, 1, 2, 3]
        assert required == [4, 5, 6, 7]
        assert all(c.zone == ZoneName.CARD_POOL for c in cards)

    def test_card_not_in_hand(self, player, make_attack):
        """Only cards in hand can be placed in the pool."""
        assert place_in_card_pool(player, make_attack("a1")) is None
        assert player.card_pool.is_empty()


class TestRevealAndCommit:
    """Tests for the canonical play-a-card flow."""

    def test_reveal_moves_top_card_to_discard(self, stacked_player):
        """The revealed card goes to the discard pile."""
        top = stacked_player.deck.peek_top()[0]

        result = reveal_check(stacked_player, 3)

        assert result.revealed_card is top
        assert result.revealed_value == 3
        assert result.success
        assert stacked_player.discard.peek_top() is top
        assert top.zone == ZoneName.DISCARD

    def test_reveal_empty_deck(self, player):
        """Revealing from an empty deck fails the check."""
        result = reveal_check(player, 2)

        assert result.deck_empty
        assert result.revealed_value == 0
        assert not result.success

    def test_commit_minimum(self, player, make_foundation):
        """By default only the shortfall is committed."""
        put_in_play(player, make_foundation, 3)
        result = CheckResult(required=6, revealed_value=4)

        commit_to_check(player, result)

        assert result.success
        assert result.foundations_committed == 2
        assert player.get_available_foundations() == 1

    def test_commit_more_than_needed(self, player, make_foundation):
        """A player may commit more than needed."""
        put_in_play(player, make_foundation, 3)
        result = CheckResult(required=6, revealed_value=5)

        commit_to_check(player, result, count=3)

        assert result.foundations_committed == 3
        assert result.total == 8

    def test_commit_refused_when_short(self, player, make_foundation):
        """Nothing is committed when the shortfall cannot be covered."""
        put_in_play(player, make_foundation, 1)
        result = CheckResult(required=6, revealed_value=3)

        commit_to_check(player, result)

        assert result.foundations_committed == 0
        assert player.get_available_foundations() == 1

    def test_commit_below_shortfall_refused(self, player, make_foundation):
        """Committing less than the shortfall is refused."""
        put_in_play(player, make_foundation, 5)
        result = CheckResult(required=6, revealed_value=3)

        commit_to_check(player, result, count=2)

        assert result.foundations_committed == 0

    def test_commit_after_pass_is_noop(self, player, make_foundation):
        """A passed check takes no foundations."""
        put_in_play(player, make_foundation, 2)
        result = CheckResult(required=3, revealed_value=3)

        commit_to_check(player, result, count=2)

        assert result.foundations_committed == 0
        assert player.get_available_foundations() == 2

    def test_commit_after_empty_deck_refused(self, player, make_foundation):
        """Foundations cannot rescue an empty-deck check."""
        put_in_play(player, make_foundation, 5)
        result = reveal_check(player, 2)

        commit_to_check(player, result)

        assert result.foundations_committed == 0
        assert not result.success


class TestPerformCheck:
    """Tests for raw resource checks."""

    def test_accumulates_until_difficulty(self, stacked_player):
        """Cards are revealed until their check reaches the difficulty."""
        result = perform_check(stacked_player, 10)

        assert [c.check for c in result.revealed_cards] == [3, 4, 2, 5]
        assert result.total == 14
        assert result.success
        assert stacked_player.deck.count() == 1
        assert stacked_player.card_pool.count() == 4

    def test_runs_out_of_deck(self, stacked_player):
        """Running out of deck fails the check."""
        result = perform_check(stacked_player, 100)

        assert result.deck_empty
        assert result.total == 15
        assert not result.success

    def test_zero_difficulty_reveals_nothing(self, stacked_player):
        """A zero difficulty passes without revealing."""
        result = perform_check(stacked_player, 0)

        assert result.success
        assert result.revealed_cards == []


class TestMill:
    """Tests for milling."""

    def test_mill(self, stacked_player):
        """Milled cards go from the top of the deck to the discard pile."""
        milled = mill(stacked_player, 2)

        assert [c.check for c in milled] == [3, 4]
        assert stacked_player.discard.peek_top() is milled[-1]
        assert stacked_player.deck.count() == 3

    def test_mill_past_empty(self, stacked_player):
        """Milling past the bottom stops at an empty deck."""
        assert len(mill(stacked_player, 9)) == 5
        assert stacked_player.deck.is_empty()
