"""
Check Resolution - Reveal-vs-difficulty checks.

Two flows exist:

Playing a card (canonical):
    1. The card goes into the card pool. Its slot index is its progressive
       difficulty, so required difficulty = difficulty + slot.
    2. reveal_check() flips the top of the deck to the discard pile.
       Its printed check value is V.
    3. V >= required passes. Otherwise each uncommitted foundation in
       play can be committed for +1; commit_to_check() commits at least
       required - V of them, or nothing if that many are not available.

Raw resource check (perform_check):
    Cards are revealed into the card pool one at a time, summing check
    values, until the sum reaches the difficulty or the deck runs out.
    Foundations play no part.

Neither flow reshuffles the discard pile into an empty deck.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

from .card import Card
from .zones import CardPool

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)


class CheckOutcome(str, Enum):
    PASS = "pass"
    PASS_WITH_COMMITMENT = "pass_with_commitment"
    FAIL = "fail"


@dataclass
class CheckResult:
    """
    Result of a check.

    total and success are derived, so committing foundations later
    updates them in place.
    """
    required: int
    revealed_cards: list[Card] = field(default_factory=list)
    revealed_value: int = 0
    foundations_committed: int = 0
    deck_empty: bool = False

    @property
    def revealed_card(self) -> Card | None:
        return self.revealed_cards[0] if self.revealed_cards else None

    @property
    def total(self) -> int:
        return self.revealed_value + self.foundations_committed

    @property
    def success(self) -> bool:
        return self.total >= self.required

    @property
    def foundations_needed(self) -> int:
        return max(0, self.required - self.total)

    def can_pass_with(self, available: int) -> bool:
        if self.success:
            return True
        if self.deck_empty:
            return False
        return self.foundations_needed <= available

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "total": self.total,
            "required": self.required,
            "revealed_value": self.revealed_value,
            "revealed_card_ids": [c.id for c in self.revealed_cards],
            "foundations_committed": self.foundations_committed,
            "foundations_needed": self.foundations_needed,
            "deck_empty": self.deck_empty,
        }


def minimum_commitment(required: int, revealed_value: int) -> int:
    """Foundations needed to pass: max(0, required - revealed_value)."""
    return max(0, required - revealed_value)


def evaluate_check(required: int, revealed_value: int, available: int) -> CheckOutcome:
    """Classify a single-reveal check given the uncommitted foundations available."""
    if revealed_value >= required:
        return CheckOutcome.PASS
    if minimum_commitment(required, revealed_value) <= available:
        return CheckOutcome.PASS_WITH_COMMITMENT
    return CheckOutcome.FAIL


def progressive_difficulty_for(pool: CardPool) -> int:
    """Progressive difficulty of the next card placed: one per card already there."""
    return pool.count()


def place_in_card_pool(player: Player, card: Card) -> int | None:
    """
    Play a card from hand into the card pool.

    Returns the required difficulty, or None if the card is not in hand.
    """
    slot = progressive_difficulty_for(player.card_pool)
    if not player.move_card(card, player.hand, player.card_pool):
        return None
    card.progressive_difficulty = slot
    logger.debug(
        "%s placed in slot %d: difficulty %d + %d",
        card.name, slot, card.current_difficulty, slot,
    )
    return card.difficulty


def _top_card(player: Player) -> Card | None:
    top = player.deck.peek_top(1)
    return top[0] if top else None


def reveal_check(player: Player, required: int) -> CheckResult:
    """Reveal the top card of the deck to the discard pile and compare its check value."""
    result = CheckResult(required=required)
    card = _top_card(player)
    if card is None:
        result.deck_empty = True
        logger.debug("Player %d: check against %d with an empty deck", player.id, required)
        return result

    player.move_card(card, player.deck, player.discard)
    result.revealed_cards.append(card)
    result.revealed_value = card.check
    logger.debug(
        "Player %d: revealed %s (check %d) against %d",
        player.id, card.name, card.check, required,
    )
    return result


def commit_to_check(player: Player, result: CheckResult, count: int | None = None) -> CheckResult:
    """
    Commit foundations to cover a failed check.

    count defaults to the minimum needed. The commitment is refused, and the
    result returned unchanged, when the check already passed, the deck was
    empty, count is below the shortfall, or count exceeds the uncommitted
    foundations in play.
    """
    if result.success or result.deck_empty:
        return result

    needed = result.foundations_needed
    available = player.play_area.get_uncommitted_foundations()
    if count is None:
        count = needed
    if count < needed or count > len(available):
        logger.debug(
            "Player %d: cannot commit %d foundations (needed %d, available %d)",
            player.id, count, needed, len(available),
        )
        return result

    for foundation in available[:count]:
        foundation.commit()
    result.foundations_committed += count
    return result


def perform_check(player: Player, difficulty: int) -> CheckResult:
    """Reveal cards into the card pool until their check values reach difficulty."""
    result = CheckResult(required=difficulty)
    while result.revealed_value < difficulty:
        card = _top_card(player)
        if card is None:
            result.deck_empty = True
            break
        player.move_card(card, player.deck, player.card_pool)
        result.revealed_cards.append(card)
        result.revealed_value += card.check
    return result


def mill(player: Player, count: int) -> list[Card]:
    """Move up to count cards from the top of the deck to the discard pile."""
    milled = []
    for _ in range(count):
        card = _top_card(player)
        if card is None:
            break
        player.move_card(card, player.deck, player.discard)
        milled.append(card)
    return milled
