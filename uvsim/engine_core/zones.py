"""
Zones - Every area a card can occupy during play.

Zones are plain containers. They never touch card.zone: keeping that field
consistent is the job of Player, which is the only object that sees both
ends of a move.
"""

from __future__ import annotations
import random
from typing import Iterator

from .card import Card, CardType, ZoneName
from .errors import ZoneInvariantError


class CardZone:
    """Base container for cards."""

    kind: ZoneName = ZoneName.DECK

    def __init__(self, name: str | None = None):
        self.name = name or self.kind.value
        self._cards: list[Card] = []

    def _check_absent(self, card: Card) -> None:
        if card in self._cards:
            raise ZoneInvariantError(f"{card.id} is already in {self.name}")

    def add(self, card: Card) -> None:
        self._check_absent(card)
        self._cards.append(card)

    def remove(self, card: Card) -> bool:
        """Remove a card. Returns False if it was not here."""
        try:
            self._cards.remove(card)
        except ValueError:
            return False
        return True

    def remove_by_id(self, card_id: str) -> Card | None:
        card = self.find(card_id)
        if card is not None:
            self._cards.remove(card)
        return card

    def find(self, card_id: str) -> Card | None:
        for card in self._cards:
            if card.id == card_id:
                return card
        return None

    def count(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def contains(self, card: Card) -> bool:
        return card in self._cards

    def clear(self) -> None:
        self._cards = []

    def get_cards(self) -> tuple[Card, ...]:
        """Snapshot of the zone contents."""
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(tuple(self._cards))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.count()} cards)"


class Deck(CardZone):
    """
    A player's deck. Index 0 is the top.

    add() and add_to_bottom() put cards under the deck.
    """

    kind = ZoneName.DECK

    def __init__(self, rng: random.Random | None = None):
        super().__init__()
        self._rng = rng or random.Random()

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self) -> Card | None:
        """Take the top card, or None if the deck is empty."""
        if not self._cards:
            return None
        return self._cards.pop(0)

    def draw_multiple(self, count: int) -> list[Card]:
        drawn = []
        for _ in range(count):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return drawn

    def add_to_top(self, card: Card) -> None:
        self._check_absent(card)
        self._cards.insert(0, card)

    def add_to_bottom(self, card: Card) -> None:
        self.add(card)

    def peek_top(self, count: int = 1) -> tuple[Card, ...]:
        return tuple(self._cards[:count])


class Hand(CardZone):
    """Cards the player can currently play."""

    kind = ZoneName.HAND

    def find_card(self, card_id: str) -> Card | None:
        return self.find(card_id)

    def get_playable_cards(self) -> tuple[Card, ...]:
        return self.get_cards()


class DiscardPile(CardZone):
    """Discard pile. Index 0 is the top; add() pushes onto the top."""

    kind = ZoneName.DISCARD

    def add(self, card: Card) -> None:
        self.add_to_top(card)

    def add_to_top(self, card: Card) -> None:
        self._check_absent(card)
        self._cards.insert(0, card)

    def peek_top(self) -> Card | None:
        return self._cards[0] if self._cards else None

    def peek_top_n(self, count: int) -> tuple[Card, ...]:
        return tuple(self._cards[:count])


class CardPool(CardZone):
    """
    Cards played into the pool, in placement order.

    A card's slot index is its progressive difficulty.
    """

    kind = ZoneName.CARD_POOL

    def get_total_control(self) -> int:
        """Sum of printed check values (not difficulty)."""
        return sum(card.check for card in self._cards)

    def index_of(self, card: Card) -> int | None:
        try:
            return self._cards.index(card)
        except ValueError:
            return None


class StagingArea(CardZone):
    """Cards being played or mid-resolution."""

    kind = ZoneName.STAGING_AREA


class PlayArea(CardZone):
    """Foundations and assets in play."""

    kind = ZoneName.IN_PLAY

    def get_committed_cards(self) -> tuple[Card, ...]:
        return tuple(c for c in self._cards if c.committed)

    def get_uncommitted_cards(self) -> tuple[Card, ...]:
        return tuple(c for c in self._cards if not c.committed)

    def get_foundations(self) -> tuple[Card, ...]:
        return tuple(c for c in self._cards if c.card_type == CardType.FOUNDATION)

    def get_uncommitted_foundations(self) -> tuple[Card, ...]:
        return tuple(c for c in self.get_foundations() if not c.committed)

    def get_assets(self) -> tuple[Card, ...]:
        return tuple(c for c in self._cards if c.card_type == CardType.ASSET)

    def ready_all(self) -> None:
        """Reset every card in play. The only bulk reset entry point."""
        for card in self._cards:
            card.reset()

    def commit_card(self, card: Card) -> bool:
        if self.contains(card) and not card.committed:
            card.commit()
            return True
        return False


class RemovedZone(CardZone):
    """Cards removed from the game. Terminal."""

    kind = ZoneName.REMOVED
