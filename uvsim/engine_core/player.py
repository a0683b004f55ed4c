"""
Player - One of the two participants.

Owns a character, the seven zones, and the momentum counter. Every
zone-to-zone move goes through the player so card.zone stays in sync
with the container that actually holds the card.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable

from .card import Card, CardType, ZoneName
from .errors import InvalidCardError
from .zones import (
    CardZone,
    Deck,
    Hand,
    DiscardPile,
    CardPool,
    StagingArea,
    PlayArea,
    RemovedZone,
)

logger = logging.getLogger(__name__)

# Hand size used until a character is assigned
DEFAULT_HAND_SIZE = 6


class Player:
    """A player, their zones and resources."""

    def __init__(self, player_id: int, name: str, rng: random.Random | None = None):
        self.id = player_id
        self.name = name
        self.character: Card | None = None

        # Zones
        self.deck = Deck(rng=rng)
        self.hand = Hand()
        self.discard = DiscardPile()
        self.card_pool = CardPool()
        self.staging_area = StagingArea()
        self.play_area = PlayArea()
        self.removed = RemovedZone()

        # Resources
        self.momentum = 0

    @property
    def zones(self) -> dict[ZoneName, CardZone]:
        return {
            ZoneName.DECK: self.deck,
            ZoneName.HAND: self.hand,
            ZoneName.DISCARD: self.discard,
            ZoneName.CARD_POOL: self.card_pool,
            ZoneName.STAGING_AREA: self.staging_area,
            ZoneName.IN_PLAY: self.play_area,
            ZoneName.REMOVED: self.removed,
        }

    def zone_for(self, name: ZoneName | str) -> CardZone:
        """Look up one of the seven zones by name."""
        return self.zones[ZoneName(name)]

    def get_cards(self, name: ZoneName | str) -> tuple[Card, ...]:
        return self.zone_for(name).get_cards()

    # -------------------------------------------------------------------------
    # Character
    # -------------------------------------------------------------------------

    def set_character(self, character: Card) -> None:
        if character.card_type != CardType.CHARACTER:
            raise InvalidCardError(f"{character.name} is not a character")
        self.character = character
        character.controller_id = self.id
        character.zone = ZoneName.CHARACTER

    def get_health(self) -> int:
        return self.character.vitals.current if self.character else 0

    def get_max_health(self) -> int:
        return self.character.vitals.maximum if self.character else 0

    def is_defeated(self) -> bool:
        return self.character.is_defeated() if self.character else False

    def take_damage(self, amount: int) -> None:
        if self.character:
            self.character.take_damage(amount)

    def heal(self, amount: int) -> None:
        if self.character:
            self.character.heal(amount)

    def get_hand_size(self) -> int:
        return self.character.hand_size if self.character else DEFAULT_HAND_SIZE

    # -------------------------------------------------------------------------
    # Momentum
    # -------------------------------------------------------------------------

    def add_momentum(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Momentum amount must be non-negative, got {amount}")
        self.momentum += amount

    def spend_momentum(self, amount: int) -> bool:
        if self.momentum >= amount:
            self.momentum -= amount
            return True
        return False

    # -------------------------------------------------------------------------
    # Card movement
    # -------------------------------------------------------------------------

    def move_card(self, card: Card, from_zone: CardZone, to_zone: CardZone) -> bool:
        """Remove from one zone and add to another. False if the card was not in from_zone."""
        if not from_zone.remove(card):
            return False
        to_zone.add(card)
        card.zone = to_zone.kind
        logger.debug("Player %d: %s %s -> %s", self.id, card.id, from_zone.name, to_zone.name)
        return True

    def draw_cards(self, count: int) -> list[Card]:
        """Draw up to count cards. Stops silently when the deck runs out."""
        drawn = self.deck.draw_multiple(count)
        for card in drawn:
            self.hand.add(card)
            card.zone = ZoneName.HAND
        return drawn

    def draw_to_hand_size(self) -> list[Card]:
        """Top the hand up to hand size. Never discards."""
        to_draw = max(0, self.get_hand_size() - self.hand.count())
        return self.draw_cards(to_draw)

    def discard_card(self, card: Card) -> bool:
        return self.move_card(card, self.hand, self.discard)

    def discard_hand(self) -> None:
        for card in self.hand.get_cards():
            self.move_card(card, self.hand, self.discard)

    def ready_all_cards(self) -> None:
        self.play_area.ready_all()

    def shuffle_discard_into_deck(self) -> None:
        """Put the discard pile under the deck, in discard order, then shuffle."""
        for card in self.discard.get_cards():
            self.discard.remove(card)
            self.deck.add_to_bottom(card)
            card.zone = ZoneName.DECK
        self.deck.shuffle()

    def get_available_foundations(self) -> int:
        return len(self.play_area.get_uncommitted_foundations())

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def setup_game(self, deck_cards: Iterable[Card]) -> None:
        """Load and shuffle the deck. Called once before the game starts."""
        for card in deck_cards:
            card.controller_id = self.id
            self.deck.add(card)
            card.zone = ZoneName.DECK
        self.deck.shuffle()
        self.momentum = 0
        logger.debug("Player %d (%s) deck ready: %d cards", self.id, self.name, self.deck.count())

    def __repr__(self) -> str:
        return f"Player({self.id}, {self.name!r})"
