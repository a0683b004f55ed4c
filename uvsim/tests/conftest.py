"""
Pytest fixtures for uvsim tests.
"""

import random

import pytest

from ..engine_core.card import Card, CardType, create_card
from ..engine_core.game import GameConfig, GameEngine
from ..engine_core.player import Player
from ..cards.demo import create_demo_game


def foundation(card_id: str, check: int = 3) -> Card:
    return create_card(CardType.FOUNDATION, id=card_id, name=f"Foundation {card_id}", check=check)


def attack(card_id: str, check: int = 3, difficulty: int = 3, speed: int = 4, damage: int = 3) -> Card:
    return create_card(
        CardType.ATTACK,
        id=card_id,
        name=f"Attack {card_id}",
        check=check,
        difficulty=difficulty,
        block_zone="mid",
        speed=speed,
        damage=damage,
        zones=["high", "mid"],
    )


def character(card_id: str = "hero", health: int = 20, hand_size: int = 6) -> Card:
    return create_card(
        CardType.CHARACTER,
        id=card_id,
        name=card_id.title(),
        block_zone="mid",
        health=health,
        hand_size=hand_size,
    )


@pytest.fixture
def make_foundation():
    """Factory for foundations: make_foundation("f1", check=4)."""
    return foundation


@pytest.fixture
def make_attack():
    """Factory for attacks: make_attack("a1", difficulty=4)."""
    return attack


@pytest.fixture
def make_character():
    return character


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def player(rng) -> Player:
    """A player with a character and an empty deck."""
    p = Player(1, "Alice", rng=rng)
    p.set_character(character())
    return p


@pytest.fixture
def stacked_player(player) -> Player:
    """
    A player whose deck holds known check values, top first.

    Cards are added without shuffling so draw order is deterministic.
    """
    for i, check in enumerate([3, 4, 2, 5, 1]):
        card = foundation(f"deck-{i}", check=check)
        card.controller_id = player.id
        player.deck.add(card)
    return player


@pytest.fixture
def setup_engine() -> GameEngine:
    """Demo game, set up but not started."""
    return create_demo_game(random_seed=42)


@pytest.fixture
def engine(setup_engine) -> GameEngine:
    """Demo game, started: turn 1, Review, player 1 active."""
    setup_engine.start_game()
    return setup_engine


@pytest.fixture
def ready_engine(engine) -> GameEngine:
    """Demo game processed into player 1's Ready phase."""
    engine.process_turn()  # Review -> Ready
    engine.process_turn()  # Ready cards
    return engine


@pytest.fixture
def small_engine() -> GameEngine:
    """Started game with tiny hand-built decks and 5-card hands."""
    engine = GameEngine(GameConfig(player1_name="Alice", player2_name="Bob", random_seed=7))
    for player_id in (1, 2):
        deck = [foundation(f"p{player_id}-f{i}", check=2 + i % 4) for i in range(8)]
        deck += [attack(f"p{player_id}-a{i}") for i in range(4)]
        engine.setup_player(player_id, character(f"hero{player_id}", hand_size=5), deck)
    engine.start_game()
    return engine
