"""
Demo cards - Two characters and their practice decks.

Each deck is 40 foundations (check 2-5) and 20 attacks. Foundation check
values are drawn from the rng passed in, so a seeded rng gives the same
decks every time.
"""

from __future__ import annotations
import random

from ..engine_core.card import Card, CardType, create_card
from ..engine_core.game import GameConfig, GameEngine

FOUNDATIONS_PER_DECK = 40
ATTACKS_PER_DECK = 20


def create_ryu() -> Card:
    return create_card(
        CardType.CHARACTER,
        id="ryu",
        name="Ryu",
        check=6,
        difficulty=0,
        block_zone="mid",
        symbols=["good", "order"],
        keywords=["Form"],
        text="Legendary martial artist seeking the ultimate challenge",
        unique=True,
        form=True,
        hand_size=6,
        health=25,
    )


def create_chun_li() -> Card:
    return create_card(
        CardType.CHARACTER,
        id="chunli",
        name="Chun-Li",
        check=6,
        difficulty=0,
        block_zone="mid",
        symbols=["good", "order"],
        keywords=["Form"],
        text="First Lady of Fighting Games",
        unique=True,
        form=True,
        hand_size=6,
        health=23,
    )


# Per-player deck flavour: (foundation name, attack fields)
_DECK_STYLES = {
    1: (
        "Training",
        dict(name="Hadoken", check=3, difficulty=3, keywords=["Ranged"],
             text="Powerful energy projectile", speed=3, damage=3, zones=["high", "mid"]),
    ),
    2: (
        "Focus",
        dict(name="Lightning Kick", check=4, difficulty=2, keywords=["Multiple"],
             text="Rapid kick attack", speed=4, damage=2, zones=["mid", "low"]),
    ),
}


def build_foundation(card_id: str, name: str, check: int) -> Card:
    return create_card(
        CardType.FOUNDATION,
        id=card_id,
        name=name,
        check=check,
        difficulty=0,
        symbols=["order"],
    )


def build_demo_deck(
    player_id: int,
    rng: random.Random | None = None,
    foundations: int = FOUNDATIONS_PER_DECK,
    attacks: int = ATTACKS_PER_DECK,
) -> list[Card]:
    """Build a practice deck with ids unique per card instance."""
    rng = rng or random.Random()
    foundation_name, attack_fields = _DECK_STYLES[1 if player_id == 1 else 2]

    deck = [
        build_foundation(f"p{player_id}-foundation-{i}", f"{foundation_name} {i + 1}", rng.randint(2, 5))
        for i in range(foundations)
    ]
    for i in range(attacks):
        fields = dict(attack_fields)
        fields["name"] = f"{attack_fields['name']} {i + 1}"
        deck.append(create_card(
            CardType.ATTACK,
            id=f"p{player_id}-attack-{i}",
            block_zone="mid",
            symbols=["order"],
            **fields,
        ))
    return deck


def create_demo_game(
    player1_name: str = "Alice",
    player2_name: str = "Bob",
    starting_player: int = 1,
    random_seed: int | None = None,
) -> GameEngine:
    """A game set up with Ryu vs Chun-Li and practice decks, not yet started."""
    engine = GameEngine(GameConfig(
        player1_name=player1_name,
        player2_name=player2_name,
        starting_player=starting_player,
        random_seed=random_seed,
    ))
    deck_rng = random.Random(random_seed)
    engine.setup_player(1, create_ryu(), build_demo_deck(1, deck_rng))
    engine.setup_player(2, create_chun_li(), build_demo_deck(2, deck_rng))
    return engine
