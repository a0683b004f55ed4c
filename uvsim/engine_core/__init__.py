"""
Engine Core - Card model, zones, turn flow and check resolution.

The engine is the runtime that:
1. Models card instances and the zones they move between
2. Drives the Review -> Ready -> Combat -> End turn cycle
3. Resolves checks (reveal vs difficulty, foundation commitment)
4. Exposes player actions through GameEngine
"""

from .errors import (
    EngineError,
    GameAlreadyStartedError,
    UnknownPlayerError,
    ZoneInvariantError,
    InvalidCardError,
)
from .card import (
    Card,
    CardData,
    CardType,
    Symbol,
    BlockZone,
    ZoneName,
    Vitals,
    AttackProfile,
    create_card,
)
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
from .player import Player, DEFAULT_HAND_SIZE
from .phases import (
    GamePhase,
    TurnStep,
    GameState,
    TurnManager,
    AttackState,
    CombatManager,
)
from .checks import (
    CheckOutcome,
    CheckResult,
    evaluate_check,
    minimum_commitment,
    progressive_difficulty_for,
    place_in_card_pool,
    reveal_check,
    commit_to_check,
    perform_check,
    mill,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .game import GameEngine, GameConfig, GameStatus, PendingCheck

__all__ = [
    "EngineError",
    "GameAlreadyStartedError",
    "UnknownPlayerError",
    "ZoneInvariantError",
    "InvalidCardError",
    "Card",
    "CardData",
    "CardType",
    "Symbol",
    "BlockZone",
    "ZoneName",
    "Vitals",
    "AttackProfile",
    "create_card",
    "CardZone",
    "Deck",
    "Hand",
    "DiscardPile",
    "CardPool",
    "StagingArea",
    "PlayArea",
    "RemovedZone",
    "Player",
    "DEFAULT_HAND_SIZE",
    "GamePhase",
    "TurnStep",
    "GameState",
    "TurnManager",
    "AttackState",
    "CombatManager",
    "CheckOutcome",
    "CheckResult",
    "evaluate_check",
    "minimum_commitment",
    "progressive_difficulty_for",
    "place_in_card_pool",
    "reveal_check",
    "commit_to_check",
    "perform_check",
    "mill",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "GameEngine",
    "GameConfig",
    "GameStatus",
    "PendingCheck",
]
