"""
Game Engine - Orchestrates players, turn flow, combat and checks.

Player-facing operations return a success flag (or None / a CheckResult)
and never raise for rule violations. Exceptions are reserved for misuse:
starting a game twice, unknown player ids, corrupt zone contents.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .action import Action, ActionType, ActionResult
from .card import Card, CardType
from .checks import (
    CheckResult,
    place_in_card_pool,
    reveal_check as reveal_top_card,
    commit_to_check as commit_foundations_to_check,
    perform_check as reveal_until,
    mill as mill_cards,
)
from .errors import GameAlreadyStartedError, UnknownPlayerError
from .phases import (
    AttackState,
    CombatManager,
    GamePhase,
    GameState,
    TurnManager,
    TurnStep,
)
from .player import Player

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass
class GameConfig:
    """Per-game settings."""
    player1_name: str = "Player 1"
    player2_name: str = "Player 2"
    starting_player: int = 1
    random_seed: int | None = None

    def __post_init__(self):
        if self.starting_player not in (1, 2):
            raise ValueError(f"starting_player must be 1 or 2, got {self.starting_player}")


@dataclass
class PendingCheck:
    """A card played into the card pool, waiting on its check."""
    player_id: int
    card: Card
    result: CheckResult
    revealed: bool = False


class GameEngine:
    """
    Main game engine for one two-player game.

    Usage:
        engine = GameEngine(GameConfig(player1_name="Alice", player2_name="Bob"))
        engine.setup_player(1, ryu, deck1)
        engine.setup_player(2, chun_li, deck2)
        engine.start_game()

        engine.process_turn()               # Review: discard, draw, advance
        engine.process_turn()               # Ready: ready cards in play
        engine.play_foundation(1, card)
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._rng = random.Random(self.config.random_seed)

        self.player1 = Player(1, self.config.player1_name, rng=self._rng)
        self.player2 = Player(2, self.config.player2_name, rng=self._rng)

        if self.config.starting_player == 1:
            self.turn_manager = TurnManager(self.player1, self.player2)
        else:
            self.turn_manager = TurnManager(self.player2, self.player1)
        self.combat_manager = CombatManager()

        self._status = GameStatus.SETUP
        self._winner: Player | None = None
        self._pending_check: PendingCheck | None = None

    @staticmethod
    def roll_for_first_player(rng: random.Random | None = None) -> int:
        """Random player id (1 or 2) who chooses the turn order."""
        return 1 if (rng or random).random() < 0.5 else 2

    # =========================================================================
    # Queries
    # =========================================================================

    def get_player(self, player_id: int) -> Player:
        if player_id == 1:
            return self.player1
        if player_id == 2:
            return self.player2
        raise UnknownPlayerError(f"No player with id {player_id!r}")

    def get_other_player(self, player_id: int) -> Player:
        return self.get_player(2 if player_id == 1 else 1)

    def get_status(self) -> GameStatus:
        return self._status

    def get_game_state(self) -> GameState:
        return self.turn_manager.get_state()

    def get_winner(self) -> Player | None:
        return self._winner

    def get_active_player(self) -> Player:
        return self.turn_manager.get_active_player()

    def get_opponent(self) -> Player:
        return self.turn_manager.get_opponent()

    def get_current_attack(self) -> AttackState | None:
        return self.combat_manager.get_current_attack()

    def get_pending_check(self) -> PendingCheck | None:
        return self._pending_check

    def _phase(self) -> GamePhase:
        return self.turn_manager.get_current_phase()

    def _in_progress(self) -> bool:
        return self._status == GameStatus.IN_PROGRESS

    # =========================================================================
    # Setup
    # =========================================================================

    def setup_player(self, player_id: int, character: Card, deck_cards: Iterable[Card]) -> None:
        """Assign a character and load the deck. Only valid before start_game()."""
        if self._status != GameStatus.SETUP:
            raise GameAlreadyStartedError("Players can only be set up before the game starts")
        player = self.get_player(player_id)
        player.set_character(character)
        player.setup_game(deck_cards)

    def start_game(self) -> None:
        """Draw opening hands and start turn 1."""
        if self._status != GameStatus.SETUP:
            raise GameAlreadyStartedError("Game has already started")

        self.player1.draw_cards(self.player1.get_hand_size())
        self.player2.draw_cards(self.player2.get_hand_size())

        self._status = GameStatus.IN_PROGRESS
        self.turn_manager.start_turn()
        logger.info(
            "Game started: %s vs %s, %s goes first",
            self.player1.name, self.player2.name, self.get_active_player().name,
        )

    # =========================================================================
    # Turn flow
    # =========================================================================

    def process_turn(self) -> None:
        """
        Run the processing for the current phase.

        Review discards, draws and moves on to Ready. Ready readies cards and
        waits for plays. Combat waits for attacks. End checks win conditions
        and starts the next turn.
        """
        phase = self._phase()
        if phase == GamePhase.REVIEW:
            self.turn_manager.process_review_phase()
            self.turn_manager.advance_phase()
        elif phase == GamePhase.READY:
            self.turn_manager.process_ready_phase()
        elif phase == GamePhase.END:
            self.check_win_conditions()
            if self._in_progress():
                self.turn_manager.advance_phase()

    def advance_phase(self) -> None:
        self.turn_manager.advance_phase()
        if self._phase() == GamePhase.END:
            # Leaving Combat hands the turn over
            self.combat_manager.clear_attack()
            self._pending_check = None

    def end_turn(self) -> None:
        self.turn_manager.end_turn()
        self.combat_manager.clear_attack()
        self._pending_check = None
        self.check_win_conditions()

    def check_win_conditions(self) -> GameStatus:
        """
        Finish the game if a character is defeated.

        Both characters defeated at once is a draw: the game finishes with
        no winner.
        """
        p1_down = self.player1.is_defeated()
        p2_down = self.player2.is_defeated()
        if not (p1_down or p2_down):
            return self._status

        self._status = GameStatus.FINISHED
        if p1_down and p2_down:
            self._winner = None
            logger.warning("Both characters defeated on turn %d: draw", self.turn_manager.get_turn_number())
        else:
            self._winner = self.player2 if p1_down else self.player1
            logger.info("%s wins on turn %d", self._winner.name, self.turn_manager.get_turn_number())
        return self._status

    # =========================================================================
    # Ready phase
    # =========================================================================

    def _play_to_play_area(self, player_id: int, card: Card, card_type: CardType) -> bool:
        player = self.get_player(player_id)
        if not self._in_progress() or self._phase() != GamePhase.READY:
            return False
        # Cards in play are readied before anything is played
        if self.turn_manager.get_current_step() != TurnStep.READY_MAIN:
            return False
        if card.card_type != card_type or not player.hand.contains(card):
            return False
        return player.move_card(card, player.hand, player.play_area)

    def play_foundation(self, player_id: int, card: Card) -> bool:
        return self._play_to_play_area(player_id, card, CardType.FOUNDATION)

    def play_asset(self, player_id: int, card: Card) -> bool:
        return self._play_to_play_area(player_id, card, CardType.ASSET)

    # =========================================================================
    # Combat phase
    # =========================================================================

    def declare_attack(self, attacker_id: int, attack_card: Card) -> bool:
        """
        Stage an attack from hand.

        A second declaration replaces the open attack; there is only one slot.
        """
        attacker = self.get_player(attacker_id)
        defender = self.get_other_player(attacker_id)
        if not self._in_progress() or self._phase() != GamePhase.COMBAT:
            return False
        if attack_card.card_type != CardType.ATTACK:
            return False
        if not attacker.move_card(attack_card, attacker.hand, attacker.staging_area):
            return False

        self.combat_manager.declare_attack(attacker.id, defender.id, attack_card)
        self.turn_manager.set_step(TurnStep.COMBAT_DECLARE_ATTACK)
        return True

    def declare_block(self, defender_id: int, block_card: Card) -> bool:
        defender = self.get_player(defender_id)
        if not self.combat_manager.has_active_attack():
            return False
        if not defender.move_card(block_card, defender.hand, defender.staging_area):
            return False

        self.combat_manager.declare_block(block_card)
        self.turn_manager.set_step(TurnStep.COMBAT_BLOCK)
        return True

    # =========================================================================
    # Checks
    # =========================================================================

    def play_to_card_pool(self, player_id: int, card: Card) -> int | None:
        """
        Play a card from hand into the card pool and open its check.

        Returns the required difficulty, or None if the card is not in hand
        or the game is not in progress. Replaces any pending check.
        """
        player = self.get_player(player_id)
        if not self._in_progress():
            return None
        required = place_in_card_pool(player, card)
        if required is None:
            return None
        self._pending_check = PendingCheck(
            player_id=player_id,
            card=card,
            result=CheckResult(required=required),
        )
        return required

    def reveal_check(self, player_id: int) -> CheckResult | None:
        """Reveal the check card for the pending check."""
        pending = self._pending_check
        if pending is None or pending.player_id != player_id or pending.revealed:
            return None
        pending.result = reveal_top_card(self.get_player(player_id), pending.result.required)
        pending.revealed = True
        return pending.result

    def commit_to_check(self, player_id: int, count: int | None = None) -> CheckResult | None:
        """Commit foundations to the revealed pending check."""
        pending = self._pending_check
        if pending is None or pending.player_id != player_id or not pending.revealed:
            return None
        return commit_foundations_to_check(self.get_player(player_id), pending.result, count)

    def clear_check(self) -> CheckResult | None:
        """Close the pending check and return its final result."""
        pending, self._pending_check = self._pending_check, None
        return pending.result if pending else None

    def perform_check(self, player_id: int, difficulty: int) -> CheckResult:
        """Reveal cards into the card pool until their check values reach difficulty."""
        return reveal_until(self.get_player(player_id), difficulty)

    def mill(self, player_id: int, count: int) -> list[Card]:
        return mill_cards(self.get_player(player_id), count)

    def commit_foundations(self, player_id: int, foundations: Iterable[Card]) -> bool:
        """
        Commit foundations in the player's play area.

        All or nothing: every card must be an uncommitted foundation in play,
        listed once, or no card is committed.
        """
        player = self.get_player(player_id)
        foundations = list(foundations)
        if len({id(f) for f in foundations}) != len(foundations):
            return False
        for foundation in foundations:
            if (
                foundation.card_type != CardType.FOUNDATION
                or not player.play_area.contains(foundation)
                or foundation.committed
            ):
                return False

        for foundation in foundations:
            player.play_area.commit_card(foundation)
        return True

    # =========================================================================
    # Action dispatch
    # =========================================================================

    def apply(self, action: Action) -> ActionResult:
        """Apply an id-addressed action."""
        handler = self._get_handler(action.action_type)
        if handler is None:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )
        return handler(action)

    def _get_handler(self, action_type: ActionType) -> Callable[[Action], ActionResult] | None:
        handlers = {
            ActionType.PLAY_FOUNDATION: self._handle_play_from_hand,
            ActionType.PLAY_ASSET: self._handle_play_from_hand,
            ActionType.DECLARE_ATTACK: self._handle_play_from_hand,
            ActionType.DECLARE_BLOCK: self._handle_play_from_hand,
            ActionType.PLAY_TO_CARD_POOL: self._handle_play_to_card_pool,
            ActionType.REVEAL_CHECK: self._handle_reveal_check,
            ActionType.COMMIT_TO_CHECK: self._handle_commit_to_check,
            ActionType.PERFORM_CHECK: self._handle_perform_check,
            ActionType.COMMIT_FOUNDATIONS: self._handle_commit_foundations,
            ActionType.MILL: self._handle_mill,
            ActionType.PROCESS_TURN: self._handle_turn_flow,
            ActionType.ADVANCE_PHASE: self._handle_turn_flow,
            ActionType.END_TURN: self._handle_turn_flow,
        }
        return handlers.get(action_type)

    def _find_in_hand(self, action: Action) -> tuple[Player, Card | None]:
        player = self.get_player(action.payload.player_id)
        return player, player.hand.find(action.payload.card_id or "")

    def _handle_play_from_hand(self, action: Action) -> ActionResult:
        player, card = self._find_in_hand(action)
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in {player.name}'s hand",
                error_code="CARD_NOT_FOUND",
            )

        operation = {
            ActionType.PLAY_FOUNDATION: self.play_foundation,
            ActionType.PLAY_ASSET: self.play_asset,
            ActionType.DECLARE_ATTACK: self.declare_attack,
            ActionType.DECLARE_BLOCK: self.declare_block,
        }[action.action_type]
        if not operation(player.id, card):
            return ActionResult.failure(
                f"Cannot {action.action_type.value.replace('_', ' ')} {card.name} "
                f"during {self._phase().value}"
            )
        return ActionResult.ok([f"{player.name}: {action.action_type.value} {card.name}"])

    def _handle_play_to_card_pool(self, action: Action) -> ActionResult:
        player, card = self._find_in_hand(action)
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in {player.name}'s hand",
                error_code="CARD_NOT_FOUND",
            )
        required = self.play_to_card_pool(player.id, card)
        if required is None:
            return ActionResult.failure(f"Cannot play {card.name} to the card pool")
        return ActionResult.ok(
            [f"{player.name} played {card.name} to the card pool (difficulty {required})"],
            check=self._pending_check.result.to_dict(),
        )

    def _handle_reveal_check(self, action: Action) -> ActionResult:
        result = self.reveal_check(action.payload.player_id)
        if result is None:
            return ActionResult.failure("No check waiting for a reveal")
        return ActionResult.ok(check=result.to_dict())

    def _handle_commit_to_check(self, action: Action) -> ActionResult:
        pending = self._pending_check
        if (
            pending is not None
            and pending.player_id == action.payload.player_id
            and pending.revealed
            and pending.result.success
        ):
            return ActionResult.failure("Check already passed; nothing to commit")
        before = pending.result.foundations_committed if pending else 0
        result = self.commit_to_check(action.payload.player_id, action.payload.count)
        if result is None:
            return ActionResult.failure("No revealed check to commit foundations to")
        if result.foundations_committed == before:
            return ActionResult.failure(
                f"Cannot commit: {result.foundations_needed} foundation(s) needed",
                error_code="INSUFFICIENT_RESOURCES",
            )
        return ActionResult.ok(check=result.to_dict())

    def _handle_perform_check(self, action: Action) -> ActionResult:
        result = self.perform_check(action.payload.player_id, action.payload.difficulty or 0)
        return ActionResult.ok(check=result.to_dict())

    def _handle_commit_foundations(self, action: Action) -> ActionResult:
        player = self.get_player(action.payload.player_id)
        cards = [player.play_area.find(card_id) for card_id in action.payload.card_ids]
        if any(card is None for card in cards):
            return ActionResult.failure("Foundation not in play", error_code="CARD_NOT_FOUND")
        if not self.commit_foundations(player.id, cards):
            return ActionResult.failure("Foundations already committed or not foundations")
        return ActionResult.ok([f"{player.name} committed {len(cards)} foundation(s)"])

    def _handle_mill(self, action: Action) -> ActionResult:
        milled = self.mill(action.payload.player_id, action.payload.count or 0)
        return ActionResult.ok([f"Milled {len(milled)} card(s)"])

    def _handle_turn_flow(self, action: Action) -> ActionResult:
        if not self._in_progress():
            return ActionResult.failure(f"Game is {self._status.value}")
        if action.action_type == ActionType.PROCESS_TURN:
            self.process_turn()
        elif action.action_type == ActionType.ADVANCE_PHASE:
            self.advance_phase()
        else:
            self.end_turn()
        state = self.get_game_state()
        return ActionResult.ok([f"Turn {state.turn_number}: {state.current_phase.value}"])
