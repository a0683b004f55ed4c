"""
API Service - Business logic layer between the API and the engine.

The service:
1. Creates and looks up game sessions
2. Translates requests into engine actions addressed by card id
3. Formats engine state for a presentation layer

This layer is framework-agnostic (the FastAPI app is a thin shell over it).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateGameRequest,
    CardActionRequest,
    PlayerRequest,
    CommitToCheckRequest,
    PerformCheckRequest,
    CommitFoundationsRequest,
    MillRequest,
    # Responses
    GameResponse,
    ActionResponse,
    ErrorResponse,
    # Shared
    AttackInfo,
    CardInfo,
    CheckInfo,
    PlayerInfo,
    TurnInfo,
    ZoneInfo,
    ErrorCode,
)
from ..engine_core.action import Action, ActionResult
from ..engine_core.card import Card, ZoneName
from ..engine_core.checks import CheckResult
from ..engine_core.game import GameEngine, GameStatus
from ..engine_core.player import Player
from ..session import Session, SessionManager

logger = logging.getLogger(__name__)

# Zones whose card identities are not shown
HIDDEN_ZONES = {ZoneName.DECK}


def card_to_info(card: Card) -> CardInfo:
    return CardInfo(
        card_id=card.id,
        name=card.name,
        card_type=card.card_type.value,
        check=card.check,
        difficulty=card.difficulty,
        zone=card.zone.value,
        committed=card.committed,
        progressive_difficulty=card.progressive_difficulty,
        image_url=card.image_url or None,
    )


def check_to_info(result: CheckResult) -> CheckInfo:
    return CheckInfo(**result.to_dict())


def player_to_info(player: Player, engine: GameEngine) -> PlayerInfo:
    zones = []
    for name, zone in player.zones.items():
        cards = [] if name in HIDDEN_ZONES else [card_to_info(c) for c in zone.get_cards()]
        zones.append(ZoneInfo(zone=name.value, card_count=zone.count(), cards=cards))

    return PlayerInfo(
        player_id=player.id,
        name=player.name,
        character=card_to_info(player.character) if player.character else None,
        health=player.get_health(),
        max_health=player.get_max_health(),
        hand_size=player.get_hand_size(),
        momentum=player.momentum,
        available_foundations=player.get_available_foundations(),
        is_active=engine.get_active_player() is player,
        zones=zones,
    )


def turn_to_info(engine: GameEngine) -> TurnInfo:
    state = engine.get_game_state()
    return TurnInfo(
        phase=state.current_phase.value,
        step=state.current_step.value,
        active_player_id=state.active_player_id,
        turn_number=state.turn_number,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        game = service.create_game(CreateGameRequest(player1_name="Alice"))
        service.process_turn(game.session_id)
        service.play_foundation(game.session_id, CardActionRequest(player_id=1, card_id="..."))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    session_max_age: int = 3600

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        self.session_manager.cleanup_stale_sessions(self.session_max_age)
        session = self.session_manager.create_session(
            player1_name=request.player1_name,
            player2_name=request.player2_name,
            starting_player=request.starting_player,
            random_seed=request.random_seed,
            start=request.start,
        )
        return self._session_to_response(session)

    def get_game(self, session_id: str) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def end_game(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def start_game(self, session_id: str) -> GameResponse | ErrorResponse:
        """Start a game created with start=False."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if session.engine.get_status() != GameStatus.SETUP:
            return ErrorResponse(error="Game has already started", error_code=ErrorCode.INVALID_REQUEST)
        session.engine.start_game()
        session.touch()
        return self._session_to_response(session)

    # =========================================================================
    # Actions
    # =========================================================================

    def apply_action(self, session_id: str, action: Action) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.engine.apply(action)
        session.touch()
        if not result.success:
            logger.debug("Session %s: %s refused: %s", session_id, action.action_type.value, result.error)
        return self._result_to_response(session, result)

    def process_turn(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.process_turn())

    def advance_phase(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.advance_phase())

    def end_turn(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.end_turn())

    def play_foundation(self, session_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.play_foundation(request.player_id, request.card_id))

    def play_asset(self, session_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.play_asset(request.player_id, request.card_id))

    def declare_attack(self, session_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.declare_attack(request.player_id, request.card_id))

    def declare_block(self, session_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.declare_block(request.player_id, request.card_id))

    def play_to_card_pool(self, session_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.play_to_card_pool(request.player_id, request.card_id))

    def reveal_check(self, session_id: str, request: PlayerRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.reveal_check(request.player_id))

    def commit_to_check(self, session_id: str, request: CommitToCheckRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.commit_to_check(request.player_id, request.count))

    def perform_check(self, session_id: str, request: PerformCheckRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.perform_check(request.player_id, request.difficulty))

    def commit_foundations(
        self,
        session_id: str,
        request: CommitFoundationsRequest,
    ) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.commit_foundations(request.player_id, request.card_ids))

    def mill(self, session_id: str, request: MillRequest) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.mill(request.player_id, request.count))

    # =========================================================================
    # Formatting
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {session_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> GameResponse:
        engine = session.engine
        attack = engine.get_current_attack()
        pending = engine.get_pending_check()
        winner = engine.get_winner()

        return GameResponse(
            session_id=session.session_id,
            session_state=session.state.value,
            game_status=engine.get_status().value,
            turn=turn_to_info(engine),
            players=[player_to_info(p, engine) for p in (engine.player1, engine.player2)],
            current_attack=AttackInfo(
                attacker_id=attack.attacker_id,
                defender_id=attack.defender_id,
                attack_card_id=attack.attack_card.id,
                block_card_id=attack.block_card.id if attack.block_card else None,
                speed=attack.speed,
                damage=attack.damage,
                resolved=attack.resolved,
            ) if attack else None,
            pending_check=check_to_info(pending.result) if pending else None,
            winner_id=winner.id if winner else None,
        )

    def _result_to_response(self, session: Session, result: ActionResult) -> ActionResponse:
        error_code = None
        if result.error_code:
            try:
                error_code = ErrorCode(result.error_code)
            except ValueError:
                error_code = ErrorCode.INVALID_REQUEST

        return ActionResponse(
            session_id=session.session_id,
            success=result.success,
            error=result.error,
            error_code=error_code,
            state_changes=result.state_changes,
            check=CheckInfo(**result.check) if result.check else None,
            turn=turn_to_info(session.engine),
            game_status=session.engine.get_status().value,
        )
