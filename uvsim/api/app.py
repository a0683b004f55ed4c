"""
FastAPI Application - REST API over game sessions.

Endpoints:
    GET    /api/v1/health                          Service health
    POST   /api/v1/games                           Create a demo game
    GET    /api/v1/games                           List active games
    GET    /api/v1/games/{id}                      Full game view
    DELETE /api/v1/games/{id}                      End a game
    POST   /api/v1/games/{id}/start                Start a game created with start=false

    POST   /api/v1/games/{id}/turn/process         Run the current phase
    POST   /api/v1/games/{id}/turn/advance         Move to the next phase
    POST   /api/v1/games/{id}/turn/end             End the active player's turn

    POST   /api/v1/games/{id}/foundations          Play a foundation (Ready)
    POST   /api/v1/games/{id}/assets               Play an asset (Ready)
    POST   /api/v1/games/{id}/attacks              Declare an attack (Combat)
    POST   /api/v1/games/{id}/blocks               Declare a block
    POST   /api/v1/games/{id}/card-pool            Play a card into the card pool
    POST   /api/v1/games/{id}/check/reveal         Reveal the pending check
    POST   /api/v1/games/{id}/check/commit         Commit foundations to it
    POST   /api/v1/games/{id}/checks               Raw check against a difficulty
    POST   /api/v1/games/{id}/foundations/commit   Commit foundations by id
    POST   /api/v1/games/{id}/mill                 Mill cards from the deck

Rule violations come back as 200 with success=false and an error_code.
Only a missing game is an HTTP error (404).
"""

from typing import Union
import logging
import os

from .. import __version__

# Environment configuration
UVSIM_ENV = os.getenv("UVSIM_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
UVSIM_SESSION_MAX_AGE = int(os.getenv("UVSIM_SESSION_MAX_AGE", "3600"))

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateGameRequest,
        PlayerRequest,
        CardActionRequest,
        CommitToCheckRequest,
        PerformCheckRequest,
        CommitFoundationsRequest,
        MillRequest,
        # Response models
        GameResponse,
        ActionResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Universus Simulator API",
        description="""
Two-player Universus game engine.

## Driving a game

1. `POST /games` creates a game with demo decks and starts it
2. `POST /turn/process` runs Review (discard, draw) and then Ready
3. Play cards by id from the acting player's hand
4. `POST /turn/advance` moves Ready -> Combat -> End, `/turn/end` hands over

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or has ended (HTTP 404) |
| `RULE_VIOLATION` | Wrong phase, wrong card type, nothing pending |
| `CARD_NOT_FOUND` | Card id not in the zone the action reads from |
| `INSUFFICIENT_RESOURCES` | Not enough uncommitted foundations |
| `INVALID_REQUEST` | Request cannot be applied to this game |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(session_max_age=UVSIM_SESSION_MAX_AGE)
    logger.info("API created (env=%s)", UVSIM_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(response):
        """Pass results through; turn a service ErrorResponse into HTTP 404."""
        if isinstance(response, ErrorResponse):
            return JSONResponse(status_code=404, content=response.model_dump(mode="json"))
        return response

    not_found = {404: {"model": ErrorResponse, "description": "Game not found"}}

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(api_service.list_games()),
        )

    # =========================================================================
    # Games
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        tags=["Games"],
        summary="Create a demo game",
    )
    async def create_game(request: CreateGameRequest) -> GameResponse:
        """Create a Ryu vs Chun-Li game with practice decks."""
        return api_service.create_game(request)

    @app.get(
        "/api/v1/games",
        response_model=SessionListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> SessionListResponse:
        sessions = api_service.list_games()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/games/{session_id}",
        response_model=GameResponse,
        responses=not_found,
        tags=["Games"],
        summary="Get the full game view",
    )
    async def get_game(session_id: str) -> Union[GameResponse, JSONResponse]:
        """Zones, health, turn position, open attack and pending check. Deck contents are hidden."""
        return respond(api_service.get_game(session_id))

    @app.delete(
        "/api/v1/games/{session_id}",
        response_model=EndSessionResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(session_id: str, reason: str = "user_ended") -> EndSessionResponse:
        success = api_service.end_game(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/games/{session_id}/start",
        response_model=GameResponse,
        responses={**not_found, 400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Start a game created with start=false",
    )
    async def start_game(session_id: str) -> Union[GameResponse, JSONResponse]:
        if api_service.session_manager.get_session(session_id) is None:
            return respond(api_service.get_game(session_id))
        response = api_service.start_game(session_id)
        if isinstance(response, ErrorResponse):
            return JSONResponse(status_code=400, content=response.model_dump(mode="json"))
        return response

    # =========================================================================
    # Turn flow
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/turn/process",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Turn"],
        summary="Run the current phase",
    )
    async def process_turn(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Review discards, draws and moves to Ready. Ready readies cards. End starts the next turn."""
        return respond(api_service.process_turn(session_id))

    @app.post(
        "/api/v1/games/{session_id}/turn/advance",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Turn"],
        summary="Move to the next phase",
    )
    async def advance_phase(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.advance_phase(session_id))

    @app.post(
        "/api/v1/games/{session_id}/turn/end",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Turn"],
        summary="End the active player's turn",
    )
    async def end_turn(session_id: str) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.end_turn(session_id))

    # =========================================================================
    # Card plays
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/foundations",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Cards"],
        summary="Play a foundation from hand",
    )
    async def play_foundation(
        session_id: str,
        request: CardActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.play_foundation(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/assets",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Cards"],
        summary="Play an asset from hand",
    )
    async def play_asset(
        session_id: str,
        request: CardActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.play_asset(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/attacks",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Cards"],
        summary="Declare an attack",
    )
    async def declare_attack(
        session_id: str,
        request: CardActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.declare_attack(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/blocks",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Cards"],
        summary="Declare a block against the open attack",
    )
    async def declare_block(
        session_id: str,
        request: CardActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.declare_block(session_id, request))

    # =========================================================================
    # Checks and resources
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/card-pool",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Play a card into the card pool",
    )
    async def play_to_card_pool(
        session_id: str,
        request: CardActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """Opens a pending check at the card's difficulty plus its slot in the pool."""
        return respond(api_service.play_to_card_pool(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/check/reveal",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Reveal the check card for the pending check",
    )
    async def reveal_check(
        session_id: str,
        request: PlayerRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.reveal_check(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/check/commit",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Commit foundations to the pending check",
    )
    async def commit_to_check(
        session_id: str,
        request: CommitToCheckRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.commit_to_check(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/checks",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Reveal cards until their check values reach a difficulty",
    )
    async def perform_check(
        session_id: str,
        request: PerformCheckRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.perform_check(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/foundations/commit",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Commit foundations in play by id",
    )
    async def commit_foundations(
        session_id: str,
        request: CommitFoundationsRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """All or nothing: one bad id commits no card."""
        return respond(api_service.commit_foundations(session_id, request))

    @app.post(
        "/api/v1/games/{session_id}/mill",
        response_model=ActionResponse,
        responses=not_found,
        tags=["Checks"],
        summary="Move cards from the top of the deck to the discard pile",
    )
    async def mill(
        session_id: str,
        request: MillRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.mill(session_id, request))

    return app
