"""
FastAPI Application - REST API for the arcade hub.

Endpoints:
    GET    /api/v1/health                      Health check
    GET    /api/v1/games                       Game catalog
    GET    /api/v1/games/{game_id}             One catalog entry
    GET    /api/v1/games/{game_id}/scores      Top ten scores
    POST   /api/v1/games/{game_id}/scores      Record a score
    POST   /api/v1/sessions                    Start a game
    GET    /api/v1/sessions                    List active sessions
    GET    /api/v1/sessions/{id}               Current state
    DELETE /api/v1/sessions/{id}               Leave the game
    POST   /api/v1/sessions/{id}/commands      Apply an engine command
    POST   /api/v1/sessions/{id}/events        Apply a raw input event
    POST   /api/v1/sessions/{id}/tick          Advance timer ticks
    POST   /api/v1/sessions/{id}/restart       Start over in the same session

Timed games (Tetris, Flappy Bird, Pinball) only move when the client
posts ticks; the catalog gives each game's tick interval.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

from .. import __version__

# Environment configuration
ARCADE_ENV = os.getenv("ARCADE_ENV", "development")
ARCADE_SCORES_PATH = os.getenv("ARCADE_SCORES_PATH", None)
ARCADE_LOG_LEVEL = os.getenv("ARCADE_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

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
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..engine_core.command import Command, CommandPayload, InputEvent
    from ..scores import HighScoreStore
    from .service import APIService
    from .schemas import (
        # Request models
        CommandRequest,
        CreateSessionRequest,
        InputEventRequest,
        RestartRequest,
        SubmitScoreRequest,
        TickRequest,
        # Response models
        EndSessionResponse,
        ErrorResponse,
        GameInfo,
        GameListResponse,
        HealthResponse,
        ScoreListResponse,
        SessionListResponse,
        SessionResponse,
        TurnResponse,
        # Enums
        ErrorCode,
        SessionStatus,
    )

    logging.basicConfig(
        level=ARCADE_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Arcade Hub API",
        description="""
Six classic arcade games behind one deterministic engine contract.

## Driving a game

1. `POST /sessions` with a `game_id` (and a `seed` for a reproducible game)
2. Send key presses and clicks to `POST /events`, or commands to `POST /commands`
3. For timed games, `POST /tick` at the catalog's `tick_interval_ms`
4. When `terminal` is true the final score has already been recorded

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game id is not in the catalog |
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Request body failed validation |
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

    # Service instance
    api_service = service or APIService(score_store=HighScoreStore(ARCADE_SCORES_PATH))
    logger.info("Arcade hub API starting (%s)", ARCADE_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def session_not_found(session_id: str) -> JSONResponse:
        return make_error_response(
            ErrorCode.SESSION_NOT_FOUND,
            "Session not found",
            status_code=404,
            details={"session_id": session_id},
        )

    def game_not_found(game_id: str) -> JSONResponse:
        return make_error_response(
            ErrorCode.GAME_NOT_FOUND,
            f"Unknown game: {game_id}",
            status_code=404,
            details={"game_id": game_id},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={
                "errors": [
                    {"loc": list(error["loc"]), "msg": error["msg"]}
                    for error in exc.errors()
                ],
            },
        )

    # =========================================================================
    # Catalog & Score Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List the game catalog",
    )
    async def list_games() -> GameListResponse:
        games = [GameInfo.model_validate(game) for game in api_service.list_games()]
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get one catalog entry",
    )
    async def get_game(game_id: str) -> Union[GameInfo, JSONResponse]:
        game = api_service.get_game(game_id)
        if game is None:
            return game_not_found(game_id)
        return GameInfo.model_validate(game)

    @app.get(
        "/api/v1/games/{game_id}/scores",
        response_model=ScoreListResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Scores"],
        summary="Top scores for a game",
    )
    async def get_scores(game_id: str) -> Union[ScoreListResponse, JSONResponse]:
        """Best first, at most ten entries."""
        try:
            scores = api_service.get_scores(game_id)
        except ValueError:
            return game_not_found(game_id)
        return ScoreListResponse(game_id=game_id, scores=scores)

    @app.post(
        "/api/v1/games/{game_id}/scores",
        response_model=ScoreListResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Scores"],
        summary="Record a score",
    )
    async def submit_score(
        game_id: str,
        request: SubmitScoreRequest,
    ) -> Union[ScoreListResponse, JSONResponse]:
        """Record a score and return the updated table."""
        try:
            scores = api_service.submit_score(game_id, request.score, request.player_name)
        except ValueError:
            return game_not_found(game_id)
        return ScoreListResponse(game_id=game_id, scores=scores)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Unknown game id"},
        },
        tags=["Sessions"],
        summary="Start a new game",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Start a new game session.

        Supplying a `seed` makes the game reproducible: the same seed and
        the same inputs always produce the same states.
        """
        try:
            session = api_service.create_session(
                request.game_id,
                seed=request.seed,
                player_name=request.player_name,
            )
        except ValueError:
            return game_not_found(request.game_id)
        return _convert_session(session)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session state",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        session = api_service.get_session(session_id)
        if not session:
            return session_not_found(session_id)
        return _convert_session(session)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and drop its state."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Gameplay Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/commands",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Gameplay"],
        summary="Apply an engine command",
    )
    async def apply_command(
        session_id: str,
        request: CommandRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        """
        Apply one command to the session's game.

        A command the game rejects is not an HTTP error: the response has
        `success=false` with a message and error code, and the state is
        unchanged.
        """
        command = Command(
            command_type=request.command_type,
            payload=CommandPayload(
                row=request.row,
                col=request.col,
                direction=request.direction,
                word=request.word,
                side=request.side,
                active=request.active,
            ),
        )
        outcome = api_service.apply_command(session_id, command)
        if outcome is None:
            return session_not_found(session_id)
        return _convert_turn(*outcome)

    @app.post(
        "/api/v1/sessions/{session_id}/events",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Gameplay"],
        summary="Apply a raw input event",
    )
    async def dispatch_event(
        session_id: str,
        request: InputEventRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        """Key presses and clicks the game does not bind come back with `ignored=true`."""
        event = InputEvent(
            kind=request.kind,
            key=request.key,
            row=request.row,
            col=request.col,
            button=request.button,
            text=request.text,
        )
        outcome = api_service.dispatch_event(session_id, event)
        if outcome is None:
            return session_not_found(session_id)
        return _convert_turn(*outcome)

    @app.post(
        "/api/v1/sessions/{session_id}/tick",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Gameplay"],
        summary="Advance timer ticks",
    )
    async def tick(
        session_id: str,
        request: Optional[TickRequest] = None,
    ) -> Union[TurnResponse, JSONResponse]:
        """Advance up to `count` ticks; stops early once the game ends."""
        count = request.count if request else 1
        outcome = api_service.tick(session_id, count)
        if outcome is None:
            return session_not_found(session_id)
        return _convert_turn(*outcome)

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=TurnResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Gameplay"],
        summary="Start over",
    )
    async def restart(
        session_id: str,
        request: Optional[RestartRequest] = None,
    ) -> Union[TurnResponse, JSONResponse]:
        seed = request.seed if request else None
        outcome = api_service.restart(session_id, seed)
        if outcome is None:
            return session_not_found(session_id)
        return _convert_turn(*outcome)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="arcadehub",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Arcade Hub API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _convert_session(session) -> SessionResponse:
        driver = session.driver
        return SessionResponse(
            session_id=session.session_id,
            game_id=session.game_id,
            status=SessionStatus(driver.driver_state.value),
            score=driver.score,
            terminal=driver.is_over,
            games_played=driver.games_played,
            created_at=session.created_at,
            state=api_service.public_state(session),
        )

    def _convert_turn(session, result) -> TurnResponse:
        return TurnResponse(
            success=result.success,
            ignored=result.ignored,
            message=result.message,
            error_code=result.error_code,
            changes=result.changes,
            reported_score=result.reported_score,
            session=_convert_session(session),
        )

    return app
