"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a presentation layer (browser,
terminal, bot) and the engines.

Error Codes:
- GAME_NOT_FOUND: Game id is not in the catalog
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.command import CommandType, Direction, EventKind, Side
from ..scores.store import ScoreEntry


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    RUNNING = "running"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Catalog & Scores
# =============================================================================

class GameInfo(BaseModel):
    """Catalog entry."""
    game_id: str
    title: str
    description: str
    controls: str
    tick_interval_ms: Optional[int] = Field(None, description="Timer period; null for input-only games")

    model_config = {"from_attributes": True}


class GameListResponse(BaseModel):
    games: list[GameInfo]
    count: int


class ScoreListResponse(BaseModel):
    game_id: str
    scores: list[ScoreEntry]


class SubmitScoreRequest(BaseModel):
    score: int = Field(..., ge=0)
    player_name: Optional[str] = Field(None, max_length=100)


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a game."""
    game_id: str = Field(..., description="Catalog id, e.g. 'tetris'")
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")
    player_name: Optional[str] = Field(None, max_length=100)


class CommandRequest(BaseModel):
    """A discrete engine command."""
    command_type: CommandType
    row: Optional[int] = None
    col: Optional[int] = None
    direction: Optional[Direction] = None
    word: Optional[str] = None
    side: Optional[Side] = None
    active: Optional[bool] = None


class InputEventRequest(BaseModel):
    """A raw input event; the session's game decides what it means."""
    kind: EventKind
    key: Optional[str] = None
    row: Optional[int] = None
    col: Optional[int] = None
    button: int = 0
    text: Optional[str] = None


class TickRequest(BaseModel):
    count: int = Field(1, ge=1, le=10_000)


class RestartRequest(BaseModel):
    seed: Optional[int] = None


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Current view of a session."""
    session_id: str
    game_id: str
    status: SessionStatus
    score: int
    terminal: bool
    games_played: int
    created_at: float
    state: dict[str, Any] = Field(default_factory=dict, description="Engine snapshot")


class TurnResponse(BaseModel):
    """Outcome of a command, input event, tick batch or restart."""
    success: bool
    ignored: bool = False
    message: Optional[str] = None
    error_code: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    reported_score: Optional[int] = Field(None, description="Set on the transition that ended the game")
    session: SessionResponse


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
