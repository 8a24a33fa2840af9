"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field

from snake_arcade.grid import MIN_GRID_SIZE


class SessionAction(str, enum.Enum):
    """Lifecycle operations exposed over HTTP."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESTART = "restart"
    END = "end"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int = Field(default=20, ge=MIN_GRID_SIZE, le=100)
    theme: str = "neon"
    sound_on: bool = True


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: Literal["up", "down", "left", "right"]


class GridSizeRequest(BaseModel):
    """Request body for PUT /sessions/{session_id}/grid-size."""

    grid_size: int = Field(ge=MIN_GRID_SIZE, le=100)


class ThemeRequest(BaseModel):
    """Request body for PUT /sessions/{session_id}/theme."""

    theme: str


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    state: str
    grid_size: int
    theme: str
    score: int


class ActionResponse(BaseModel):
    """Result of a lifecycle call; ``changed`` is False for no-ops."""

    session_id: str
    action: SessionAction
    changed: bool
    snapshot: dict


class DirectionResponse(BaseModel):
    accepted: bool


class GridSizeResponse(BaseModel):
    """``applied`` is False when the change waits for the next start."""

    grid_size: int
    applied: bool


class HighScoreResponse(BaseModel):
    high_score: int
