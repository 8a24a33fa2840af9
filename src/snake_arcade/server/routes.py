"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_arcade.controls import DIRECTION_NAMES
from snake_arcade.server.models import (
    ActionResponse,
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    GridSizeRequest,
    GridSizeResponse,
    HighScoreResponse,
    SessionAction,
    SessionSummary,
    ThemeRequest,
)
from snake_arcade.server.session_manager import SessionInstance, SessionManager
from snake_arcade.session import GridChange
from snake_arcade.themes import Theme

router = APIRouter(tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_instance(request: Request, session_id: str) -> SessionInstance:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new idle session."""
    try:
        instance = _get_manager(request).create_session(
            grid_size=body.grid_size,
            theme=body.theme,
            sound_on=body.sound_on,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return SessionSummary(**instance.summary())


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List every known session."""
    return [
        SessionSummary(**i.summary())
        for i in _get_manager(request).list_sessions()
    ]


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Return the current snapshot of a session."""
    instance = _get_instance(request, session_id)
    return instance.session.snapshot().to_dict()


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """End and discard a session."""
    _get_instance(request, session_id)
    _get_manager(request).remove_session(session_id)
    return Response(status_code=204)


@router.post("/sessions/{session_id}/direction")
async def buffer_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a direction change for the next tick."""
    session = _get_instance(request, session_id).session
    accepted = session.buffer_direction(DIRECTION_NAMES[body.direction])
    return DirectionResponse(accepted=accepted)


@router.put("/sessions/{session_id}/grid-size")
async def set_grid_size(
    session_id: str, body: GridSizeRequest, request: Request,
) -> GridSizeResponse:
    """Change the grid size, deferred while a game is in play."""
    session = _get_instance(request, session_id).session
    try:
        outcome = session.request_grid_size(body.grid_size)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return GridSizeResponse(
        grid_size=body.grid_size, applied=outcome == GridChange.APPLIED,
    )


@router.put("/sessions/{session_id}/theme")
async def set_theme(
    session_id: str, body: ThemeRequest, request: Request,
) -> dict:
    """Switch the palette used by renderers."""
    session = _get_instance(request, session_id).session
    try:
        session.theme = Theme.from_name(body.theme)
    except ValueError as exc:
        raise HTTPException(
            status_code=422, detail=f"Unknown theme {body.theme!r}.",
        ) from exc
    return session.snapshot().to_dict()


@router.post("/sessions/{session_id}/{action}")
async def apply_action(
    session_id: str, action: SessionAction, request: Request,
) -> ActionResponse:
    """Run a lifecycle operation; illegal transitions are no-ops."""
    session = _get_instance(request, session_id).session
    operations = {
        SessionAction.START: session.start,
        SessionAction.PAUSE: session.pause,
        SessionAction.RESUME: session.resume,
        SessionAction.RESTART: session.restart,
        SessionAction.END: session.end,
    }
    changed = operations[action]()
    return ActionResponse(
        session_id=session_id,
        action=action,
        changed=changed,
        snapshot=session.snapshot().to_dict(),
    )


@router.get("/high-score")
async def get_high_score(request: Request) -> HighScoreResponse:
    """Return the persisted high score."""
    return HighScoreResponse(high_score=_get_manager(request).high_score())
