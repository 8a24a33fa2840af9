"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.controls import DIRECTION_NAMES, handle_key
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.session import GameSession

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _apply_message(session: GameSession, msg: dict) -> None:
    key = msg.get("key")
    if isinstance(key, str):
        handle_key(session, key)
        return

    direction_str = msg.get("direction")
    if isinstance(direction_str, str):
        direction = DIRECTION_NAMES.get(direction_str.lower())
        if direction is not None:
            session.buffer_direction(direction)
        return

    action = msg.get("action")
    actions = {
        "start": session.start,
        "pause": session.pause,
        "resume": session.resume,
        "toggle_pause": session.toggle_pause,
        "restart": session.restart,
        "end": session.end,
        # Losing focus pauses a running game.
        "blur": session.pause,
    }
    if isinstance(action, str) and action in actions:
        actions[action]()


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send keys or commands, receive a snapshot per tick."""
    manager = _get_manager(websocket)
    instance = manager.get_session(session_id)
    if instance is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    instance.subscribers.append(websocket)
    logger.info("Player connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first tick.
    await websocket.send_text(
        json.dumps(instance.session.snapshot().to_dict(), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            _apply_message(instance.session, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in instance.subscribers:
            instance.subscribers.remove(websocket)
