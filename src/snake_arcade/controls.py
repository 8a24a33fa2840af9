"""Keyboard translation for driving a session."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from snake_arcade.snake import Direction

if TYPE_CHECKING:
    from snake_arcade.session import GameSession


class ControlAction(enum.Enum):
    """Non-movement key actions."""

    TOGGLE_PAUSE = "toggle_pause"


KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
}

# Direction names accepted by the HTTP and WebSocket APIs.
DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

KEY_ACTIONS: dict[str, ControlAction] = {
    "p": ControlAction.TOGGLE_PAUSE,
    " ": ControlAction.TOGGLE_PAUSE,
}

# Keys whose default behaviour (page scrolling) should be suppressed.
SCROLL_KEYS: frozenset[str] = frozenset(
    {"ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight", " "},
)


def translate_key(key: str) -> Direction | ControlAction | None:
    """Map a key identifier to a direction or control action."""
    normalized = key.lower() if len(key) == 1 else key
    if normalized in KEY_DIRECTIONS:
        return KEY_DIRECTIONS[normalized]
    return KEY_ACTIONS.get(normalized)


def handle_key(session: GameSession, key: str) -> bool:
    """Apply a key press to *session*.

    Returns True when the key was recognised and its default behaviour
    should be suppressed.
    """
    from snake_arcade.session import SessionState

    command = translate_key(key)
    if isinstance(command, Direction):
        session.buffer_direction(command)
        return True
    if command is ControlAction.TOGGLE_PAUSE:
        if session.state in (SessionState.RUNNING, SessionState.PAUSED):
            session.toggle_pause()
        return True
    return key in SCROLL_KEYS
