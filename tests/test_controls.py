"""Tests for key translation."""

from snake_arcade.clock import ManualScheduler
from snake_arcade.controls import (
    DIRECTION_NAMES,
    ControlAction,
    handle_key,
    translate_key,
)
from snake_arcade.session import GameSession, SessionState
from snake_arcade.snake import Direction


class TestTranslateKey:
    def test_arrows(self):
        assert translate_key("ArrowUp") is Direction.UP
        assert translate_key("ArrowLeft") is Direction.LEFT

    def test_wasd_case_insensitive(self):
        assert translate_key("w") is Direction.UP
        assert translate_key("D") is Direction.RIGHT

    def test_pause_keys(self):
        assert translate_key("p") is ControlAction.TOGGLE_PAUSE
        assert translate_key("P") is ControlAction.TOGGLE_PAUSE
        assert translate_key(" ") is ControlAction.TOGGLE_PAUSE

    def test_unknown(self):
        assert translate_key("Enter") is None
        assert translate_key("x") is None

    def test_direction_names_cover_every_direction(self):
        assert set(DIRECTION_NAMES.values()) == set(Direction)
        for name, direction in DIRECTION_NAMES.items():
            assert name == direction.name.lower()

class TestHandleKey:
    def test_direction_buffered(self):
        session = GameSession(ManualScheduler())
        session.start()
        assert handle_key(session, "ArrowDown")
        assert session.snake.buffered is Direction.DOWN

    def test_space_toggles_pause(self):
        session = GameSession(ManualScheduler())
        session.start()
        assert handle_key(session, " ")
        assert session.state == SessionState.PAUSED
        assert handle_key(session, "p")
        assert session.state == SessionState.RUNNING

    def test_pause_ignored_when_idle(self):
        session = GameSession(ManualScheduler())
        assert handle_key(session, "p")
        assert session.state == SessionState.IDLE

    def test_unrecognised_key_not_consumed(self):
        session = GameSession(ManualScheduler())
        assert not handle_key(session, "Enter")
