"""Tick-driven game session composing grid, snake, food and clock."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from snake_arcade.audio import Audio, AudioPort, SoundEvent
from snake_arcade.clock import GameClock, Scheduler, speed_label
from snake_arcade.config import GameConfig
from snake_arcade.food import FoodSpawner
from snake_arcade.grid import GridModel, Position, validate_grid_size
from snake_arcade.render import Renderer
from snake_arcade.snake import Direction, SnakeState
from snake_arcade.storage import HighScoreStore, InMemoryHighScoreStore
from snake_arcade.themes import Theme

logger = logging.getLogger(__name__)

_START_LENGTH = 3


class SessionState(enum.Enum):
    """Lifecycle states of a game session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


class GridChange(enum.Enum):
    """Outcome of a grid-size request."""

    APPLIED = "applied"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session handed to renderers."""

    segments: tuple[Position, ...]
    food: Position | None
    score: int
    direction: Direction
    theme: Theme
    state: SessionState
    high_score: int
    interval_ms: int
    min_interval_ms: int | None
    speed_label: str
    grid_size: int
    plays: int

    @property
    def head(self) -> Position | None:
        return self.segments[0] if self.segments else None

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "segments": [list(p) for p in self.segments],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "direction": list(self.direction.value),
            "theme": self.theme.value,
            "palette": self.theme.palette.to_dict(),
            "state": self.state.value,
            "high_score": self.high_score,
            "interval_ms": self.interval_ms,
            "min_interval_ms": self.min_interval_ms,
            "speed_label": self.speed_label,
            "grid_size": self.grid_size,
            "plays": self.plays,
        }


class GameSession:
    """Single-player snake session driven by a :class:`GameClock`.

    The session owns the snake, food, score and tick interval; they are
    rebuilt on every :meth:`start`. Lifecycle calls made from the wrong
    state are ignored and return ``False``. Renderer and audio failures are
    logged and never interrupt a tick.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: GameConfig | None = None,
        storage: HighScoreStore | None = None,
        renderer: Renderer | None = None,
        audio: AudioPort | None = None,
        spawner: FoodSpawner | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.ramp = self.config.speed_ramp()
        self.storage = storage if storage is not None else InMemoryHighScoreStore()
        self.renderer = renderer
        self.audio = audio if audio is not None else Audio(self.config.sound_on)
        self.spawner = spawner if spawner is not None else FoodSpawner(
            max_attempts=self.config.spawn_attempts,
        )
        self.clock = GameClock(scheduler, self.tick)
        self.theme = Theme.parse(self.config.theme)

        self.grid = GridModel(self.config.grid_size)
        self._pending_grid_size = self.config.grid_size
        self.snake = SnakeState.centered(self.grid, _START_LENGTH)
        self.food: Position | None = None
        self.score = 0
        self.plays = 0
        self.state = SessionState.IDLE
        self.high_score = self._load_high_score()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin a fresh game from Idle or Ended."""
        if self.state not in (SessionState.IDLE, SessionState.ENDED):
            return False

        self.grid = GridModel(self._pending_grid_size)
        self.snake = SnakeState.centered(self.grid, _START_LENGTH)
        self.score = 0
        self.high_score = max(self.high_score, self._load_high_score())
        self.clock.reset()
        self.food = self.spawner.spawn(
            self.snake.occupied(), self.grid, self.snake.head,
        )
        self.plays += 1
        self.state = SessionState.RUNNING
        self.clock.start(self.ramp.base_ms)
        logger.info(
            "Game %d started on a %dx%d grid.",
            self.plays, self.grid.size, self.grid.size,
        )
        self._notify(SoundEvent.START)
        self._emit()
        return True

    def pause(self) -> bool:
        if self.state != SessionState.RUNNING:
            return False
        self.clock.stop()
        self.state = SessionState.PAUSED
        logger.info("Game paused with score %d.", self.score)
        self._notify(SoundEvent.PAUSE)
        self._emit()
        return True

    def resume(self) -> bool:
        if self.state != SessionState.PAUSED:
            return False
        self.state = SessionState.RUNNING
        # Time spent paused is not owed back; the next tick is a full
        # interval away.
        self.clock.start(self.clock.interval_ms or self.ramp.base_ms)
        logger.info("Game resumed.")
        self._notify(SoundEvent.RESUME)
        self._emit()
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""
        if self.state == SessionState.RUNNING:
            return self.pause()
        return self.resume()

    def end(self) -> bool:
        """Finish the game and record a new high score if one was set."""
        if self.state not in (SessionState.RUNNING, SessionState.PAUSED):
            return False
        self.clock.stop()
        self.state = SessionState.ENDED
        self._record_high_score()
        logger.info(
            "Game over with score %d (high score %d).",
            self.score, self.high_score,
        )
        self._notify(SoundEvent.GAME_OVER)
        self._emit()
        return True

    def restart(self) -> bool:
        """End the current game, if any, and start a new one."""
        self.end()
        return self.start()

    # ------------------------------------------------------------------
    # Input and options
    # ------------------------------------------------------------------

    def buffer_direction(self, direction: Direction) -> bool:
        """Queue a direction change for the next tick."""
        if self.state != SessionState.RUNNING:
            return False
        return self.snake.buffer_direction(direction)

    def request_grid_size(self, size: int) -> GridChange:
        """Change the grid size now, or on the next start while in play."""
        validate_grid_size(size)
        self._pending_grid_size = size
        if self.state in (SessionState.RUNNING, SessionState.PAUSED):
            logger.info("Grid size %d deferred until the next start.", size)
            return GridChange.DEFERRED
        self.grid = GridModel(size)
        self.snake = SnakeState.centered(self.grid, _START_LENGTH)
        self.food = None
        return GridChange.APPLIED

    @property
    def pending_grid_size(self) -> int:
        return self._pending_grid_size

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> Snapshot | None:
        """Advance the game by one step. Does nothing unless running."""
        if self.state != SessionState.RUNNING:
            logger.debug("Ignoring tick in state %s.", self.state.value)
            return None

        applied = self.snake.resolve_direction()
        result = self.snake.advance(applied, self.grid)
        if result.collision is not None:
            logger.debug(
                "Collision with %s at %s.", result.collision.value, result.new_head,
            )
            self.end()
            return self.snapshot()

        new_head = result.new_head
        if new_head == self.food:
            self.score += 1
            self.snake.grow(new_head)
            self.food = self.spawner.spawn(
                self.snake.occupied(), self.grid, new_head,
            )
            self._notify(SoundEvent.FOOD)
            interval = self.ramp.next_interval(self.score, self.clock.interval_ms)
            if interval != self.clock.interval_ms:
                logger.debug("Tick interval now %d ms.", interval)
                self.clock.set_interval(interval)
        else:
            self.snake.move_without_growth(new_head)

        return self._emit()

    def snapshot(self) -> Snapshot:
        """Return the current read-only view of the session."""
        interval = self.clock.interval_ms or self.ramp.base_ms
        return Snapshot(
            segments=self.snake.segments(),
            food=self.food,
            score=self.score,
            direction=self.snake.direction,
            theme=self.theme,
            state=self.state,
            high_score=self.high_score,
            interval_ms=interval,
            min_interval_ms=self.clock.min_interval_seen,
            speed_label=speed_label(interval),
            grid_size=self.grid.size,
            plays=self.plays,
        )

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _emit(self) -> Snapshot:
        snap = self.snapshot()
        if self.renderer is not None:
            try:
                self.renderer.draw(snap)
            except Exception:
                logger.exception("Renderer failed; continuing.")
        return snap

    def _notify(self, event: SoundEvent) -> None:
        try:
            self.audio.notify(event)
        except Exception:
            logger.exception("Audio notification %s failed.", event.value)

    def _load_high_score(self) -> int:
        try:
            return self.storage.load_high_score()
        except (OSError, ValueError):
            logger.warning("High score unavailable; starting from 0.")
            return 0

    def _record_high_score(self) -> None:
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        try:
            self.storage.save_high_score(self.score)
        except (OSError, ValueError):
            logger.warning("Could not persist high score %d.", self.score)
