"""In-memory session registry and snapshot broadcasting."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.audio import Audio
from snake_arcade.clock import AsyncioScheduler
from snake_arcade.config import GameConfig
from snake_arcade.session import GameSession, SessionState, Snapshot
from snake_arcade.storage import (
    HighScoreStore,
    InMemoryHighScoreStore,
    JsonHighScoreStore,
)

logger = logging.getLogger(__name__)

_MAX_ENDED_SESSIONS = 100

# Frames held for a slow subscriber before the oldest are dropped.
_OUTBOX_SIZE = 32


def _new_outbox() -> asyncio.Queue:
    return asyncio.Queue(maxsize=_OUTBOX_SIZE)


@dataclass
class SessionInstance:
    """A game session plus the sockets watching it."""

    session_id: str
    session: GameSession
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    outbox: asyncio.Queue = field(default_factory=_new_outbox, repr=False)
    sender: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> dict:
        return {
            "session_id": self.session_id,
            "state": self.session.state.value,
            "grid_size": self.session.grid.size,
            "theme": self.session.theme.value,
            "score": self.session.score,
        }

    def enqueue(self, payload: str) -> None:
        """Queue a frame, dropping the oldest one when the outbox is full."""
        if self.outbox.full():
            self.outbox.get_nowait()
        self.outbox.put_nowait(payload)


class _BroadcastRenderer:
    """Pushes snapshots to subscribers without blocking the tick."""

    def __init__(self, manager: SessionManager, session_id: str) -> None:
        self._manager = manager
        self._session_id = session_id

    def draw(self, snapshot: Snapshot) -> None:
        instance = self._manager.get_session(self._session_id)
        if instance is None or not instance.subscribers:
            return
        payload = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        self._manager.publish(instance, payload)


class SessionManager:
    """Central registry of running game sessions."""

    def __init__(
        self,
        config: GameConfig | None = None,
        storage: HighScoreStore | None = None,
        max_ended_sessions: int = _MAX_ENDED_SESSIONS,
    ) -> None:
        if max_ended_sessions < 0:
            raise ValueError("max_ended_sessions must be >= 0.")
        self.config = config if config is not None else GameConfig()
        if storage is None:
            storage = (
                JsonHighScoreStore(self.config.high_score_path)
                if self.config.high_score_path
                else InMemoryHighScoreStore()
            )
        self.storage = storage
        self._sessions: dict[str, SessionInstance] = {}
        self._tasks: set[asyncio.Task] = set()
        self._max_ended_sessions = max_ended_sessions

    def create_session(
        self,
        grid_size: int | None = None,
        theme: str | None = None,
        sound_on: bool | None = None,
    ) -> SessionInstance:
        """Create an idle session and return its instance."""
        overrides: dict = {}
        if grid_size is not None:
            overrides["grid_size"] = grid_size
        if theme is not None:
            overrides["theme"] = theme
        if sound_on is not None:
            overrides["sound_on"] = sound_on
        config = GameConfig(**{**self.config.to_dict(), **overrides})

        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            AsyncioScheduler(),
            config=config,
            storage=self.storage,
            renderer=_BroadcastRenderer(self, session_id),
            audio=Audio(config.sound_on),
        )
        instance = SessionInstance(session_id=session_id, session=session)
        self._sessions[session_id] = instance
        self._prune_ended_sessions()
        logger.info("Session %s created (grid=%d).", session_id, config.grid_size)
        return instance

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        return instance

    def list_sessions(self) -> list[SessionInstance]:
        return list(self._sessions.values())

    def remove_session(self, session_id: str) -> None:
        """End and forget a session."""
        instance = self.require_session(session_id)
        instance.session.end()
        instance.session.clock.stop()
        del self._sessions[session_id]
        self.spawn(self._retire(instance))
        logger.info("Session %s removed.", session_id)

    def high_score(self) -> int:
        try:
            return self.storage.load_high_score()
        except (OSError, ValueError):
            logger.warning("High score store unavailable.")
            return 0

    def spawn(self, coro) -> None:
        """Run *coro* in the background, keeping a reference until done."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def publish(self, instance: SessionInstance, payload: str) -> None:
        """Hand a frame to the instance's sender without blocking the tick.

        Each instance has a single sender task, so subscribers receive
        frames in tick order even when a send stalls.
        """
        loop = asyncio.get_running_loop()
        sender = instance.sender
        if sender is None or sender.done() or sender.get_loop() is not loop:
            # A queue is bound to the loop that first waits on it.
            instance.outbox = _new_outbox()
            instance.sender = loop.create_task(self._send_loop(instance))
        instance.enqueue(payload)

    async def _send_loop(self, instance: SessionInstance) -> None:
        while True:
            payload = await instance.outbox.get()
            await self.broadcast(instance, payload)

    async def broadcast(self, instance: SessionInstance, payload: str) -> None:
        """Send a payload to every subscriber, dropping dead sockets."""
        dead: list[WebSocket] = []
        # Iterate over a copy; disconnect handlers mutate the live list.
        for ws in list(instance.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in instance.subscribers:
                instance.subscribers.remove(ws)

    async def _retire(self, instance: SessionInstance) -> None:
        """Flush queued frames to a removed session's sockets, then close them."""
        if instance.sender is not None:
            instance.sender.cancel()
        while not instance.outbox.empty():
            await self.broadcast(instance, instance.outbox.get_nowait())
        for ws in list(instance.subscribers):
            await self._close(ws, "Session removed.")

    async def _close(self, ws: WebSocket, reason: str) -> None:
        try:
            if ws.client_state == WebSocketState.CONNECTED:
                await ws.close(code=1000, reason=reason)
        except Exception:
            logger.warning("Failed closing subscriber socket.")

    def _prune_ended_sessions(self) -> None:
        """Bound retained ended sessions to avoid unbounded registry growth."""
        ended = [
            i for i in self._sessions.values()
            if i.session.state == SessionState.ENDED and not i.subscribers
        ]
        overflow = len(ended) - self._max_ended_sessions
        if overflow <= 0:
            return
        ended.sort(key=lambda i: i.created_at)
        for stale in ended[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info("Pruned %d ended sessions.", overflow)

    async def cleanup(self) -> None:
        """Stop every clock and sender and wait for outstanding tasks."""
        for instance in self._sessions.values():
            instance.session.clock.stop()
            if instance.sender is not None and not instance.sender.done():
                instance.sender.cancel()
                self._tasks.add(instance.sender)
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
