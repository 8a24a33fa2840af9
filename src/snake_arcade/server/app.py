"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_arcade.config import GameConfig
from snake_arcade.server.routes import router
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.server.websocket import ws_router
from snake_arcade.storage import HighScoreStore


def create_app(
    config: GameConfig | None = None,
    storage: HighScoreStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(config, storage)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Snake Arcade API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
