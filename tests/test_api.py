"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_arcade.server.app import create_app
from snake_arcade.server.session_manager import SessionManager
from snake_arcade.storage import InMemoryHighScoreStore

BASE = "http://test"


@pytest.fixture()
def manager():
    return SessionManager(storage=InMemoryHighScoreStore(7))


@pytest.fixture()
def app(manager):
    application = create_app()
    application.state.session_manager = manager
    return application


@pytest.fixture()
async def client(app, manager):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["state"] == "idle"
        assert data["grid_size"] == 20
        assert data["theme"] == "neon"
        assert data["score"] == 0

    @pytest.mark.asyncio
    async def test_create_custom(self, client):
        resp = await client.post(
            "/sessions", json={"grid_size": 12, "theme": "retro", "sound_on": False},
        )
        assert resp.status_code == 201
        assert resp.json()["grid_size"] == 12
        assert resp.json()["theme"] == "retro"

    @pytest.mark.asyncio
    async def test_theme_name_is_case_insensitive(self, client):
        resp = await client.post("/sessions", json={"theme": "NEON"})
        assert resp.status_code == 201
        assert resp.json()["theme"] == "neon"

    @pytest.mark.asyncio
    async def test_grid_too_small(self, client):
        resp = await client.post("/sessions", json={"grid_size": 3})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_theme(self, client):
        resp = await client.post("/sessions", json={"theme": "pastel"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_list(self, client):
        await _create(client)
        await _create(client)
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert len(resp.json()) == 2


class TestSessionLookup:
    @pytest.mark.asyncio
    async def test_get_snapshot(self, client):
        session_id = await _create(client)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["state"] == "idle"
        assert data["high_score"] == 7
        assert len(data["segments"]) == 3

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        resp = await client.get("/sessions/nope")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, client):
        session_id = await _create(client)
        resp = await client.delete(f"/sessions/{session_id}")
        assert resp.status_code == 204
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 404


class TestLifecycleActions:
    @pytest.mark.asyncio
    async def test_start_pause_resume_end(self, client):
        session_id = await _create(client)

        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 200
        assert resp.json()["changed"] is True
        assert resp.json()["snapshot"]["state"] == "running"

        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.json()["snapshot"]["state"] == "paused"

        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.json()["changed"] is False
        assert resp.json()["snapshot"]["state"] == "paused"

        resp = await client.post(f"/sessions/{session_id}/resume")
        assert resp.json()["snapshot"]["state"] == "running"

        resp = await client.post(f"/sessions/{session_id}/end")
        assert resp.json()["snapshot"]["state"] == "ended"

    @pytest.mark.asyncio
    async def test_illegal_transition_is_noop(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/resume")
        assert resp.status_code == 200
        assert resp.json()["changed"] is False
        assert resp.json()["snapshot"]["state"] == "idle"

    @pytest.mark.asyncio
    async def test_unknown_action(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/explode")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_action_on_unknown_session(self, client):
        resp = await client.post("/sessions/nope/start")
        assert resp.status_code == 404


class TestDirection:
    @pytest.mark.asyncio
    async def test_reverse_rejected(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "left"},
        )
        assert resp.status_code == 200
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_turn_accepted(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "up"},
        )
        assert resp.json()["accepted"] is True

    @pytest.mark.asyncio
    async def test_not_running(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "up"},
        )
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_invalid_direction(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "sideways"},
        )
        assert resp.status_code == 422


class TestOptions:
    @pytest.mark.asyncio
    async def test_grid_size_applied_when_idle(self, client):
        session_id = await _create(client)
        resp = await client.put(
            f"/sessions/{session_id}/grid-size", json={"grid_size": 16},
        )
        assert resp.status_code == 200
        assert resp.json() == {"grid_size": 16, "applied": True}

    @pytest.mark.asyncio
    async def test_grid_size_deferred_while_running(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.put(
            f"/sessions/{session_id}/grid-size", json={"grid_size": 12},
        )
        assert resp.json() == {"grid_size": 12, "applied": False}
        snap = (await client.get(f"/sessions/{session_id}")).json()
        assert snap["grid_size"] == 20

        resp = await client.post(f"/sessions/{session_id}/restart")
        assert resp.json()["snapshot"]["grid_size"] == 12

    @pytest.mark.asyncio
    async def test_grid_size_invalid(self, client):
        session_id = await _create(client)
        resp = await client.put(
            f"/sessions/{session_id}/grid-size", json={"grid_size": 2},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_theme(self, client):
        session_id = await _create(client)
        resp = await client.put(
            f"/sessions/{session_id}/theme", json={"theme": "classic"},
        )
        assert resp.status_code == 200
        assert resp.json()["theme"] == "classic"
        assert resp.json()["palette"]["food"] == "#ef4444"

    @pytest.mark.asyncio
    async def test_theme_name_is_case_insensitive(self, client):
        session_id = await _create(client)
        resp = await client.put(
            f"/sessions/{session_id}/theme", json={"theme": "Retro"},
        )
        assert resp.status_code == 200
        assert resp.json()["theme"] == "retro"

    @pytest.mark.asyncio
    async def test_unknown_theme(self, client):
        session_id = await _create(client)
        resp = await client.put(
            f"/sessions/{session_id}/theme", json={"theme": "pastel"},
        )
        assert resp.status_code == 422


class TestHighScore:
    @pytest.mark.asyncio
    async def test_high_score(self, client):
        resp = await client.get("/high-score")
        assert resp.status_code == 200
        assert resp.json() == {"high_score": 7}
