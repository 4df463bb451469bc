"""REST endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_relay.server.app import create_app
from snake_relay.server.protocol import Cell
from snake_relay.server.rooms import RoomRegistry
from tests.fakes import FakeSocket

BASE = "http://test"


@pytest.fixture()
def app():
    application = create_app()
    application.state.room_registry = RoomRegistry()
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


class TestSocketOverHttp:
    @pytest.mark.asyncio
    async def test_plain_get_rejected(self, client):
        resp = await client.get("/api/socket")
        assert resp.status_code == 400
        assert resp.text == "Expected websocket"


class TestRooms:
    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        resp = await client.get("/rooms")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_list_and_get(self, app, client):
        registry = app.state.room_registry
        pid = await registry.connect("r1", FakeSocket())
        await registry.update("r1", pid, [Cell(x=3, y=3)])

        resp = await client.get("/rooms")
        assert resp.json() == [
            {"room_id": "r1", "player_count": 1, "connection_count": 1},
        ]

        resp = await client.get("/rooms/r1")
        assert resp.status_code == 200
        data = resp.json()
        assert data["room_id"] == "r1"
        assert data["state"]["players"] == [[pid, [{"x": 3, "y": 3}]]]

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        resp = await client.get("/rooms/nope")
        assert resp.status_code == 404
