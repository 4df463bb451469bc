"""WebSocket handler relaying snake updates between room members."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, WebSocket

from snake_relay.server.protocol import (
    IgnoredMessage,
    UpdateSnakeMessage,
    parse_client_message,
)
from snake_relay.server.rooms import RoomRegistry

logger = logging.getLogger(__name__)

ws_router = APIRouter()

SOCKET_PATH = "/api/socket"


def _get_registry(ws: WebSocket) -> RoomRegistry:
    return ws.app.state.room_registry


@ws_router.websocket(SOCKET_PATH)
async def relay(
    websocket: WebSocket,
    game_id: str | None = Query(default=None, alias="gameId"),
) -> None:
    """Player WebSocket: send snake updates, receive merged room state.

    The handler owns the connection's registry entry for its whole
    lifetime and releases it however the loop exits.
    """
    registry = _get_registry(websocket)
    room_id = registry.resolve_room_id(game_id)

    await websocket.accept()
    player_id = await registry.connect(room_id, websocket)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            # Binary frames go through the same decoder as text frames.
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue
            msg = parse_client_message(raw)
            if isinstance(msg, IgnoredMessage):
                continue
            if isinstance(msg, UpdateSnakeMessage):
                await registry.update(room_id, player_id, msg.snake)
    finally:
        await registry.disconnect(room_id, player_id)
