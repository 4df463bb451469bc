"""Read-only REST endpoints for inspecting live rooms."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from snake_relay.server.protocol import RoomState
from snake_relay.server.rooms import RoomRegistry, RoomSummary
from snake_relay.server.websocket import SOCKET_PATH

router = APIRouter(tags=["rooms"])


def _get_registry(request: Request) -> RoomRegistry:
    return request.app.state.room_registry


@router.get(SOCKET_PATH, response_class=PlainTextResponse)
async def socket_over_http() -> PlainTextResponse:
    """The relay endpoint only speaks WebSocket."""
    return PlainTextResponse("Expected websocket", status_code=400)


@router.get("/rooms")
async def list_rooms(request: Request) -> list[RoomSummary]:
    """List live rooms."""
    return _get_registry(request).list_rooms()


@router.get("/rooms/{room_id}")
async def get_room(room_id: str, request: Request) -> dict:
    """Get a room's merged state in wire format."""
    state: RoomState | None = _get_registry(request).room_state(room_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Room not found.")
    return {"room_id": room_id, "state": state.model_dump(by_alias=True)}
