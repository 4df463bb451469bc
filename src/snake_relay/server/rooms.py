"""In-memory room registry, membership and broadcast fan-out."""

from __future__ import annotations

import logging
import secrets
import string
import time
from dataclasses import dataclass, field

import numpy as np
from pydantic import BaseModel
from starlette.websockets import WebSocket, WebSocketState

from snake_relay.config import RelayConfig
from snake_relay.food import FoodSpawner
from snake_relay.server.protocol import (
    Cell,
    GameStateMessage,
    InitMessage,
    PlayerJoinedMessage,
    PlayerLeftMessage,
    RoomState,
    encode,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass
class Room:
    """All state for a single room.

    ``connections`` is only used for fan-out; ``players`` holds a snake for
    each player that has reported one.
    """

    room_id: str
    food: Cell
    players: dict[str, list[Cell]] = field(default_factory=dict)
    connections: dict[str, WebSocket] = field(default_factory=dict)
    created_at: float = field(default_factory=time.monotonic)

    def state(self) -> RoomState:
        return RoomState(players=list(self.players.items()), food=self.food)


class RoomSummary(BaseModel):
    """Compact room info for list endpoints."""

    room_id: str
    player_count: int
    connection_count: int


class RoomRegistry:
    """Central registry owning every live room.

    One instance is created per application and handed to each connection
    handler. All mutations happen on the event loop thread; a room's entry
    is created by its first connection and dropped with its last.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else RelayConfig()
        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        self._food = FoodSpawner(
            self.config.grid_width, self.config.grid_height, rng=rng,
        )
        self._rooms: dict[str, Room] = {}

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def room_state(self, room_id: str) -> RoomState | None:
        room = self._rooms.get(room_id)
        return room.state() if room is not None else None

    def list_rooms(self) -> list[RoomSummary]:
        return [
            RoomSummary(
                room_id=r.room_id,
                player_count=len(r.players),
                connection_count=len(r.connections),
            )
            for r in self._rooms.values()
        ]

    def resolve_room_id(self, room_id: str | None) -> str:
        return room_id or self.config.default_room_id

    def _new_food(self, room: Room | None = None) -> Cell:
        if room is not None and self.config.food_avoids_snakes:
            occupied = [c.as_tuple() for snake in room.players.values() for c in snake]
            cell = self._food.spawn(occupied)
            if cell is not None:
                return Cell.of(cell)
        return Cell.of(self._food.random_cell())

    def _new_player_id(self, room: Room) -> str:
        while True:
            player_id = "".join(
                secrets.choice(_ID_ALPHABET)
                for _ in range(self.config.player_id_length)
            )
            if player_id not in room.connections:
                return player_id

    async def connect(self, room_id: str | None, websocket: WebSocket) -> str:
        """Register *websocket* in a room and return its new player id.

        The socket must already be accepted.
        """
        room_id = self.resolve_room_id(room_id)
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id=room_id, food=self._new_food())
            self._rooms[room_id] = room
            logger.info("Room %s created.", room_id)

        player_id = self._new_player_id(room)
        room.connections[player_id] = websocket
        # Snapshot before any await so INIT reflects the state at join time.
        init = InitMessage(player_id=player_id, game_id=room_id, state=room.state())
        logger.info(
            "Player %s joined room %s (%d connected).",
            player_id, room_id, len(room.connections),
        )

        await self._send(room, player_id, websocket, encode(init))
        await self.broadcast(
            room_id, PlayerJoinedMessage(player_id=player_id), player_id,
        )
        return player_id

    async def update(
        self, room_id: str, player_id: str, snake: list[Cell],
    ) -> None:
        """Store *snake* for the player and broadcast the merged state."""
        room = self._rooms.get(room_id)
        if room is None or player_id not in room.connections:
            logger.debug(
                "Ignoring update from %s for unknown room %s.", player_id, room_id,
            )
            return

        room.players[player_id] = list(snake)
        if snake and snake[0] == room.food:
            eaten = room.food
            room.food = self._new_food(room)
            logger.debug(
                "Player %s ate food at (%d, %d) in room %s.",
                player_id, eaten.x, eaten.y, room_id,
            )

        await self.broadcast(room_id, GameStateMessage(state=room.state()))

    async def disconnect(self, room_id: str, player_id: str) -> None:
        """Drop the player; delete the room once its last connection is gone."""
        room = self._rooms.get(room_id)
        if room is None:
            return
        room.connections.pop(player_id, None)
        room.players.pop(player_id, None)
        logger.info("Player %s left room %s.", player_id, room_id)

        if not room.connections:
            del self._rooms[room_id]
            logger.info("Room %s deleted.", room_id)
            return

        await self.broadcast(room_id, PlayerLeftMessage(player_id=player_id))

    async def broadcast(
        self,
        room_id: str,
        message: BaseModel,
        exclude_player_id: str | None = None,
    ) -> None:
        """Send *message* to every connection in the room except one.

        Connections that join while the fan-out is running miss the message.
        """
        room = self._rooms.get(room_id)
        if room is None:
            return
        payload = encode(message)
        for player_id, ws in list(room.connections.items()):
            if player_id == exclude_player_id:
                continue
            await self._send(room, player_id, ws, payload)

    async def _send(
        self, room: Room, player_id: str, ws: WebSocket, payload: str,
    ) -> None:
        # A failed send is not an eviction; the close event does that.
        try:
            if ws.client_state == WebSocketState.CONNECTED:
                await ws.send_text(payload)
        except Exception:
            logger.warning(
                "Failed sending to player %s in room %s.",
                player_id, room.room_id,
            )

    async def cleanup(self) -> None:
        """Close every open connection and forget all rooms."""
        for room in list(self._rooms.values()):
            for player_id, ws in list(room.connections.items()):
                try:
                    if ws.client_state == WebSocketState.CONNECTED:
                        await ws.close(code=1001, reason="Relay shutting down.")
                except Exception:
                    logger.warning(
                        "Failed closing socket for player %s in room %s.",
                        player_id, room.room_id,
                    )
        self._rooms.clear()
        logger.info("RoomRegistry cleanup complete.")
