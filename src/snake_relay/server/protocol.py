"""Pydantic models for the relay wire protocol.

Every frame is a JSON object whose ``type`` field selects one of five
message kinds. Frames that cannot be decoded map to :class:`IgnoredMessage`
instead of raising, so a bad frame never tears down a connection.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class Cell(BaseModel):
    """A single grid coordinate."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    @classmethod
    def of(cls, point: tuple[int, int]) -> Cell:
        return cls(x=point[0], y=point[1])

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y


class RoomState(BaseModel):
    """Merged room state: every player's snake plus the shared food."""

    players: list[tuple[str, list[Cell]]] = Field(default_factory=list)
    food: Cell

    def snakes(self) -> dict[str, list[Cell]]:
        return dict(self.players)


class _Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitMessage(_Message):
    """Sent once to a newly connected player."""

    type: Literal["INIT"] = "INIT"
    player_id: str = Field(alias="playerId")
    game_id: str = Field(alias="gameId")
    state: RoomState


class PlayerJoinedMessage(_Message):
    type: Literal["PLAYER_JOINED"] = "PLAYER_JOINED"
    player_id: str = Field(alias="playerId")


class GameStateMessage(_Message):
    type: Literal["GAME_STATE"] = "GAME_STATE"
    state: RoomState


class PlayerLeftMessage(_Message):
    type: Literal["PLAYER_LEFT"] = "PLAYER_LEFT"
    player_id: str = Field(alias="playerId")


class UpdateSnakeMessage(_Message):
    """Full replacement snake for the sending player, head first."""

    type: Literal["UPDATE_SNAKE"] = "UPDATE_SNAKE"
    snake: list[Cell] = Field(min_length=1)


ServerMessage = Union[
    InitMessage, PlayerJoinedMessage, GameStateMessage, PlayerLeftMessage,
]
ClientMessage = UpdateSnakeMessage


class IgnoreReason(str, enum.Enum):
    MALFORMED = "malformed"
    UNKNOWN_TYPE = "unknown_type"


@dataclass(frozen=True)
class IgnoredMessage:
    """Result of decoding a frame the receiver should drop."""

    reason: IgnoreReason
    detail: str = ""


_SERVER_TYPES: dict[str, type[BaseModel]] = {
    "INIT": InitMessage,
    "PLAYER_JOINED": PlayerJoinedMessage,
    "GAME_STATE": GameStateMessage,
    "PLAYER_LEFT": PlayerLeftMessage,
}

_CLIENT_TYPES: dict[str, type[BaseModel]] = {
    "UPDATE_SNAKE": UpdateSnakeMessage,
}


def _decode(raw: str | bytes, table: dict[str, type[BaseModel]]):
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Dropping unparseable message: %s", type(exc).__name__)
        return IgnoredMessage(IgnoreReason.MALFORMED, str(exc))
    if not isinstance(data, dict):
        logger.warning("Dropping non-object message of type %s.", type(data).__name__)
        return IgnoredMessage(IgnoreReason.MALFORMED, "payload is not an object")

    kind = data.get("type")
    model = table.get(kind) if isinstance(kind, str) else None
    if model is None:
        return IgnoredMessage(IgnoreReason.UNKNOWN_TYPE, repr(kind))

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "Dropping invalid %s message (%d errors).", kind, exc.error_count(),
        )
        return IgnoredMessage(IgnoreReason.MALFORMED, str(exc))


def parse_client_message(raw: str | bytes) -> ClientMessage | IgnoredMessage:
    """Decode a client→relay frame."""
    return _decode(raw, _CLIENT_TYPES)


def parse_server_message(raw: str | bytes) -> ServerMessage | IgnoredMessage:
    """Decode a relay→client frame."""
    return _decode(raw, _SERVER_TYPES)


def encode(message: BaseModel) -> str:
    """Serialize a message to compact JSON using wire field names."""
    return message.model_dump_json(by_alias=True)
