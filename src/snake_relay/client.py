"""Client-side state for one multiplayer player.

The session is transport independent: feed it every frame received from the
relay with :meth:`ClientSession.handle_message`, call
:meth:`ClientSession.tick` on a fixed interval, and send whatever messages
they return.
"""

from __future__ import annotations

import logging

from snake_relay.grid import Grid
from snake_relay.server.protocol import (
    Cell,
    GameStateMessage,
    IgnoredMessage,
    InitMessage,
    PlayerLeftMessage,
    RoomState,
    UpdateSnakeMessage,
    parse_server_message,
)
from snake_relay.snake import Direction, Snake

logger = logging.getLogger(__name__)


class ClientSession:
    """Local view of a room plus this player's own snake.

    Collision checks run against the last broadcast state, so other
    players' positions may be up to one update stale.
    """

    def __init__(
        self,
        grid_width: int = 20,
        grid_height: int = 20,
        initial_length: int = 3,
    ) -> None:
        self.grid = Grid(width=grid_width, height=grid_height)
        self._initial_length = initial_length
        self.snake = Snake(
            grid_width // 2, grid_height // 2, Direction.UP, length=initial_length,
        )
        self.player_id: str | None = None
        self.game_id: str | None = None
        self.players: dict[str, list[tuple[int, int]]] = {}
        self.food: tuple[int, int] | None = None
        self.game_over = False

    @property
    def joined(self) -> bool:
        return self.player_id is not None

    @property
    def score(self) -> int:
        return len(self.snake) - self._initial_length

    def _cache(self, state: RoomState) -> None:
        self.players = {
            pid: [c.as_tuple() for c in cells] for pid, cells in state.players
        }
        self.food = state.food.as_tuple()

    def _update_message(self) -> UpdateSnakeMessage:
        return UpdateSnakeMessage(snake=[Cell.of(c) for c in self.snake.body])

    def handle_message(self, raw: str) -> list[UpdateSnakeMessage]:
        """Apply one relay frame and return the messages to send back."""
        msg = parse_server_message(raw)
        if isinstance(msg, IgnoredMessage):
            return []

        if isinstance(msg, InitMessage):
            self.player_id = msg.player_id
            self.game_id = msg.game_id
            self._cache(msg.state)
            logger.info("Joined room %s as %s.", self.game_id, self.player_id)
            own = self.players.get(self.player_id)
            if not own:
                return [self._update_message()]
            self.snake = Snake.from_cells(own, self.snake.direction)
        elif isinstance(msg, GameStateMessage):
            self._cache(msg.state)
        elif isinstance(msg, PlayerLeftMessage):
            self.players.pop(msg.player_id, None)
        return []

    def set_direction(self, direction: Direction) -> bool:
        """Turn the snake unless *direction* reverses it."""
        return self.snake.set_direction(direction)

    def _collides(self, cell: tuple[int, int]) -> bool:
        if not self.grid.in_bounds(*cell):
            return True
        for pid, cells in self.players.items():
            # Our cached head is where we are now; only the body blocks us.
            body = cells[1:] if pid == self.player_id else cells
            if cell in body:
                return True
        return False

    def tick(self) -> UpdateSnakeMessage | None:
        """Move one step and return the update to send, if any."""
        if not self.joined or self.game_over:
            return None

        next_head = self.snake.next_head()
        if self._collides(next_head):
            self.game_over = True
            logger.info(
                "Game over for %s with length %d.", self.player_id, len(self.snake),
            )
            return None

        self.snake.advance(grow=next_head == self.food)
        return self._update_message()
