"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, matching screen coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        direction: Direction = Direction.UP,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[tuple[int, int]] = deque(
            (start_x - dx * i, start_y - dy * i) for i in range(length)
        )
        self.direction = direction

    @classmethod
    def from_cells(
        cls,
        cells: Iterable[tuple[int, int]],
        direction: Direction = Direction.UP,
    ) -> Snake:
        """Build a snake from an explicit head-first cell sequence."""
        body = deque(cells)
        if not body:
            raise ValueError("Snake length must be at least 1.")
        snake = cls.__new__(cls)
        snake.body = body
        snake.direction = direction
        return snake

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def set_direction(self, new_direction: Direction) -> bool:
        """Change direction, ignoring 180° reversals.

        Returns True if the direction was accepted.
        """
        if new_direction.opposite == self.direction:
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> tuple[int, int]:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(self, grow: bool = False) -> tuple[int, int] | None:
        """Move the snake one step forward.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(self.next_head())
        if grow:
            return None
        return self.body.pop()

    def occupies(self, x: int, y: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (x, y) in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [{"x": x, "y": y} for x, y in self.body],
            "direction": self.direction.name,
        }
