"""Step-based single-player game engine."""

from __future__ import annotations

import logging

import numpy as np

from snake_relay.food import FoodSpawner
from snake_relay.grid import CellType, Grid
from snake_relay.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, step-based game engine.

    The snake starts at the grid center heading up. Nothing moves until
    :meth:`start` is called; each :meth:`step` then advances one tick.
    Food never spawns on the snake.
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        initial_length: int = 3,
        seed: int | None = None,
    ) -> None:
        self.grid = Grid(width=width, height=height)
        self.initial_length = initial_length
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(width, height, rng=self.rng)
        self._new_game()

    def _new_game(self) -> None:
        self.snake = Snake(
            self.grid.width // 2,
            self.grid.height // 2,
            Direction.UP,
            length=self.initial_length,
        )
        self.food = self.food_spawner.spawn(self.snake.body)
        self._repaint()
        self.score = 0
        self.tick = 0
        self.started = False
        self.game_over = False

    def _repaint(self) -> None:
        self.grid.clear()
        self.grid.occupy(self.snake.body)
        if self.food is not None:
            self.grid.set(*self.food, CellType.FOOD)

    def start(self) -> None:
        self.started = True

    def reset(self) -> None:
        """Start over with a fresh snake, food and score."""
        self._new_game()

    def set_direction(self, direction: Direction) -> bool:
        """Change direction unless it reverses the snake."""
        return self.snake.set_direction(direction)

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.game_over or not self.started:
            return self.get_state()

        next_x, next_y = self.snake.next_head()

        # The whole current body counts, tail included.
        if not self.grid.in_bounds(next_x, next_y) or self.snake.occupies(
            next_x, next_y,
        ):
            self._end_game()
            return self.get_state()

        will_grow = (next_x, next_y) == self.food
        self.snake.advance(grow=will_grow)
        if will_grow:
            self.score += 1
            self.food = self.food_spawner.spawn(self.snake.body)
            if self.food is None:
                logger.info("Board filled at tick %d.", self.tick)
        self._repaint()

        self.tick += 1
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "started": self.started,
            "game_over": self.game_over,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": (
                {"x": self.food[0], "y": self.food[1]}
                if self.food is not None else None
            ),
        }

    def _end_game(self) -> None:
        self.game_over = True
        logger.info("Snake died at tick %d with score %d.", self.tick, self.score)
