"""Tests for the Snake module."""

import pytest

from snake_relay.snake import Direction, Snake


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(10, 10)
        assert snake.head == (10, 10)
        assert len(snake) == 3
        assert snake.direction == Direction.UP

    def test_body_trails_below_when_heading_up(self):
        snake = Snake(10, 10, Direction.UP, length=3)
        assert list(snake.body) == [(10, 10), (10, 11), (10, 12)]

    def test_body_trails_left_when_heading_right(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        assert list(snake.body) == [(5, 5), (4, 5), (3, 5)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(0, 0, length=0)

    def test_from_cells(self):
        snake = Snake.from_cells([(5, 5), (5, 6)], Direction.UP)
        assert snake.head == (5, 5)
        assert len(snake) == 2

    def test_from_cells_empty(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake.from_cells([])


class TestSnakeDirection:
    def test_set_valid_direction(self):
        snake = Snake(5, 5, Direction.UP)
        assert snake.set_direction(Direction.LEFT)
        assert snake.direction == Direction.LEFT

    def test_ignore_180_reversal(self):
        snake = Snake(5, 5, Direction.UP)
        assert not snake.set_direction(Direction.DOWN)
        assert snake.direction == Direction.UP

    def test_ignore_180_reversal_horizontal(self):
        snake = Snake(5, 5, Direction.RIGHT)
        assert not snake.set_direction(Direction.LEFT)
        assert snake.direction == Direction.RIGHT

    def test_same_direction_accepted(self):
        snake = Snake(5, 5, Direction.UP)
        assert snake.set_direction(Direction.UP)

    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.LEFT.opposite is Direction.RIGHT


class TestSnakeMovement:
    def test_next_head_up_decreases_y(self):
        snake = Snake(5, 5, Direction.UP)
        assert snake.next_head() == (5, 4)

    def test_advance_drops_tail(self):
        snake = Snake(5, 5, Direction.UP, length=3)
        vacated = snake.advance()
        assert vacated == (5, 7)
        assert list(snake.body) == [(5, 4), (5, 5), (5, 6)]

    def test_advance_with_growth(self):
        snake = Snake(5, 5, Direction.UP, length=3)
        assert snake.advance(grow=True) is None
        assert len(snake) == 4
        assert snake.head == (5, 4)

    def test_occupies(self):
        snake = Snake(5, 5, Direction.UP, length=3)
        assert snake.occupies(5, 7)
        assert not snake.occupies(6, 5)


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake(1, 1, Direction.RIGHT, length=2)
        assert snake.to_dict() == {
            "body": [{"x": 1, "y": 1}, {"x": 0, "y": 1}],
            "direction": "RIGHT",
        }
