"""Tests for the single-player GameEngine."""

import json

from snake_relay.engine import GameEngine
from snake_relay.grid import CellType
from snake_relay.snake import Direction


def _started(**kwargs) -> GameEngine:
    engine = GameEngine(seed=0, **kwargs)
    engine.food = (0, 0)
    engine.start()
    return engine


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(seed=0)
        assert engine.score == 0
        assert engine.tick == 0
        assert not engine.started
        assert not engine.game_over

    def test_snake_starts_center_heading_up(self):
        engine = GameEngine(width=20, height=20, seed=0)
        assert list(engine.snake.body) == [(10, 10), (10, 11), (10, 12)]
        assert engine.snake.direction == Direction.UP

    def test_food_not_on_snake(self):
        for seed in range(30):
            engine = GameEngine(width=5, height=5, seed=seed)
            assert engine.food is not None
            assert not engine.snake.occupies(*engine.food)

    def test_food_painted_on_grid(self):
        engine = GameEngine(seed=1)
        x, y = engine.food
        assert engine.grid.cells[y, x] == CellType.FOOD


class TestEngineMovement:
    def test_no_movement_before_start(self):
        engine = GameEngine(seed=0)
        state = engine.step()
        assert state["tick"] == 0
        assert engine.snake.head == (10, 10)

    def test_basic_step_moves_up(self):
        engine = _started()
        state = engine.step()
        assert engine.snake.head == (10, 9)
        assert len(engine.snake) == 3
        assert state["tick"] == 1

    def test_direction_change(self):
        engine = _started()
        assert engine.set_direction(Direction.LEFT)
        engine.step()
        assert engine.snake.head == (9, 10)

    def test_reverse_rejected(self):
        engine = _started()
        assert not engine.set_direction(Direction.DOWN)
        engine.step()
        assert engine.snake.head == (10, 9)

    def test_game_over_stops_ticks(self):
        engine = _started()
        engine.game_over = True
        state = engine.step()
        assert state["tick"] == 0


class TestEngineCollision:
    def test_wall_ends_game(self):
        engine = _started()
        for _ in range(10):
            engine.step()
        assert engine.snake.head == (10, 0)
        assert not engine.game_over
        engine.step()
        assert engine.game_over
        assert engine.snake.head == (10, 0)

    def test_self_collision(self):
        engine = _started(initial_length=5)
        engine.set_direction(Direction.LEFT)
        engine.step()
        engine.set_direction(Direction.DOWN)
        engine.step()
        engine.set_direction(Direction.RIGHT)
        engine.step()
        assert engine.game_over

    def test_moving_into_current_tail_is_fatal(self):
        engine = _started(initial_length=4)
        # Square loop: the fourth move lands on the current tail cell.
        engine.set_direction(Direction.LEFT)
        engine.step()
        engine.set_direction(Direction.DOWN)
        engine.step()
        engine.set_direction(Direction.RIGHT)
        engine.step()
        assert engine.game_over


class TestEngineFood:
    def test_eating_grows_and_scores(self):
        engine = _started()
        engine.food = (10, 9)
        engine.step()
        assert engine.score == 1
        assert len(engine.snake) == 4
        assert engine.food != (10, 9)
        assert not engine.snake.occupies(*engine.food)

    def test_not_eating_keeps_length(self):
        engine = _started()
        for _ in range(3):
            engine.step()
        assert len(engine.snake) == 3
        assert engine.score == 0


class TestEngineReset:
    def test_reset(self):
        engine = _started()
        engine.food = (10, 9)
        engine.step()
        engine.reset()
        assert engine.score == 0
        assert engine.tick == 0
        assert not engine.started
        assert not engine.game_over
        assert engine.snake.head == (10, 10)
        assert len(engine.snake) == 3


class TestEngineState:
    def test_state_is_json_serializable(self):
        engine = _started()
        state = engine.step()
        decoded = json.loads(json.dumps(state))
        assert decoded["snake"]["body"][0] == {"x": 10, "y": 9}
        assert decoded["food"] == {"x": 0, "y": 0}
        assert decoded["grid"] == {"width": 20, "height": 20}
