"""Snake Relay: snake game logic and multiplayer state relay."""

from snake_relay.client import ClientSession
from snake_relay.config import RelayConfig
from snake_relay.engine import GameEngine
from snake_relay.food import FoodSpawner
from snake_relay.grid import Grid
from snake_relay.snake import Direction, Snake

__all__ = [
    "ClientSession",
    "Direction",
    "FoodSpawner",
    "GameEngine",
    "Grid",
    "RelayConfig",
    "Snake",
]
