"""Relay server configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RelayConfig:
    """Settings for the relay process.

    Grid dimensions apply to food placement only; clients cannot change
    them. Supports JSON serialization so a deployment can pin its settings.
    """

    # Network
    host: str = "127.0.0.1"
    port: int = 8000

    # Game
    grid_width: int = 20
    grid_height: int = 20
    default_room_id: str = "default"
    player_id_length: int = 8
    food_avoids_snakes: bool = False
    seed: int | None = None

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535.")
        if self.grid_width < 4 or self.grid_height < 4:
            raise ValueError("grid_width and grid_height must each be at least 4.")
        if not self.default_room_id:
            raise ValueError("default_room_id must not be empty.")
        if not 4 <= self.player_id_length <= 32:
            raise ValueError("player_id_length must be between 4 and 32.")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}.")

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **overrides) -> RelayConfig:
        """Return a copy with *overrides* applied (``None`` values skipped)."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return RelayConfig(**d)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> RelayConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
