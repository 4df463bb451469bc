"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from snake_relay.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Picks food cells inside a fixed-size grid.

    Uses a NumPy RNG so placement is reproducible when seeded.
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = Grid(width=width, height=height)
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def random_cell(self) -> tuple[int, int]:
        """Return a uniformly random in-bounds cell, ignoring occupancy."""
        x = int(self.rng.integers(self.width))
        y = int(self.rng.integers(self.height))
        return x, y

    def spawn(
        self, occupied: Iterable[tuple[int, int]] = (),
    ) -> tuple[int, int] | None:
        """Return a random cell not covered by *occupied*.

        Returns ``None`` when every cell is occupied.
        """
        self.grid.clear()
        self.grid.occupy(occupied)
        empty = self.grid.empty_cells()
        if not empty:
            logger.warning("No empty cells available for food spawning.")
            return None
        return empty[int(self.rng.integers(len(empty)))]
