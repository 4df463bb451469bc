"""Grid bounds and occupancy for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed occupancy grid.

    Coordinates are ``(x, y)`` pairs; the backing array is indexed
    ``[y, x]`` so that rows run top to bottom.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        self.cells[y, x] = cell_type

    def occupy(
        self,
        cells: Iterable[tuple[int, int]],
        cell_type: CellType = CellType.SNAKE,
    ) -> None:
        """Mark every in-bounds cell of *cells* with *cell_type*."""
        for x, y in cells:
            if self.in_bounds(x, y):
                self.cells[y, x] = cell_type

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return all empty cells as ``(x, y)`` pairs."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}
