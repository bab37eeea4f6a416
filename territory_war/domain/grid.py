"""Fixed-size tile grid with two-team ownership.

Ownership invariant: every cell holds exactly one of ``Team.LEFT`` or
``Team.RIGHT``. Cells are never created or destroyed, only re-owned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class Team(IntEnum):
    """The two competing teams. Values double as grid cell codes."""

    LEFT = 0
    RIGHT = 1

    @property
    def opponent(self) -> Team:
        return Team.RIGHT if self is Team.LEFT else Team.LEFT

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass
class TileGrid:
    """Row-major ``(rows, cols)`` ownership array mutated in place."""

    cells: np.ndarray

    @classmethod
    def create(cls, rows: int, cols: int) -> TileGrid:
        """Initial split: columns left of the midline belong to LEFT."""
        cells = np.full((rows, cols), int(Team.RIGHT), dtype=np.int8)
        left_cols = np.arange(cols) < cols / 2
        cells[:, left_cols] = int(Team.LEFT)
        return cls(cells=cells)

    @property
    def rows(self) -> int:
        return int(self.cells.shape[0])

    @property
    def cols(self) -> int:
        return int(self.cells.shape[1])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def owner(self, row: int, col: int) -> Team:
        return Team(int(self.cells[row, col]))

    def convert(self, row: int, col: int, team: Team) -> bool:
        """Give the cell to ``team``; return True iff ownership changed.

        Callers bounds-check first; out-of-range coordinates are a no-op.
        """
        if not self.in_bounds(row, col):
            return False
        if self.cells[row, col] == team:
            return False
        self.cells[row, col] = int(team)
        return True

    def count_by_team(self) -> dict[Team, int]:
        left = int(np.count_nonzero(self.cells == Team.LEFT))
        return {Team.LEFT: left, Team.RIGHT: int(self.cells.size) - left}

    def to_array(self) -> np.ndarray:
        """Return a read-only copy suitable for publishing in a snapshot."""
        frozen = self.cells.copy()
        frozen.setflags(write=False)
        return frozen


def cell_at(x: float, y: float, tile_width: float, tile_height: float) -> tuple[int, int] | None:
    """Map a world-pixel position to ``(row, col)`` by flooring.

    Returns None for non-finite input or a degenerate tile pitch.
    """
    if tile_width <= 0 or tile_height <= 0:
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return math.floor(y / tile_height), math.floor(x / tile_width)
