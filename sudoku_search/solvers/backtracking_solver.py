"""Plain backtracking solver with randomized cell and value ordering."""

from __future__ import annotations
from typing import List

from .base_solver import BaseSolver
from ..core.board import DIGITS, Cell, Grid, empty_cells
from ..core.validator import is_legal


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over the empty cells in a shuffled order.

    Every node re-shuffles the full digit range 1-9 and keeps only the
    digits that pass ``is_legal``. No candidate sets are tracked.
    """

    name = "Backtracking"
    label = "B"

    def _solve(self, grid: Grid) -> bool:
        cells = empty_cells(grid)
        self.rng.shuffle(cells)
        return self._backtrack(grid, cells, 0)

    def _backtrack(self, grid: Grid, cells: List[Cell], index: int) -> bool:
        """Fill ``cells[index:]``; True once every cell holds a digit."""
        if index == len(cells):
            return True

        row, col = cells[index]
        domain = list(DIGITS)
        self.rng.shuffle(domain)

        for value in domain:
            if not is_legal(grid, row, col, value):
                continue

            grid[row][col] = value
            self.stats.nodes_expanded += 1

            if self._backtrack(grid, cells, index + 1):
                return True

            grid[row][col] = 0
            self.stats.backtracks += 1

        return False
