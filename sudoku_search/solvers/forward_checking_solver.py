"""Backtracking solver with forward checking over candidate sets."""

from __future__ import annotations
from typing import List

from .base_solver import BaseSolver
from ..core.board import Cell, Grid, empty_cells
from ..core.candidates import CandidateGrid
from ..core.validator import is_legal


class ForwardCheckingSolver(BaseSolver):
    """
    Backtracking over a shuffled cell order, trying only each cell's
    remaining candidates.

    After every assignment the digit is removed from the candidate sets of
    the empty peers. If a peer is left with nothing the branch is dropped
    before recursing. The propagation is undone on the way back up.
    """

    name = "Backtracking+FC"
    label = "BTFC"

    def _solve(self, grid: Grid) -> bool:
        candidates = CandidateGrid.from_grid(grid)
        if candidates.has_wipeout(grid):
            self.stats.extra["reason"] = "empty initial domain"
            return False

        cells = empty_cells(grid)
        self.rng.shuffle(cells)
        return self._search(grid, cells, 0, candidates)

    def _search(
        self,
        grid: Grid,
        cells: List[Cell],
        index: int,
        candidates: CandidateGrid
    ) -> bool:
        if index == len(cells):
            return True

        row, col = cells[index]
        domain = sorted(candidates.get(row, col))
        self.rng.shuffle(domain)

        for value in domain:
            # Candidate sets should already exclude this; re-checked anyway
            if not is_legal(grid, row, col, value):
                continue

            grid[row][col] = value
            self.stats.nodes_expanded += 1

            propagation = candidates.forward_check(grid, row, col, value)
            if propagation.consistent:
                if self._search(grid, cells, index + 1, candidates):
                    return True
            else:
                self.stats.prunes += 1

            propagation.undo()
            grid[row][col] = 0
            self.stats.backtracks += 1

        return False
