"""Forward-checking solver with MRV, most-constraining and LCV heuristics."""

from __future__ import annotations
from typing import List, Optional

from .base_solver import BaseSolver
from ..core.board import Cell, Grid, empty_cells, peers
from ..core.candidates import CandidateGrid
from ..core.validator import is_legal


class HeuristicSolver(BaseSolver):
    """
    Backtracking with forward checking and dynamic ordering.

    Features:
    - Minimum Remaining Values (MRV) to pick the next cell
    - Most-constraining-variable tie-break (most empty peers wins)
    - Least Constraining Value (LCV) ordering of the chosen cell's digits

    The empty cells are rescanned at every node. With ``shuffle_ties`` the
    rescanned list is shuffled by the solver's generator first, so cells
    still tied after the tie-break are picked at random but reproducibly
    for a given seed. Without it the first tied cell in row-major order
    wins.
    """

    name = "Backtracking+FC+Heuristics"
    label = "BTFCH"

    def __init__(
        self,
        seed: Optional[int] = None,
        track_memory: bool = False,
        shuffle_ties: bool = True
    ):
        super().__init__(seed=seed, track_memory=track_memory)
        self.shuffle_ties = shuffle_ties

    def _solve(self, grid: Grid) -> bool:
        candidates = CandidateGrid.from_grid(grid)
        return self._search(grid, candidates)

    def _search(self, grid: Grid, candidates: CandidateGrid) -> bool:
        cell = self.select_cell(grid, candidates)
        if cell is None:
            return True

        row, col = cell
        for value in self.order_values(grid, candidates, row, col):
            if not is_legal(grid, row, col, value):
                continue

            grid[row][col] = value
            self.stats.nodes_expanded += 1

            propagation = candidates.forward_check(grid, row, col, value)
            if propagation.consistent:
                if self._search(grid, candidates):
                    return True
            else:
                self.stats.prunes += 1

            propagation.undo()
            grid[row][col] = 0
            self.stats.backtracks += 1

        return False

    def select_cell(self, grid: Grid, candidates: CandidateGrid) -> Optional[Cell]:
        """
        Select the next empty cell.

        Picks the cell with the fewest remaining candidates. When several
        cells share that minimum, the one with the most empty peers is
        chosen. Returns None when the grid has no empty cells.
        """
        cells = empty_cells(grid)
        if not cells:
            return None
        if self.shuffle_ties:
            self.rng.shuffle(cells)

        min_size = min(candidates.size(r, c) for r, c in cells)
        tied = [(r, c) for r, c in cells if candidates.size(r, c) == min_size]
        if len(tied) == 1:
            return tied[0]

        return max(tied, key=lambda cell: count_empty_peers(grid, *cell))

    def order_values(
        self,
        grid: Grid,
        candidates: CandidateGrid,
        row: int,
        col: int
    ) -> List[int]:
        """
        Order the candidates of (row, col) by least constraining value.

        A digit's cost is the number of empty peers that still list it as a
        candidate. Lower cost is tried first; equal costs keep ascending
        digit order.
        """
        empty_peers = [(r, c) for r, c in peers(row, col) if grid[r][c] == 0]

        def cost(value: int) -> int:
            return sum(1 for r, c in empty_peers if value in candidates.get(r, c))

        return sorted(sorted(candidates.get(row, col)), key=cost)


def count_empty_peers(grid: Grid, row: int, col: int) -> int:
    """Number of still-empty cells sharing a row, column, or box with (row, col)."""
    return sum(1 for r, c in peers(row, col) if grid[r][c] == 0)
