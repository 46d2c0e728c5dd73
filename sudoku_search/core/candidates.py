"""Candidate sets (domains) and forward checking for empty cells."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .board import SIZE, DIGITS, Cell, Grid, peers


@dataclass
class Propagation:
    """
    Undo log for one forward-checking step.

    ``removed`` lists the cells that lost ``value`` from their candidate
    set, in the order they were pruned. ``consistent`` is False when a
    pruned cell was left with no candidates; pruning stops at that cell.
    """
    candidates: CandidateGrid
    value: int
    removed: List[Cell] = field(default_factory=list)
    consistent: bool = True

    def undo(self) -> None:
        """Restore every candidate removed by this step."""
        for row, col in reversed(self.removed):
            self.candidates.cells[row][col].add(self.value)
        self.removed.clear()


class CandidateGrid:
    """
    Per-cell candidate sets used by the forward-checking strategies.

    Empty cells start from 1-9 minus every digit already placed among
    their peers. Filled cells carry an empty set.
    """

    def __init__(self, cells: Optional[List[List[Set[int]]]] = None):
        if cells is None:
            cells = [[set() for _ in range(SIZE)] for _ in range(SIZE)]
        if len(cells) != SIZE or any(len(row) != SIZE for row in cells):
            raise ValueError(f"Candidate grid must be {SIZE}x{SIZE}")
        self.cells = cells

    @classmethod
    def from_grid(cls, grid: Grid) -> CandidateGrid:
        """Compute the initial candidate sets from the given cells."""
        cells = []
        for row in range(SIZE):
            cells_row = []
            for col in range(SIZE):
                if grid[row][col] != 0:
                    cells_row.append(set())
                    continue
                used = {grid[r][c] for r, c in peers(row, col)}
                cells_row.append(set(DIGITS) - used)
            cells.append(cells_row)
        return cls(cells)

    def copy(self) -> CandidateGrid:
        """Independent snapshot of every candidate set."""
        return CandidateGrid([[set(s) for s in row] for row in self.cells])

    def get(self, row: int, col: int) -> Set[int]:
        return self.cells[row][col]

    def size(self, row: int, col: int) -> int:
        return len(self.cells[row][col])

    def has_wipeout(self, grid: Grid) -> bool:
        """True if some empty cell has no candidates left."""
        return any(
            grid[r][c] == 0 and not self.cells[r][c]
            for r in range(SIZE) for c in range(SIZE)
        )

    def forward_check(self, grid: Grid, row: int, col: int, value: int) -> Propagation:
        """
        Remove ``value`` from every empty peer of (row, col).

        Must be called after ``value`` has been written to ``grid``. Stops
        at the first peer whose candidate set becomes empty and marks the
        propagation inconsistent. Call ``undo()`` on the result to roll the
        step back.
        """
        propagation = Propagation(self, value)
        for r, c in peers(row, col):
            if grid[r][c] != 0:
                continue
            domain = self.cells[r][c]
            if value in domain:
                domain.discard(value)
                propagation.removed.append((r, c))
                if not domain:
                    propagation.consistent = False
                    break
        return propagation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateGrid):
            return False
        return self.cells == other.cells

    def __repr__(self) -> str:
        open_cells = sum(1 for row in self.cells for s in row if s)
        return f"CandidateGrid(open_cells={open_cells})"
