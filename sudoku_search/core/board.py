"""Sudoku board representation and the 81-digit puzzle encoding."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set


SIZE = 9
BOX_SIZE = 3
DIGITS = tuple(range(1, SIZE + 1))

Cell = Tuple[int, int]
Grid = List[List[int]]


class PuzzleFormatError(ValueError):
    """Raised when a puzzle string is not exactly 81 characters of 0-9."""


def _build_peers() -> List[List[Tuple[Cell, ...]]]:
    table = []
    for row in range(SIZE):
        table_row = []
        for col in range(SIZE):
            peers = []
            seen = {(row, col)}
            box_row = (row // BOX_SIZE) * BOX_SIZE
            box_col = (col // BOX_SIZE) * BOX_SIZE
            unit_cells = (
                [(row, i) for i in range(SIZE)]
                + [(i, col) for i in range(SIZE)]
                + [(box_row + i // BOX_SIZE, box_col + i % BOX_SIZE) for i in range(SIZE)]
            )
            for cell in unit_cells:
                if cell not in seen:
                    seen.add(cell)
                    peers.append(cell)
            table_row.append(tuple(peers))
        table.append(table_row)
    return table


_PEERS = _build_peers()


def peers(row: int, col: int) -> Tuple[Cell, ...]:
    """
    Get the 20 distinct cells sharing a row, column, or box with (row, col).

    Row peers come first, then column peers, then the remaining box peers.
    The cell itself is excluded.
    """
    return _PEERS[row][col]


def empty_cells(grid: Grid) -> List[Cell]:
    """Row-major list of empty positions in a working grid."""
    return [(r, c) for r in range(SIZE) for c in range(SIZE) if grid[r][c] == 0]


class SudokuBoard:
    """
    Represents a standard 9x9 Sudoku board with 3x3 boxes.

    Cells hold 0 for empty and 1-9 for a digit. Solvers never mutate a
    board directly; they work on ``to_list()`` copies.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates empty board.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.grid)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of digits that can be placed at (row, col).
            Returns empty set if cell is not empty.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())
        return set(DIGITS) - used

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        units = [self.get_row(i) for i in range(SIZE)]
        units += [self.get_col(j) for j in range(SIZE)]
        units += [
            self.get_box(box_row, box_col)
            for box_row in range(0, SIZE, BOX_SIZE)
            for box_col in range(0, SIZE, BOX_SIZE)
        ]
        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(np.unique(non_zero)):
                return False
        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_list(self) -> Grid:
        """Independent list-of-lists copy used as the search working grid."""
        return self.grid.tolist()

    def to_string(self) -> str:
        """Convert board to the 81-digit row-major encoding."""
        return ''.join(str(v) for v in self.grid.flatten().tolist())

    def dump(self) -> str:
        """Nine lines of space-separated digits."""
        return '\n'.join(' '.join(str(v) for v in row) for row in self.grid.tolist())

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-digit string, 0 for empty cells.

        Raises:
            PuzzleFormatError: if the string is not exactly 81 characters
                drawn from 0-9.
        """
        if len(s) != SIZE * SIZE:
            raise PuzzleFormatError(
                f"Puzzle must be {SIZE * SIZE} digits, got {len(s)} characters"
            )
        bad = sorted({c for c in s if c not in "0123456789"})
        if bad:
            raise PuzzleFormatError(f"Puzzle contains invalid characters: {''.join(bad)!r}")

        grid = np.array([int(c) for c in s], dtype=np.int32).reshape(SIZE, SIZE)
        return cls(grid)

    @classmethod
    def from_file(cls, path: str) -> SudokuBoard:
        """Read a puzzle file whose lines concatenate to the 81-digit encoding."""
        with open(path, "r") as f:
            text = ''.join(line.strip() for line in f)
        return cls.from_string(text)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        return cls(np.array(data, dtype=np.int32))

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)
