"""Constraint checking and validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import TYPE_CHECKING

from .board import SIZE, BOX_SIZE, Grid

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_legal(grid: Grid, row: int, col: int, digit: int) -> bool:
    """
    Check if placing a digit at (row, col) is legal.

    Scans the row, the column and the 3x3 box containing the cell. The
    result depends only on the current grid contents.

    Args:
        grid: 9x9 working grid, 0 for empty cells.
        row: Row index.
        col: Column index.
        digit: Digit to check (1-9).

    Returns:
        True if the digit does not already occupy any of the 27 cells.
    """
    if digit in grid[row]:
        return False

    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for i in range(SIZE):
        if grid[i][col] == digit:
            return False
        if grid[box_row + i // BOX_SIZE][box_col + i % BOX_SIZE] == digit:
            return False

    return True


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            if not puzzle.is_empty(i, j):
                if puzzle.get(i, j) != solution.get(i, j):
                    return False

    return solution.is_solved()
