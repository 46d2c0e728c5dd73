"""Core module for Sudoku board representation, constraints and candidate sets."""

from .board import SudokuBoard, PuzzleFormatError, peers, empty_cells
from .validator import is_legal, validate_solution
from .candidates import CandidateGrid, Propagation

__all__ = [
    "SudokuBoard",
    "PuzzleFormatError",
    "peers",
    "empty_cells",
    "is_legal",
    "validate_solution",
    "CandidateGrid",
    "Propagation",
]
