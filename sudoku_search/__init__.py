"""Backtracking, forward-checking and heuristic Sudoku search with benchmarking."""

__version__ = "1.0.0"
