"""Base solver interface, result type and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any
import random
import time
import tracemalloc

from ..core.board import SudokuBoard, Grid


class Outcome(Enum):
    """How a solve attempt ended."""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Tentative assignments attempted, and assignments undone
    nodes_expanded: int = 0
    backtracks: int = 0
    # Branches cut by forward checking before recursing
    prunes: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def time_ms(self) -> float:
        return self.time_seconds * 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "time_ms": self.time_ms,
            "memory_bytes": self.memory_bytes,
            "nodes_expanded": self.nodes_expanded,
            "backtracks": self.backtracks,
            "prunes": self.prunes,
            "algorithm": self.algorithm,
            **self.extra
        }


@dataclass
class SolveResult:
    """
    Outcome of one solve attempt.

    ``solution`` is a complete, valid board when ``outcome`` is SOLVED and
    None when the search space was exhausted.
    """
    outcome: Outcome
    solution: Optional[SudokuBoard]
    stats: SolverStats

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


class BaseSolver(ABC):
    """
    Abstract base class for the search strategies.

    Each solver owns a seedable ``random.Random`` so repeated runs can be
    reproduced. Subclasses implement ``_solve`` on a private working grid.
    """

    name: str = "BaseSolver"
    label: str = ""

    def __init__(self, seed: Optional[int] = None, track_memory: bool = False):
        """
        Args:
            seed: Seed for the solver's random generator. None seeds from
                system entropy.
            track_memory: Record peak memory with tracemalloc (slows the
                search noticeably). When the caller is already tracing, the
                reported peak is that of the caller's session and tracing is
                left running.
        """
        self.rng = random.Random(seed)
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> SolveResult:
        """
        Solve a Sudoku puzzle with timing and node counting.

        The board itself is never modified. A board whose givens already
        conflict is reported unsolvable without searching.

        Args:
            board: The puzzle to solve.

        Returns:
            SolveResult with the solved board or the UNSOLVABLE outcome.
        """
        self.stats = SolverStats(algorithm=self.name)

        if not board.is_valid():
            self.stats.extra["reason"] = "conflicting givens"
            return SolveResult(Outcome.UNSOLVABLE, None, self.stats)

        grid = board.to_list()

        started_tracing = self.track_memory and not tracemalloc.is_tracing()
        if started_tracing:
            tracemalloc.start()

        start_time = time.perf_counter()
        try:
            found = self._solve(grid)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                if started_tracing:
                    tracemalloc.stop()
                self.stats.memory_bytes = peak

        if not found:
            return SolveResult(Outcome.UNSOLVABLE, None, self.stats)

        solution = SudokuBoard.from_2d_list(grid)
        self.stats.solved = solution.is_solved()
        if not self.stats.solved:
            raise RuntimeError(f"{self.name} reported an invalid solution")
        return SolveResult(Outcome.SOLVED, solution, self.stats)

    @abstractmethod
    def _solve(self, grid: Grid) -> bool:
        """
        Internal search to be implemented by subclasses.

        Args:
            grid: Private 9x9 working grid, filled in place.

        Returns:
            True if the grid was completed, False if the search was exhausted.
        """
        pass
