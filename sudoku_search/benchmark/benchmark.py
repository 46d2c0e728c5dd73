"""Benchmarking framework for comparing the search strategies."""

from __future__ import annotations
import json
import os
import sys
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple

import numpy as np
from tqdm import tqdm

from ..core.board import SudokuBoard, PuzzleFormatError
from ..solvers import STRATEGIES, get_solver


DEFAULT_TRIALS = 10

# Batch runs go from the strongest strategy down to plain backtracking
BATCH_STRATEGY_ORDER = (3, 2, 1)


@dataclass
class BenchmarkResult:
    """Results from a single trial."""
    puzzle: str
    strategy: int
    algorithm: str
    trial: int
    solved: bool
    time_seconds: float
    nodes_expanded: int
    backtracks: int
    prunes: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def time_ms(self) -> float:
        return self.time_seconds * 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "strategy": self.strategy,
            "algorithm": self.algorithm,
            "trial": self.trial,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "time_ms": self.time_ms,
            "nodes_expanded": self.nodes_expanded,
            "backtracks": self.backtracks,
            "prunes": self.prunes,
            **self.extra
        }


@dataclass
class TrialSummary:
    """
    Aggregate of repeated trials for one (puzzle, strategy) pair.

    Standard deviations are population deviations over all trials,
    including trials that ended without a solution.
    """
    puzzle: str
    strategy: int
    algorithm: str
    results: List[BenchmarkResult] = field(default_factory=list)

    @property
    def trials(self) -> int:
        return len(self.results)

    @property
    def solved_count(self) -> int:
        return sum(1 for r in self.results if r.solved)

    @property
    def times_ms(self) -> np.ndarray:
        return np.array([r.time_ms for r in self.results], dtype=float)

    @property
    def nodes(self) -> np.ndarray:
        return np.array([r.nodes_expanded for r in self.results], dtype=float)

    @property
    def mean_time_ms(self) -> float:
        return float(np.mean(self.times_ms)) if self.results else 0.0

    @property
    def std_time_ms(self) -> float:
        return float(np.std(self.times_ms)) if self.results else 0.0

    @property
    def mean_nodes(self) -> float:
        return float(np.mean(self.nodes)) if self.results else 0.0

    @property
    def std_nodes(self) -> float:
        return float(np.std(self.nodes)) if self.results else 0.0

    def format_report(self) -> str:
        """Lines printed after each batch of trials."""
        lines = [
            f"Average time taken: {self.mean_time_ms:.3f} +- {self.std_time_ms:.3f} milliseconds",
            f"Average nodes expanded: {self.mean_nodes:.1f} +- {self.std_nodes:.1f}",
        ]
        if self.solved_count < self.trials:
            lines.append(f"No solution found in {self.trials - self.solved_count}/{self.trials} trials")
        return '\n'.join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "puzzle": self.puzzle,
            "strategy": self.strategy,
            "algorithm": self.algorithm,
            "trials": self.trials,
            "solved": self.solved_count,
            "mean_time_ms": self.mean_time_ms,
            "std_time_ms": self.std_time_ms,
            "mean_nodes_expanded": self.mean_nodes,
            "std_nodes_expanded": self.std_nodes,
        }


def list_puzzle_files(directory: str) -> List[str]:
    """
    List the files of a puzzle directory, sorted by name.

    Raises:
        OSError: if the directory cannot be read.
    """
    names = sorted(
        name for name in os.listdir(directory)
        if os.path.isfile(os.path.join(directory, name))
    )
    return [os.path.join(directory, name) for name in names]


class Benchmark:
    """
    Repeated-trial benchmark for the three search strategies.

    Every trial solves a fresh copy of the puzzle with its own node counter,
    so trials never see each other's state.
    """

    def __init__(
        self,
        trials: int = DEFAULT_TRIALS,
        strategies: Optional[List[int]] = None,
        seed: Optional[int] = None,
        show_progress: bool = True
    ):
        """
        Initialize the benchmark.

        Args:
            trials: Number of repeated runs per (puzzle, strategy) pair.
            strategies: Strategy numbers to run (default: 3, 2, 1).
            seed: Seed for the solvers' generators. None gives a different
                search order on every run.
            show_progress: Show tqdm progress bars during batch runs.
        """
        if trials < 1:
            raise ValueError(f"trials must be at least 1, got {trials}")
        strategies = list(strategies) if strategies is not None else list(BATCH_STRATEGY_ORDER)
        for strategy in strategies:
            if strategy not in STRATEGIES:
                raise ValueError(f"Unknown strategy {strategy!r}")

        self.trials = trials
        self.strategies = strategies
        self.seed = seed
        self.show_progress = show_progress

        self.summaries: List[TrialSummary] = []
        self.skipped: List[Tuple[str, str]] = []

    def run_puzzle(
        self,
        board: SudokuBoard,
        strategy: int,
        puzzle_name: str = "puzzle"
    ) -> TrialSummary:
        """Solve ``board`` ``trials`` times with one strategy."""
        solver = get_solver(strategy, seed=self.seed)
        summary = TrialSummary(puzzle_name, strategy, solver.name)

        for trial in range(1, self.trials + 1):
            result = solver.solve(board)
            stats = result.stats
            summary.results.append(BenchmarkResult(
                puzzle=puzzle_name,
                strategy=strategy,
                algorithm=solver.name,
                trial=trial,
                solved=result.solved,
                time_seconds=stats.time_seconds,
                nodes_expanded=stats.nodes_expanded,
                backtracks=stats.backtracks,
                prunes=stats.prunes,
                extra=dict(stats.extra)
            ))

        self.summaries.append(summary)
        return summary

    def load_puzzles(self, directory: str) -> List[Tuple[str, SudokuBoard]]:
        """
        Read every puzzle file in ``directory`` in name order.

        Unreadable or malformed files are reported on stderr, recorded in
        ``skipped`` and left out.
        """
        puzzles = []
        for path in list_puzzle_files(directory):
            try:
                puzzles.append((path, SudokuBoard.from_file(path)))
            except (OSError, UnicodeDecodeError, PuzzleFormatError) as e:
                print(f"Failed to open {path}: {e}", file=sys.stderr)
                self.skipped.append((path, str(e)))
        return puzzles

    def run_directory(self, directory: str) -> List[TrialSummary]:
        """
        Run every configured strategy against every puzzle in ``directory``.

        Raises:
            OSError: if the directory itself cannot be read.
        """
        puzzles = self.load_puzzles(directory)
        summaries = []

        with tqdm(
            total=len(puzzles) * len(self.strategies),
            desc="Benchmarking",
            disable=not self.show_progress
        ) as pbar:
            for strategy in self.strategies:
                for path, board in puzzles:
                    summaries.append(self.run_puzzle(board, strategy, path))
                    pbar.update(1)

        return summaries

    @property
    def results(self) -> List[BenchmarkResult]:
        return [r for s in self.summaries for r in s.results]

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics grouped by strategy."""
        summary: Dict[str, Any] = {
            "trials": self.trials,
            "strategies": self.strategies,
            "skipped": [path for path, _ in self.skipped],
            "results_by_strategy": {},
            "results_by_puzzle": [s.to_dict() for s in self.summaries],
        }

        for strategy in self.strategies:
            runs = [s for s in self.summaries if s.strategy == strategy]
            if not runs:
                continue
            times = np.concatenate([s.times_ms for s in runs])
            nodes = np.concatenate([s.nodes for s in runs])
            solved = sum(s.solved_count for s in runs)
            total = sum(s.trials for s in runs)
            summary["results_by_strategy"][STRATEGIES[strategy].label] = {
                "algorithm": runs[0].algorithm,
                "accuracy": solved / total * 100,
                "avg_time_ms": float(np.mean(times)),
                "avg_nodes_expanded": float(np.mean(nodes)),
                "total_solved": solved,
                "total_tested": total,
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save per-trial results and the summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        print(f"Results saved to {output_dir}")
