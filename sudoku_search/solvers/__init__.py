"""Solvers module: the three search strategies and their registry."""

from typing import Dict, Optional, Type

from .base_solver import BaseSolver, SolverStats, SolveResult, Outcome
from .backtracking_solver import BacktrackingSolver
from .forward_checking_solver import ForwardCheckingSolver
from .heuristic_solver import HeuristicSolver

# Strategy number -> solver class, as selected on the command line
STRATEGIES: Dict[int, Type[BaseSolver]] = {
    1: BacktrackingSolver,
    2: ForwardCheckingSolver,
    3: HeuristicSolver,
}


def get_solver(strategy: int, seed: Optional[int] = None, **kwargs) -> BaseSolver:
    """
    Instantiate the solver for a strategy number (1, 2, or 3).

    Raises:
        ValueError: if the strategy number is unknown.
    """
    try:
        solver_cls = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {strategy!r}, expected one of {sorted(STRATEGIES)}"
        ) from None
    return solver_cls(seed=seed, **kwargs)


__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolveResult",
    "Outcome",
    "BacktrackingSolver",
    "ForwardCheckingSolver",
    "HeuristicSolver",
    "STRATEGIES",
    "get_solver",
]
