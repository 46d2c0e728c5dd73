"""Unit tests for the three search strategies."""

import tracemalloc

import pytest
from sudoku_search.core.board import SudokuBoard
from sudoku_search.core.candidates import CandidateGrid
from sudoku_search.core.validator import validate_solution
from sudoku_search.solvers import (
    BacktrackingSolver, ForwardCheckingSolver, HeuristicSolver,
    Outcome, STRATEGIES, get_solver
)


# A known solvable puzzle (easy)
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

# The solution to the test puzzle
TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Two 5s in the first row
DUPLICATE_GIVEN_PUZZLE = "55" + TEST_PUZZLE[2:]

# Givens are consistent, but cells (0, 8) and (1, 5) have no legal digit
DEAD_CELL_PUZZLE = (
    "123456780"
    "456780129"
    "789123456"
    "234567891"
    "567891234"
    "891234567"
    "345678912"
    "678912345"
    "912345678"
)

# Empty first row: every column is missing exactly one digit
FREE_FIRST_ROW = "0" * 9 + TEST_SOLUTION[9:]

# Every third cell of the solution blanked
SPARSE_BLANKS = "".join("0" if i % 3 == 0 else ch for i, ch in enumerate(TEST_SOLUTION))

ALL_SOLVERS = [BacktrackingSolver, ForwardCheckingSolver, HeuristicSolver]


def assert_valid_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> None:
    grid = solution.grid
    assert solution.count_empty() == 0
    for i in range(9):
        assert sorted(grid[i, :].tolist()) == list(range(1, 10))
        assert sorted(grid[:, i].tolist()) == list(range(1, 10))
    for box_row in range(0, 9, 3):
        for box_col in range(0, 9, 3):
            box = grid[box_row:box_row + 3, box_col:box_col + 3].flatten().tolist()
            assert sorted(box) == list(range(1, 10))
    assert validate_solution(puzzle, solution)


class TestRegistry:
    """Tests for strategy lookup."""

    def test_strategy_numbers(self):
        assert STRATEGIES[1] is BacktrackingSolver
        assert STRATEGIES[2] is ForwardCheckingSolver
        assert STRATEGIES[3] is HeuristicSolver

    def test_labels(self):
        assert [STRATEGIES[i].label for i in (1, 2, 3)] == ["B", "BTFC", "BTFCH"]

    def test_get_solver(self):
        solver = get_solver(3, seed=7)
        assert isinstance(solver, HeuristicSolver)

    def test_get_solver_unknown(self):
        with pytest.raises(ValueError):
            get_solver(4)


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
class TestAllStrategies:
    """Properties shared by every strategy."""

    def test_solve_puzzle(self, solver_cls):
        """Test solving the easy puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        result = solver_cls(seed=1).solve(board)

        assert result.solved
        assert result.outcome is Outcome.SOLVED
        assert result.stats.solved
        assert result.solution.to_string() == TEST_SOLUTION
        assert_valid_solution(board, result.solution)

    def test_input_board_untouched(self, solver_cls):
        board = SudokuBoard.from_string(SPARSE_BLANKS)
        solver_cls(seed=2).solve(board)
        assert board.to_string() == SPARSE_BLANKS

    def test_stats_collected(self, solver_cls):
        """Test that stats are collected."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        result = solver_cls(seed=3).solve(board)

        assert result.stats.time_seconds > 0
        # Every empty cell needs at least one assignment
        assert result.stats.nodes_expanded >= board.count_empty()
        assert result.stats.nodes_expanded == board.count_empty() + result.stats.backtracks
        assert result.stats.algorithm == solver_cls.name

    def test_duplicate_given_is_unsolvable(self, solver_cls):
        board = SudokuBoard.from_string(DUPLICATE_GIVEN_PUZZLE)
        result = solver_cls(seed=4).solve(board)

        assert not result.solved
        assert result.outcome is Outcome.UNSOLVABLE
        assert result.solution is None
        assert result.stats.nodes_expanded == 0

    def test_dead_cell_is_unsolvable(self, solver_cls):
        board = SudokuBoard.from_string(DEAD_CELL_PUZZLE)
        assert board.is_valid()

        result = solver_cls(seed=5).solve(board)

        assert result.outcome is Outcome.UNSOLVABLE
        assert result.solution is None
        assert not result.stats.solved

    def test_different_seeds_converge(self, solver_cls):
        board = SudokuBoard.from_string(FREE_FIRST_ROW)
        for seed in (10, 11, 12):
            result = solver_cls(seed=seed).solve(board)
            assert result.solved
            assert_valid_solution(board, result.solution)

    def test_same_seed_reproduces_node_count(self, solver_cls):
        board = SudokuBoard.from_string(SPARSE_BLANKS)
        first = solver_cls(seed=42).solve(board)
        second = solver_cls(seed=42).solve(board)
        assert first.stats.nodes_expanded == second.stats.nodes_expanded

    def test_repeated_solves_are_independent(self, solver_cls):
        board = SudokuBoard.from_string(SPARSE_BLANKS)
        solver = solver_cls(seed=6)
        first = solver.solve(board)
        second = solver.solve(board)
        assert first.solved and second.solved
        assert second.stats is not first.stats
        assert second.stats.nodes_expanded >= board.count_empty()

    def test_solved_board_needs_no_search(self, solver_cls):
        board = SudokuBoard.from_string(TEST_SOLUTION)
        result = solver_cls(seed=7).solve(board)
        assert result.solved
        assert result.stats.nodes_expanded == 0

    def test_memory_tracking(self, solver_cls):
        board = SudokuBoard.from_string(FREE_FIRST_ROW)
        result = solver_cls(seed=8, track_memory=True).solve(board)
        assert result.solved
        assert result.stats.memory_bytes > 0


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
class TestMemoryTracking:
    """A tracked solve only stops the tracemalloc session it started."""

    def test_tracing_stopped_after_tracked_solve(self, solver_cls):
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc enabled for the whole session")
        result = solver_cls(seed=8, track_memory=True).solve(
            SudokuBoard.from_string(FREE_FIRST_ROW)
        )
        assert result.solved
        assert not tracemalloc.is_tracing()

    def test_caller_tracing_left_running(self, solver_cls):
        started = not tracemalloc.is_tracing()
        if started:
            tracemalloc.start()
        try:
            result = solver_cls(seed=8, track_memory=True).solve(
                SudokuBoard.from_string(FREE_FIRST_ROW)
            )
            assert result.solved
            assert result.stats.memory_bytes > 0
            assert tracemalloc.is_tracing()
        finally:
            if started:
                tracemalloc.stop()


class TestNodeCounts:
    """Comparisons across strategies."""

    def test_heuristics_expand_no_more_than_backtracking(self):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        seeds = range(5)

        plain = [BacktrackingSolver(seed=s).solve(board).stats.nodes_expanded for s in seeds]
        heuristic = [HeuristicSolver(seed=s).solve(board).stats.nodes_expanded for s in seeds]

        assert sum(heuristic) / len(heuristic) <= sum(plain) / len(plain)


class TestForwardChecking:
    """Forward checking must cut branches before recursing."""

    @pytest.mark.parametrize("solver_cls", [ForwardCheckingSolver, HeuristicSolver])
    def test_recursion_only_after_consistent_propagation(self, solver_cls, monkeypatch):
        propagations = []
        searches = []

        original_forward_check = CandidateGrid.forward_check
        original_search = solver_cls._search

        def spy_forward_check(self, *args):
            propagation = original_forward_check(self, *args)
            propagations.append(propagation.consistent)
            return propagation

        def spy_search(self, *args):
            searches.append(1)
            return original_search(self, *args)

        monkeypatch.setattr(CandidateGrid, "forward_check", spy_forward_check)
        monkeypatch.setattr(solver_cls, "_search", spy_search)

        board = SudokuBoard.from_string(TEST_PUZZLE)
        solver = solver_cls(seed=9)
        result = solver.solve(board)

        assert result.solved
        assert len(propagations) == result.stats.nodes_expanded
        # Root call plus one call per consistent propagation
        assert len(searches) == 1 + sum(propagations)
        assert result.stats.prunes == propagations.count(False)

    def test_empty_initial_domain_fails_without_expansion(self):
        board = SudokuBoard.from_string(DEAD_CELL_PUZZLE)
        result = ForwardCheckingSolver(seed=1).solve(board)
        assert result.outcome is Outcome.UNSOLVABLE
        assert result.stats.nodes_expanded == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
