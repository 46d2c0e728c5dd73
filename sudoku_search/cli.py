"""Command-line interface for the Sudoku search benchmark."""

import argparse
import sys
from typing import List, Optional

from .benchmark import Benchmark, Visualizer
from .benchmark.benchmark import DEFAULT_TRIALS
from .core.board import SudokuBoard, PuzzleFormatError
from .solvers import STRATEGIES


DEFAULT_PUZZLE_DIR = "etc"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-search",
        description="Sudoku search strategies: backtracking, forward checking, heuristics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Strategies:
  1  plain backtracking (B)
  2  backtracking + forward checking (BTFC)
  3  backtracking + forward checking + MRV/LCV heuristics (BTFCH)

Examples:
  # Solve one puzzle file ten times with strategy 3
  python -m sudoku_search.cli solve etc/easy_1.txt 3

  # Same, using the numeric mode selector
  python -m sudoku_search.cli 1 etc/easy_1.txt 3

  # Run every strategy on every puzzle in etc/
  python -m sudoku_search.cli batch --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available modes")

    # Solve one file
    solve_parser = subparsers.add_parser(
        "solve", aliases=["1"], help="Solve one puzzle file with one strategy"
    )
    solve_parser.add_argument("puzzle_file", help="File holding the 81-digit puzzle")
    solve_parser.add_argument(
        "strategy", type=int, choices=sorted(STRATEGIES),
        help="Strategy number (1, 2, or 3)"
    )
    _add_trial_arguments(solve_parser)
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show the solved board and backtrack counts"
    )

    # Batch over a directory
    batch_parser = subparsers.add_parser(
        "batch", aliases=["2"], help="Run all strategies on every puzzle in a directory"
    )
    batch_parser.add_argument(
        "--directory", "-d", type=str, default=DEFAULT_PUZZLE_DIR,
        help=f"Puzzle directory (default: {DEFAULT_PUZZLE_DIR})"
    )
    _add_trial_arguments(batch_parser)
    batch_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output directory for JSON results and charts"
    )
    batch_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    batch_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    return parser


def _add_trial_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--trials", "-t", type=_positive_int, default=DEFAULT_TRIALS,
        help=f"Repeated runs per puzzle and strategy (default: {DEFAULT_TRIALS})"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducible search order"
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command in ("solve", "1"):
        code = cmd_solve(args)
    else:
        code = cmd_batch(args)

    if code:
        sys.exit(code)
    return code


def cmd_solve(args) -> int:
    """Handle the solve mode."""
    try:
        board = SudokuBoard.from_file(args.puzzle_file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading puzzle file: {e}", file=sys.stderr)
        return 1
    except PuzzleFormatError as e:
        print(f"Error parsing puzzle: {e}", file=sys.stderr)
        return 1

    print("Initial board:")
    print(board.dump())
    print()

    benchmark = Benchmark(trials=args.trials, strategies=[args.strategy], seed=args.seed)
    solver_cls = STRATEGIES[args.strategy]
    print(f"Solving with {solver_cls.name} ({solver_cls.label}), {args.trials} trials...")

    summary = benchmark.run_puzzle(board, args.strategy, args.puzzle_file)
    for result in summary.results:
        status = "" if result.solved else " (no solution)"
        line = f"Trial {result.trial}: {result.time_ms:.3f} ms, {result.nodes_expanded:,} nodes expanded{status}"
        if args.verbose:
            line += f", {result.backtracks:,} backtracks"
        print(line)
    print(summary.format_report())

    if args.verbose and summary.solved_count:
        # Solutions are discarded by the harness; re-solve once for display
        result = solver_cls(seed=args.seed).solve(board)
        if result.solved:
            print()
            print(result.solution)

    return 0


def cmd_batch(args) -> int:
    """Handle the batch mode."""
    benchmark = Benchmark(
        trials=args.trials,
        seed=args.seed,
        show_progress=not args.no_progress
    )

    print("=" * 60)
    print("SUDOKU SEARCH BENCHMARK")
    print("=" * 60)
    print(f"Directory: {args.directory}")
    print(f"Trials per puzzle: {args.trials}")
    print(f"Methods: {', '.join(STRATEGIES[s].label for s in benchmark.strategies)}")
    print("=" * 60)

    try:
        summaries = benchmark.run_directory(args.directory)
    except OSError as e:
        print(f"Could not open directory: {args.directory} ({e})", file=sys.stderr)
        return 1

    for strategy in benchmark.strategies:
        print(f"***Method***: {STRATEGIES[strategy].label}")
        for summary in summaries:
            if summary.strategy != strategy:
                continue
            print(f"Puzzle: {summary.puzzle}")
            print(summary.format_report())
            print("-" * 40)
        print("-" * 80 + "\n")

    if benchmark.skipped:
        print(f"Skipped {len(benchmark.skipped)} unreadable puzzle file(s)")

    overview = benchmark.get_summary()
    print("By Strategy:")
    for label, stats in overview["results_by_strategy"].items():
        print(f"\n{label} ({stats['algorithm']}):")
        print(f"  Solved: {stats['total_solved']}/{stats['total_tested']}")
        print(f"  Avg Time: {stats['avg_time_ms']:.3f} ms")
        print(f"  Avg Nodes: {stats['avg_nodes_expanded']:.1f}")

    if args.output:
        benchmark.save_results(args.output)
        if not args.no_charts and benchmark.results:
            print("\nGenerating charts...")
            visualizer = Visualizer(benchmark.results, args.output)
            charts = visualizer.generate_all()
            charts.append(visualizer.generate_summary_table())
            for chart in charts:
                print(f"  - {chart}")

    return 0


if __name__ == "__main__":
    main()
