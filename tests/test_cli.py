"""Tests for the command-line interface."""

import os

import pytest

from sudoku_search.cli import main, build_parser


TEST_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
TEST_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
EASY_PUZZLE = "0" * 18 + TEST_SOLUTION[18:]


@pytest.fixture
def puzzle_file(tmp_path):
    path = tmp_path / "puzzle.txt"
    path.write_text("\n".join(TEST_PUZZLE[i:i + 9] for i in range(0, 81, 9)) + "\n")
    return str(path)


@pytest.fixture
def puzzle_dir(tmp_path):
    directory = tmp_path / "etc"
    directory.mkdir()
    (directory / "a.txt").write_text(EASY_PUZZLE)
    (directory / "b.txt").write_text("not a puzzle")
    return str(directory)


class TestParser:

    def test_numeric_mode_aliases(self):
        args = build_parser().parse_args(["1", "p.txt", "2"])
        assert args.command == "1"
        assert args.puzzle_file == "p.txt"
        assert args.strategy == 2
        assert args.trials == 10

        args = build_parser().parse_args(["2"])
        assert args.command == "2"
        assert args.directory == "etc"

    def test_invalid_strategy(self):
        with pytest.raises(SystemExit) as exc:
            main(["solve", "p.txt", "4"])
        assert exc.value.code != 0

    def test_missing_arguments(self):
        with pytest.raises(SystemExit) as exc:
            main(["solve", "p.txt"])
        assert exc.value.code != 0

    def test_invalid_trials(self):
        with pytest.raises(SystemExit) as exc:
            main(["solve", "p.txt", "1", "--trials", "0"])
        assert exc.value.code != 0

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1


class TestSolveCommand:

    def test_solve_prints_board_and_stats(self, puzzle_file, capsys):
        assert main(["solve", puzzle_file, "3", "--trials", "3", "--seed", "1"]) == 0

        out = capsys.readouterr().out
        assert "Initial board:" in out
        assert "5 3 0 0 7 0 0 0 0" in out
        assert out.count("Trial ") == 3
        assert "nodes expanded" in out
        assert "Average time taken:" in out
        assert "milliseconds" in out
        assert "Average nodes expanded:" in out

    def test_numeric_mode(self, puzzle_file, capsys):
        assert main(["1", puzzle_file, "2", "-t", "2", "-s", "4"]) == 0
        assert "Average nodes expanded:" in capsys.readouterr().out

    def test_verbose_shows_solution(self, puzzle_file, capsys):
        assert main(["solve", puzzle_file, "3", "-t", "1", "-v"]) == 0
        out = capsys.readouterr().out
        assert "backtracks" in out
        assert "| 5 3 4 |" in out

    def test_unsolvable_is_reported(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("55" + TEST_PUZZLE[2:])
        assert main(["solve", str(path), "1", "-t", "2"]) == 0
        assert "No solution found in 2/2 trials" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["solve", str(tmp_path / "missing.txt"), "1"])
        assert exc.value.code == 1
        assert "Error reading puzzle file" in capsys.readouterr().err

    def test_malformed_file(self, tmp_path, capsys):
        path = tmp_path / "short.txt"
        path.write_text("123")
        with pytest.raises(SystemExit) as exc:
            main(["solve", str(path), "1"])
        assert exc.value.code == 1
        assert "Error parsing puzzle" in capsys.readouterr().err


class TestBatchCommand:

    def test_batch_runs_all_methods(self, puzzle_dir, capsys):
        assert main(["batch", "-d", puzzle_dir, "-t", "2", "--no-progress"]) == 0

        captured = capsys.readouterr()
        out = captured.out
        assert out.index("***Method***: BTFCH") < out.index("***Method***: BTFC\n") \
            < out.index("***Method***: B\n")
        assert out.count("Puzzle: ") == 3
        assert "Skipped 1 unreadable puzzle file(s)" in out
        assert "Failed to open" in captured.err

    def test_batch_missing_directory(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["2", "-d", str(tmp_path / "nowhere"), "--no-progress"])
        assert exc.value.code == 1
        assert "Could not open directory" in capsys.readouterr().err

    def test_batch_writes_results_and_charts(self, puzzle_dir, tmp_path):
        output = tmp_path / "results"
        assert main([
            "batch", "-d", puzzle_dir, "-t", "2", "-s", "3",
            "--no-progress", "-o", str(output)
        ]) == 0

        files = set(os.listdir(output))
        assert {"benchmark_results.json", "benchmark_summary.json"} <= files
        assert {"time_comparison.png", "nodes_comparison.png", "benchmark_summary.md"} <= files

    def test_batch_no_charts(self, puzzle_dir, tmp_path):
        output = tmp_path / "results"
        assert main([
            "batch", "-d", puzzle_dir, "-t", "1", "--no-progress",
            "--no-charts", "-o", str(output)
        ]) == 0
        assert not any(name.endswith(".png") for name in os.listdir(output))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
