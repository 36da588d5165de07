"""Unit tests for the benchmark runner and charts."""

import json
import os

import matplotlib
matplotlib.use("Agg")

import pytest

from sudoku_engine.benchmark import Benchmark, Visualizer
from sudoku_engine.core.board import Board
from sudoku_engine.puzzle.report import format_board


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


@pytest.fixture
def puzzle_files(tmp_path):
    """An easy puzzle, a puzzle with duplicate givens and an unreadable file."""
    easy = tmp_path / "easy.txt"
    easy.write_text(format_board(Board.from_string(TEST_PUZZLE)))
    duplicate = tmp_path / "duplicate.txt"
    duplicate.write_text(format_board(Board.from_string("55" + TEST_PUZZLE[2:])))
    broken = tmp_path / "broken.txt"
    broken.write_text("garbage\n")
    return [str(easy), str(duplicate), str(broken)]


class TestBenchmark:
    """Tests for Benchmark."""

    def test_run(self, puzzle_files):
        """Test that every file yields a result in input order."""
        results = Benchmark(puzzle_files).run(show_progress=False)

        assert [r.outcome for r in results] == ["solved", "invalid_setup", "load_error"]
        assert results[0].solved
        assert results[0].size == 9
        assert results[0].occupied_originally == 30
        assert results[1].extra["violation"] == "Row 1 contains 5 2 times"
        assert results[2].size == 0
        assert "error" in results[2].extra

    def test_summary(self, puzzle_files):
        """Test summary statistics by board size."""
        benchmark = Benchmark(puzzle_files)
        benchmark.run(show_progress=False)
        summary = benchmark.get_summary()

        assert summary["total_puzzles"] == 3
        assert summary["algorithm"] == "Propagation+Backtracking"
        assert summary["outcomes"] == {"solved": 1, "invalid_setup": 1, "load_error": 1}
        by_size = summary["results_by_size"]["9x9"]
        assert by_size["total_tested"] == 2
        assert by_size["total_solved"] == 1
        assert by_size["accuracy"] == pytest.approx(50.0)

    def test_save_results(self, puzzle_files, tmp_path):
        """Test that results and summary are written as JSON."""
        benchmark = Benchmark(puzzle_files)
        benchmark.run(show_progress=False)
        output_dir = tmp_path / "results"
        benchmark.save_results(str(output_dir))

        with open(output_dir / "benchmark_results.json") as f:
            results = json.load(f)
        with open(output_dir / "benchmark_summary.json") as f:
            summary = json.load(f)

        assert len(results) == 3
        assert results[0]["outcome"] == "solved"
        assert results[0]["deductions"] == (
            results[0]["frozen_singleton"] + results[0]["frozen_row"]
            + results[0]["frozen_column"] + results[0]["frozen_subsquare"]
        )
        assert summary["total_puzzles"] == 3


class TestVisualizer:
    """Tests for Visualizer."""

    def test_generate_all(self, puzzle_files, tmp_path):
        """Test that every chart is written."""
        results = Benchmark(puzzle_files).run(show_progress=False)
        visualizer = Visualizer(results, str(tmp_path / "charts"))

        assert len(visualizer.results) == 2
        charts = visualizer.generate_all()

        assert len(charts) == 4
        for chart in charts:
            assert os.path.exists(chart)

    def test_summary_table(self, puzzle_files, tmp_path):
        """Test the markdown summary table."""
        results = Benchmark(puzzle_files).run(show_progress=False)
        visualizer = Visualizer(results, str(tmp_path / "charts"))
        path = visualizer.generate_summary_table()

        with open(path) as f:
            content = f.read()
        assert "| easy | 9x9 | solved |" in content
        assert "| duplicate | 9x9 | invalid_setup |" in content
        assert "broken" not in content


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
