"""Benchmarking framework for running the solver over puzzle files."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence, Union
import json
import os

from tqdm import tqdm

from ..core.board import Board
from ..exceptions import PuzzleFormatError
from ..puzzle.loader import load_puzzle
from ..solvers import BaseSolver, ConstraintSolver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from solving a single puzzle."""
    puzzle: str
    size: int
    outcome: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    occupied_originally: int = 0
    candidates_before: int = 0
    candidates_after: int = 0
    frozen_singleton: int = 0
    frozen_row: int = 0
    frozen_column: int = 0
    frozen_subsquare: int = 0
    placements: int = 0
    unstackings: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def deductions(self) -> int:
        return self.frozen_singleton + self.frozen_row + self.frozen_column + self.frozen_subsquare

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "size": self.size,
            "outcome": self.outcome,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "occupied_originally": self.occupied_originally,
            "candidates_before": self.candidates_before,
            "candidates_after": self.candidates_after,
            "frozen_singleton": self.frozen_singleton,
            "frozen_row": self.frozen_row,
            "frozen_column": self.frozen_column,
            "frozen_subsquare": self.frozen_subsquare,
            "deductions": self.deductions,
            "placements": self.placements,
            "unstackings": self.unstackings,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for the propagation + backtracking solver.

    Solves every puzzle file once and collects the solver's counters,
    timing and memory use.
    """

    def __init__(
        self,
        paths: Sequence[Union[str, os.PathLike]],
        solver: Optional[BaseSolver] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            paths: Puzzle files to solve.
            solver: Solver instance (default: ConstraintSolver()).
        """
        self.paths = [os.fspath(p) for p in paths]
        self.solver = solver or ConstraintSolver()
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Solve every puzzle.

        A file that cannot be read or parsed yields a failed result with
        an ``error`` entry instead of stopping the run.

        Returns:
            List of BenchmarkResult objects, in input order.
        """
        self.results = []

        for path in tqdm(self.paths, desc="Benchmarking", disable=not show_progress):
            try:
                board = load_puzzle(path)
            except (OSError, PuzzleFormatError) as e:
                log.warning("Skipping %s: %s", path, e)
                self.results.append(BenchmarkResult(
                    puzzle=path,
                    size=0,
                    outcome="load_error",
                    solved=False,
                    time_seconds=0.0,
                    memory_bytes=0,
                    extra={"error": str(e)}
                ))
                continue

            self.results.append(self._run_single(path, board))

        return self.results

    def _run_single(self, path: str, board: Board) -> BenchmarkResult:
        """Run the solver on a single puzzle."""
        solution, stats = self.solver.solve(board)

        extra = {}
        if stats.violation:
            extra["violation"] = stats.violation
        if stats.empty_cells:
            extra["empty_cells"] = [list(cell) for cell in stats.empty_cells]

        return BenchmarkResult(
            puzzle=path,
            size=board.size,
            outcome=stats.outcome,
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            occupied_originally=stats.occupied_originally,
            candidates_before=stats.candidates_before,
            candidates_after=stats.candidates_after,
            frozen_singleton=stats.frozen_singleton,
            frozen_row=stats.frozen_row,
            frozen_column=stats.frozen_column,
            frozen_subsquare=stats.frozen_subsquare,
            placements=stats.placements,
            unstackings=stats.unstackings,
            extra=extra
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "algorithm": self.solver.name,
            "outcomes": {},
            "results_by_size": {}
        }

        for r in self.results:
            summary["outcomes"][r.outcome] = summary["outcomes"].get(r.outcome, 0) + 1

        # Group by board size
        for size in sorted(set(r.size for r in self.results if r.size)):
            size_results = [r for r in self.results if r.size == size]
            solved = [r for r in size_results if r.solved]
            times = [r.time_seconds for r in size_results]

            summary["results_by_size"][f"{size}x{size}"] = {
                "accuracy": len(solved) / len(size_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_deductions": sum(r.deductions for r in size_results) / len(size_results),
                "avg_unstackings": sum(r.unstackings for r in size_results) / len(size_results),
                "solved_without_search": sum(
                    1 for r in solved if r.placements == 0
                ),
                "total_solved": len(solved),
                "total_tested": len(size_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
