"""Base solver interface and solve statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
import time
import tracemalloc

from ..core.board import Board


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Outcome
    solved: bool = False
    outcome: str = ""
    violation: Optional[str] = None
    empty_cells: List[Tuple[int, int]] = field(default_factory=list)

    # Resource usage
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Original board
    num_squares: int = 0
    occupied_originally: int = 0
    candidates_before: int = 0

    # Preprocessing
    frozen_singleton: int = 0
    frozen_row: int = 0
    frozen_column: int = 0
    frozen_subsquare: int = 0
    candidates_after: int = 0

    # Backtracking
    placements: int = 0
    unstackings: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def deductions(self) -> int:
        """Cells fixed by preprocessing, all rules together."""
        return (
            self.frozen_singleton
            + self.frozen_row
            + self.frozen_column
            + self.frozen_subsquare
        )

    @property
    def backtracks(self) -> int:
        return self.unstackings

    @property
    def empty_before(self) -> int:
        return self.num_squares - self.occupied_originally

    @property
    def occupied_after(self) -> int:
        return self.occupied_originally + self.deductions

    @property
    def empty_after(self) -> int:
        return self.num_squares - self.occupied_after

    @property
    def candidates_per_empty_before(self) -> float:
        if self.empty_before == 0:
            return 0.0
        return self.candidates_before / self.empty_before

    @property
    def candidates_per_empty_after(self) -> float:
        if self.empty_after == 0:
            return 0.0
        return self.candidates_after / self.empty_after

    def counters(self) -> Dict[str, int]:
        """The deterministic counters: equal for repeated runs of one puzzle."""
        return {
            "num_squares": self.num_squares,
            "occupied_originally": self.occupied_originally,
            "candidates_before": self.candidates_before,
            "frozen_singleton": self.frozen_singleton,
            "frozen_row": self.frozen_row,
            "frozen_column": self.frozen_column,
            "frozen_subsquare": self.frozen_subsquare,
            "candidates_after": self.candidates_after,
            "placements": self.placements,
            "unstackings": self.unstackings,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "outcome": self.outcome,
            "violation": self.violation,
            "empty_cells": [list(cell) for cell in self.empty_cells],
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            **self.counters(),
            "deductions": self.deductions,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: Board) -> Tuple[Optional[Board], SolverStats]:
        """
        Solve a Sudoku puzzle with timing and memory tracking.

        The input board is not modified. An unsolvable or inconsistent
        puzzle is reported through ``stats.outcome``, not by raising.

        Args:
            board: The puzzle to solve.

        Returns:
            Tuple of (solution or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)

        # Start memory tracking
        tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()

        try:
            solution = self._solve(board.copy())
        finally:
            # End timing
            self.stats.time_seconds = time.perf_counter() - start_time

            # Get memory usage
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        self.stats.solved = solution is not None
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: Board) -> Optional[Board]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution found.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
