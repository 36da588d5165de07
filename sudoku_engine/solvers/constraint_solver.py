"""Sudoku solver combining constraint propagation with backtracking."""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional

import numpy as np

from .base_solver import BaseSolver
from .propagation import propagate, PreprocessResult
from .search import BacktrackingSearch, SearchState
from ..core.board import Board
from ..core.validator import verify, find_mismatch

log = logging.getLogger(__name__)


class Outcome(Enum):
    """How a solve attempt ended."""
    SOLVED = "solved"
    INVALID_SETUP = "invalid_setup"
    NO_CANDIDATES = "no_candidates"
    EXHAUSTED = "exhausted"
    NOT_ORIGINAL = "not_original"
    INVALID_SOLUTION = "invalid_solution"


class ConstraintSolver(BaseSolver):
    """
    Sudoku solver using candidate bitmasks with an undo stack.

    This solver runs in two phases:
    - Preprocessing: naked singles, then hidden singles by row, column and
      subsquare, one forced cell at a time, until nothing more is forced.
    - Search: row-major backtracking over the remaining open cells, with
      neighbors' candidates narrowed and widened incrementally.

    The final grid is checked against the original givens and for full
    validity before it is returned.
    """

    name = "Propagation+Backtracking"

    def __init__(self, use_propagation: bool = True):
        """
        Initialize the solver.

        Args:
            use_propagation: If False, skip the deduction rules and go
                             straight to the search after computing
                             candidates.
        """
        super().__init__()
        self.use_propagation = use_propagation
        self.outcome: Optional[Outcome] = None
        self.snapshot: Optional[np.ndarray] = None
        self.preprocess_result: Optional[PreprocessResult] = None

    def preprocess(self, board: Board) -> PreprocessResult:
        """Run propagation on ``board`` in place, recording counters."""
        result = propagate(board, self.stats, use_rules=self.use_propagation)
        self.preprocess_result = result
        if not result.ok:
            self.stats.empty_cells = list(result.empty_cells)
        return result

    def search(self, board: Board) -> SearchState:
        """Complete ``board`` in place by backtracking."""
        search = BacktrackingSearch(board)
        state = search.run()
        self.stats.placements += search.placements
        self.stats.unstackings += search.unstackings
        return state

    def _finish(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.stats.outcome = outcome.value

    def _solve(self, board: Board) -> Optional[Board]:
        """Solve using propagation, then backtracking."""
        self.outcome = None
        self.snapshot = board.snapshot()
        self.stats.num_squares = board.num_squares
        self.stats.occupied_originally = board.count_fixed()

        violation = verify(board)
        if violation is not None:
            log.info("Invalid setup: %s", violation)
            self.stats.violation = violation.describe()
            self._finish(Outcome.INVALID_SETUP)
            return None

        if not self.preprocess(board).ok:
            log.info("No solution: %d square(s) have no candidates", len(self.stats.empty_cells))
            self._finish(Outcome.NO_CANDIDATES)
            return None

        if self.search(board) is SearchState.EXHAUSTED:
            log.error("Search exhausted every candidate without finding a solution")
            self._finish(Outcome.EXHAUSTED)
            return None

        mismatch = find_mismatch(self.snapshot, board)
        if mismatch is not None:
            log.error("Square (%d,%d) differs from the original puzzle", mismatch[0] + 1, mismatch[1] + 1)
            self._finish(Outcome.NOT_ORIGINAL)
            return None

        violation = verify(board, full=True)
        if violation is not None:
            log.error("Invalid solution: %s", violation)
            self.stats.violation = violation.describe()
            self._finish(Outcome.INVALID_SOLUTION)
            return None

        self._finish(Outcome.SOLVED)
        return board
