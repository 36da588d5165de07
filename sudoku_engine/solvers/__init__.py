"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats
from .constraint_solver import ConstraintSolver, Outcome
from .propagation import Rule, Deduction, PreprocessResult, propagate
from .search import BacktrackingSearch, SearchState

__all__ = [
    "BaseSolver",
    "SolverStats",
    "ConstraintSolver",
    "Outcome",
    "Rule",
    "Deduction",
    "PreprocessResult",
    "propagate",
    "BacktrackingSearch",
    "SearchState",
]
