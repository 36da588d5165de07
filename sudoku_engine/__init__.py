"""Generalized Sudoku solver: constraint propagation plus backtracking."""

from .core.board import Board
from .core.validator import verify, Violation
from .exceptions import SudokuError, PuzzleFormatError, InvariantViolation
from .puzzle.loader import load_puzzle, parse_puzzle
from .solvers.constraint_solver import ConstraintSolver, Outcome

__version__ = "1.0.0"

__all__ = [
    "Board",
    "verify",
    "Violation",
    "SudokuError",
    "PuzzleFormatError",
    "InvariantViolation",
    "load_puzzle",
    "parse_puzzle",
    "ConstraintSolver",
    "Outcome",
]
