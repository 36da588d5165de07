"""Validation utilities for Sudoku grids."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from .alphabet import int_to_symbol

if TYPE_CHECKING:
    from .board import Board


@dataclass(frozen=True)
class Violation:
    """
    First rule broken by a grid.

    Attributes:
        unit: "row", "column" or "subsquare".
        row, col: Locate the unit. For a row only ``row`` matters, for a
            column only ``col``; a subsquare is named by its top-left cell.
        symbol: The offending symbol.
        count: How many times the symbol occurs in the unit.
    """
    unit: str
    row: int
    col: int
    symbol: int
    count: int

    def describe(self) -> str:
        """Human-readable message with 1-based coordinates."""
        symbol = int_to_symbol(self.symbol)
        if self.unit == "row":
            where = f"Row {self.row + 1}"
        elif self.unit == "column":
            where = f"Column {self.col + 1}"
        else:
            where = f"Subsquare ({self.row + 1}, {self.col + 1})"
        return f"{where} contains {symbol} {self.count} times"

    def __str__(self) -> str:
        return self.describe()


def _check_unit(
    values: np.ndarray, size: int, full: bool
) -> Optional[Tuple[int, int]]:
    counts = np.bincount(values.ravel(), minlength=size + 1)
    for symbol in range(1, size + 1):
        count = int(counts[symbol])
        if count > 1 or (full and count != 1):
            return symbol, count
    return None


def verify_grid(grid: np.ndarray, full: bool = False) -> Optional[Violation]:
    """
    Check a grid of symbol numbers for duplicate or missing symbols.

    Rows are checked first, then columns, then subsquares.

    Args:
        grid: (size, size) array, 0 for empty cells.
        full: If True every unit must hold each symbol exactly once;
              otherwise each symbol may appear at most once.

    Returns:
        The first violation found, or None if the grid passes.
    """
    grid = np.asarray(grid)
    size = grid.shape[0]
    n = math.isqrt(size)
    if n * n != size or grid.shape != (size, size):
        raise ValueError(f"Grid must be square with a perfect-square side, got {grid.shape}")
    if grid.min(initial=0) < 0 or grid.max(initial=0) > size:
        raise ValueError(f"Grid values must be 0-{size}")

    for i in range(size):
        found = _check_unit(grid[i, :], size, full)
        if found:
            return Violation("row", i, 0, *found)

    for j in range(size):
        found = _check_unit(grid[:, j], size, full)
        if found:
            return Violation("column", 0, j, *found)

    for box_row in range(0, size, n):
        for box_col in range(0, size, n):
            found = _check_unit(
                grid[box_row:box_row + n, box_col:box_col + n], size, full
            )
            if found:
                return Violation("subsquare", box_row, box_col, *found)

    return None


def verify(board: Board, full: bool = False) -> Optional[Violation]:
    """Check the current values of a board; see :func:`verify_grid`."""
    return verify_grid(board.to_array(), full=full)


def is_valid_board(board: Board) -> bool:
    """
    Check if the board has no duplicate symbol in any unit.

    Does not check if the board is complete.
    """
    return verify(board) is None


def is_solved(board: Board) -> bool:
    """Check if the board is completely and correctly filled."""
    return verify(board, full=True) is None


def find_mismatch(snapshot: np.ndarray, board: Board) -> Optional[Tuple[int, int]]:
    """
    First cell where a non-empty snapshot value differs from the board.

    Args:
        snapshot: Fixed values captured before solving (see Board.snapshot).
        board: The board to compare.
    """
    grid = board.to_array()
    if snapshot.shape != grid.shape:
        raise ValueError(f"Snapshot shape {snapshot.shape} does not match board {grid.shape}")
    rows, cols = np.nonzero((snapshot != 0) & (snapshot != grid))
    if len(rows) == 0:
        return None
    return int(rows[0]), int(cols[0])


def extends_original(snapshot: np.ndarray, board: Board) -> bool:
    """Check that the board agrees with every original given."""
    return find_mismatch(snapshot, board) is None


def validate_solution(snapshot: np.ndarray, board: Board) -> bool:
    """
    Validate that a board correctly solves the puzzle it was loaded from.

    Returns:
        True if the board keeps every original given and is fully solved.
    """
    return extends_original(snapshot, board) and is_solved(board)
