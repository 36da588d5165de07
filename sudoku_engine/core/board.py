"""Sudoku board with per-cell candidate stacks for backtracking."""

from __future__ import annotations
import math
import numpy as np
from typing import List, Tuple, Optional, Set

from .alphabet import int_to_symbol, symbol_to_int, BLANKS
from .bits import bit, count_bits, iter_bits, MAX_SYMBOL
from .topology import Topology, build_topology
from ..exceptions import InvariantViolation


class Cell:
    """
    One square of the board.

    ``history`` is a stack of candidate masks, the top at the end. A fixed
    cell keeps no history. An open cell has its base mask at index 0 and
    one extra entry per in-flight narrowing by a neighbor.
    """

    __slots__ = ("value", "fixed", "history")

    def __init__(self, value: int = 0, fixed: bool = False):
        self.value = value
        self.fixed = fixed
        self.history: List[int] = []

    @property
    def candidates(self) -> int:
        """Current candidate mask (top of the history)."""
        return self.history[-1] if self.history else 0

    @property
    def base_candidates(self) -> int:
        """Candidate mask computed before any narrowing."""
        return self.history[0] if self.history else 0

    @property
    def depth(self) -> int:
        """Number of narrowings currently stacked on the base mask."""
        return max(len(self.history) - 1, 0)

    def copy(self) -> Cell:
        new_cell = Cell(self.value, self.fixed)
        new_cell.history = list(self.history)
        return new_cell

    def __repr__(self) -> str:
        return (
            f"Cell(value={self.value}, fixed={self.fixed}, "
            f"candidates={self.candidates:#x}, depth={self.depth})"
        )


class Board:
    """
    A Sudoku board of configurable size.

    Standard Sudoku is 9x9 with 3x3 boxes (n=3).
    Supports larger boards: 16x16 (n=4), 25x25 (n=5), 36x36 (n=6),
    up to 64x64 (n=8), the widest a 64-bit candidate mask can hold.
    """

    def __init__(self, n: int = 3, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            n: Subsquare side. The board is n*n cells on a side.
            grid: Optional initial grid. Non-zero entries become fixed givens.
        """
        if n < 2 or n * n > MAX_SYMBOL:
            raise ValueError(f"Subsquare side must be 2-8, got {n}")

        self.n = n
        self.size = n * n
        self.num_squares = self.size * self.size
        self.topology: Topology = build_topology(n)
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.size)] for _ in range(self.size)
        ]

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (self.size, self.size):
                raise ValueError(f"Grid shape must be ({self.size}, {self.size})")
            for row in range(self.size):
                for col in range(self.size):
                    value = int(grid[row, col])
                    if value:
                        self.set(row, col, value)

    @property
    def num_neighbors(self) -> int:
        return self.topology.num_neighbors

    def copy(self) -> Board:
        """Create a deep copy of the board, candidate stacks included."""
        new_board = Board(self.n)
        new_board.cells = [[cell.copy() for cell in row] for row in self.cells]
        return new_board

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return self.cells[row][col].value

    def set(self, row: int, col: int, value: int) -> None:
        """
        Place a given at (row, col). Use 0 to clear the cell.

        This is how a loader populates the board before solving; the
        solver itself commits values through :meth:`force`.
        """
        if value < 0 or value > self.size:
            raise ValueError(f"Value must be 0-{self.size}, got {value}")
        cell = self.cells[row][col]
        cell.value = value
        cell.fixed = value != 0
        cell.history = []

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.set(row, col, 0)

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.cells[row][col].value == 0

    def is_fixed(self, row: int, col: int) -> bool:
        return self.cells[row][col].fixed

    def neighbors(self, row: int, col: int) -> Tuple[Tuple[int, int], ...]:
        """All cells sharing a row, column or box with (row, col)."""
        return self.topology.neighbors[row][col]

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Current candidate symbols for a cell.

        Returns an empty set for fixed cells and for open cells whose
        candidates have not been computed yet.
        """
        return set(iter_bits(self.cells[row][col].candidates, self.size))

    def count_candidates(self, row: int, col: int) -> int:
        return count_bits(self.cells[row][col].candidates)

    # Placement and undo

    def force(self, row: int, col: int, value: int) -> None:
        """
        Commit ``value`` to (row, col) permanently.

        The cell becomes fixed and stops taking part in candidate tracking.
        """
        cell = self.cells[row][col]
        if cell.fixed:
            raise InvariantViolation(f"Cell ({row + 1}, {col + 1}) is already fixed")
        if value < 1 or value > self.size:
            raise InvariantViolation(f"Cannot force value {value} on a {self.size}x{self.size} board")
        cell.value = value
        cell.fixed = True
        cell.history = []

    def narrow_neighbors(self, row: int, col: int, symbol: int) -> None:
        """Remove ``symbol`` from every open neighbor, stacking the new mask."""
        mask = ~bit(symbol)
        limit = self.num_neighbors + 1
        for r, c in self.topology.neighbors[row][col]:
            peer = self.cells[r][c]
            if peer.fixed:
                continue
            history = peer.history
            if not history:
                raise InvariantViolation(f"Cell ({r + 1}, {c + 1}) has no candidate history")
            if len(history) >= limit:
                raise InvariantViolation(
                    f"Candidate stack overflow at ({r + 1}, {c + 1}): depth {len(history)}"
                )
            history.append(history[-1] & mask)

    def widen_neighbors(self, row: int, col: int, symbol: int) -> None:
        """Undo the most recent :meth:`narrow_neighbors` for ``symbol``."""
        mask = ~bit(symbol)
        for r, c in self.topology.neighbors[row][col]:
            peer = self.cells[r][c]
            if peer.fixed:
                continue
            history = peer.history
            if len(history) < 2:
                raise InvariantViolation(f"Candidate stack underflow at ({r + 1}, {c + 1})")
            top = history.pop()
            if top != history[-1] & mask:
                raise InvariantViolation(
                    f"Candidate stack at ({r + 1}, {c + 1}) was not narrowed by {symbol}"
                )

    # Whole-board queries

    def get_open_cells(self) -> List[Tuple[int, int]]:
        """Get list of all non-fixed cell positions, row-major."""
        return [
            (i, j)
            for i in range(self.size)
            for j in range(self.size)
            if not self.cells[i][j].fixed
        ]

    def count_fixed(self) -> int:
        return sum(cell.fixed for row in self.cells for cell in row)

    def count_open(self) -> int:
        return self.num_squares - self.count_fixed()

    def count_filled(self) -> int:
        """Count cells holding a value, fixed or tentative."""
        return sum(cell.value != 0 for row in self.cells for cell in row)

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_filled() == self.num_squares

    def to_array(self) -> np.ndarray:
        """Current values as an (size, size) int32 array."""
        return np.array(
            [[cell.value for cell in row] for row in self.cells], dtype=np.int32
        )

    def snapshot(self) -> np.ndarray:
        """
        Read-only copy of the fixed values, 0 elsewhere.

        Taken right after loading, it records the original puzzle for the
        final check that a solution extends it.
        """
        grid = np.array(
            [[cell.value if cell.fixed else 0 for cell in row] for row in self.cells],
            dtype=np.int32,
        )
        grid.setflags(write=False)
        return grid

    def to_string(self) -> str:
        """Compact one-line form: one alphabet symbol per cell, '-' for blanks."""
        return "".join(
            int_to_symbol(cell.value) for row in self.cells for cell in row
        )

    @classmethod
    def from_string(cls, s: str, n: Optional[int] = None) -> Board:
        """
        Create a board from a compact string.

        Args:
            s: One character per cell. '-' and '.' are blanks; on boards of
               9x9 and smaller '0' is a blank too (elsewhere it means 10).
            n: Subsquare side; derived from the string length if omitted.
        """
        s = "".join(s.split())
        if n is None:
            n = math.isqrt(math.isqrt(len(s)))
        size = n * n
        if len(s) != size * size:
            raise ValueError(f"String length must be {size * size}, got {len(s)}")

        grid = np.zeros((size, size), dtype=np.int32)
        for idx, c in enumerate(s):
            if c in BLANKS or (c == "0" and size < 10):
                continue
            value = symbol_to_int(c)
            if value is None or value > size:
                raise ValueError(f"Invalid symbol {c!r} at position {idx}")
            grid[idx // size, idx % size] = value

        return cls(n, grid)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> Board:
        """Create a board from a 2D list."""
        arr = np.array(data, dtype=np.int32)
        n = math.isqrt(arr.shape[0])
        return cls(n, arr)

    def __str__(self) -> str:
        from ..puzzle.report import format_board
        return format_board(self)

    def __repr__(self) -> str:
        return f"Board(n={self.n}, fixed={self.count_fixed()}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return self.n == other.n and np.array_equal(self.to_array(), other.to_array())

    def __hash__(self) -> int:
        return hash(self.to_string())
