"""Text rendering of boards, candidates and solve statistics."""

from __future__ import annotations
from typing import List, TYPE_CHECKING

from ..core.alphabet import int_to_symbol
from ..core.bits import count_bits, iter_bits, mask_to_string

if TYPE_CHECKING:
    from ..core.board import Board
    from ..solvers.base_solver import SolverStats


def format_board(board: Board, everything: bool = False) -> str:
    """
    Render a board in the puzzle file layout.

    The output can be read back with :func:`~sudoku_engine.puzzle.loader.parse_puzzle`.

    Args:
        board: Board to render.
        everything: Also list each square's internal state: fixed flag,
                    stack depth, candidate count, neighbors and the
                    candidate stack as bit strings.
    """
    n, size = board.n, board.size
    lines: List[str] = []

    if n != 3:
        lines.append(f"//N={n}")
        lines.append("")

    for i in range(size):
        row = "  "
        for j in range(size):
            row += int_to_symbol(board.get(i, j))
            row += "   " if j < size - 1 and (j + 1) % n == 0 else " "
        lines.append(row.rstrip())
        if i < size - 1 and (i + 1) % n == 0:
            lines.append("")

    if everything:
        lines.append("")
        for i in range(size):
            for j in range(size):
                cell = board.cell(i, j)
                lines.append(
                    f"({i + 1:2d},{j + 1:2d}):  cur_value={cell.value:2d}  "
                    f"frozen={int(cell.fixed)}  depth={cell.depth}  "
                    f"num_candidates={count_bits(cell.base_candidates)}"
                )
                lines.append(
                    "           "
                    + "".join(f" ({r + 1:2d},{c + 1:2d})" for r, c in board.neighbors(i, j))
                )
                for k, mask in enumerate(cell.history):
                    lines.append(f"            {k:2d}: {mask_to_string(mask, size)}")

    return "\n".join(lines)


def format_candidates(board: Board) -> str:
    """One line per square: its value if fixed, else its current candidates."""
    lines = []
    for i in range(board.size):
        for j in range(board.size):
            cell = board.cell(i, j)
            if cell.fixed:
                lines.append(f"Square ({i + 1}, {j + 1}) current value:  {int_to_symbol(cell.value)}")
                continue
            symbols = " ".join(int_to_symbol(k) for k in iter_bits(cell.candidates, board.size))
            lines.append(f"Square ({i + 1}, {j + 1}) candidates:  {symbols}")
    return "\n".join(lines)


def format_statistics(stats: SolverStats) -> str:
    """Summary of the original board, preprocessing and backtracking."""
    lines = [
        "statistics",
        "  original board",
        f"    number of occupied squares:       {stats.occupied_originally:4d}",
        f"    number of empty squares:          {stats.empty_before:4d}",
        f"    total number of squares:          {stats.num_squares:4d}",
        f"    sum of no. candidates       {stats.candidates_before:10d}",
        f"    candidates/empty square         {stats.candidates_per_empty_before:6.1f}",
        "  preprocessing",
        f"    number of only-one candidates:    {stats.frozen_singleton:4d}",
        f"    number of row optimizations:      {stats.frozen_row:4d}",
        f"    number of column optimizations:   {stats.frozen_column:4d}",
        f"    number of subsquare optimizations:{stats.frozen_subsquare:4d}",
        f"    total number of optimizations:    {stats.deductions:4d}",
        "  after optimization",
        f"    number of occupied squares:       {stats.occupied_after:4d}",
        f"    number of empty squares:          {stats.empty_after:4d}",
        f"    total number of squares:          {stats.num_squares:4d}",
        f"    sum of no. candidates       {stats.candidates_after:10d}",
        f"    candidates/empty square         {stats.candidates_per_empty_after:6.1f}",
        "  backtracking",
        f"    number of unstackings:       {stats.unstackings:9d}",
    ]
    return "\n".join(lines)
