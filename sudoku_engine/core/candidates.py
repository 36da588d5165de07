"""Candidate computation from scratch, used before the search starts."""

from __future__ import annotations
import logging
from typing import List, Tuple, TYPE_CHECKING

from .bits import bit, count_bits, full_mask

if TYPE_CHECKING:
    from .board import Board

log = logging.getLogger(__name__)


def recompute_candidates(board: Board, row: int, col: int) -> bool:
    """
    Reset the candidate stack of an open cell to a single fresh mask.

    The mask holds every symbol that no neighbor currently occupies.

    Returns:
        True if the cell is fixed or has at least one candidate.
    """
    cell = board.cells[row][col]
    if cell.fixed:
        return True

    used = 0
    for r, c in board.topology.neighbors[row][col]:
        value = board.cells[r][c].value
        if value:
            used |= bit(value)

    mask = full_mask(board.size) & ~used
    cell.history = [mask]
    return mask != 0


def recompute_all(board: Board) -> List[Tuple[int, int]]:
    """
    Recompute candidates for every cell in row-major order.

    Every cell is visited even after a failure, so the caller learns all
    the dead cells at once.

    Returns:
        The open cells left without any candidate; empty on success.
    """
    dead = []
    for row in range(board.size):
        for col in range(board.size):
            if not recompute_candidates(board, row, col):
                log.warning("Can't find candidates for square (%d,%d)", row + 1, col + 1)
                dead.append((row, col))
    return dead


def candidate_total(board: Board) -> int:
    """Sum of base candidate counts over all open cells."""
    return sum(
        count_bits(cell.base_candidates)
        for cells in board.cells
        for cell in cells
        if not cell.fixed
    )
