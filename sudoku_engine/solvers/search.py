"""Iterative backtracking search over the cells left open by propagation."""

from __future__ import annotations
import logging
from enum import Enum
from typing import List

from ..core.bits import first_set
from ..core.board import Board

log = logging.getLogger(__name__)


class SearchState(Enum):
    """States of the search machine; SOLVED and EXHAUSTED are terminal."""
    SCANNING = "scanning"
    PLACING = "placing"
    BACKTRACKING = "backtracking"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


class BacktrackingSearch:
    """
    Depth-first search driven by an explicit placement stack.

    Cells are visited in row-major order and candidates tried in ascending
    order, so a given puzzle always yields the same solution and the same
    counters. A placement narrows the neighbors' candidate stacks; a
    retraction widens them again, so no candidates are recomputed.

    The board's open cells must have fresh candidate stacks (as left by
    propagation) before :meth:`run` is called.
    """

    def __init__(self, board: Board):
        self.board = board
        self.state = SearchState.SCANNING
        self.cursor = 0
        self.next_symbol = 1
        self.stack: List[int] = []
        self.placements = 0
        self.unstackings = 0

    def run(self) -> SearchState:
        """Run until the board is solved or every option is exhausted."""
        board = self.board
        size = board.size
        cells = [cell for row in board.cells for cell in row]
        total = len(cells)

        while True:
            if self.state is SearchState.SCANNING:
                while self.cursor < total and cells[self.cursor].fixed:
                    self.cursor += 1
                if self.cursor == total:
                    self.state = SearchState.SOLVED
                    break
                self.state = SearchState.PLACING

            elif self.state is SearchState.PLACING:
                cell = cells[self.cursor]
                symbol = first_set(cell.candidates, size, self.next_symbol)
                if not symbol:
                    self.state = SearchState.BACKTRACKING
                    continue

                cell.value = symbol
                row, col = divmod(self.cursor, size)
                board.narrow_neighbors(row, col, symbol)
                self.stack.append(self.cursor)
                self.placements += 1

                self.cursor += 1
                self.next_symbol = 1
                self.state = SearchState.SCANNING

            elif self.state is SearchState.BACKTRACKING:
                if not self.stack:
                    self.state = SearchState.EXHAUSTED
                    break

                self.cursor = self.stack.pop()
                self.unstackings += 1
                cell = cells[self.cursor]
                row, col = divmod(self.cursor, size)
                board.widen_neighbors(row, col, cell.value)

                self.next_symbol = cell.value + 1
                cell.value = 0
                # resume at the retracted cell with the next higher symbol
                self.state = SearchState.PLACING

            else:
                break

        log.debug(
            "Search %s after %d placements, %d unstackings",
            self.state.value, self.placements, self.unstackings,
        )
        return self.state
