"""Constraint propagation: forced values found without search."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Tuple, Sequence, TYPE_CHECKING

from ..core.bits import bit, count_bits, first_set
from ..core.board import Board
from ..core.candidates import recompute_all, candidate_total

if TYPE_CHECKING:
    from .base_solver import SolverStats

log = logging.getLogger(__name__)


class Rule(Enum):
    """Deduction rules, in the order they are tried."""
    SINGLETON = "singleton"
    ROW = "row"
    COLUMN = "column"
    SUBSQUARE = "subsquare"


@dataclass(frozen=True)
class Deduction:
    """A cell forced to a symbol by one rule."""
    rule: Rule
    row: int
    col: int
    symbol: int


@dataclass
class PreprocessResult:
    """
    Outcome of propagation.

    ``ok`` is False when some open cell was left with no candidates;
    those cells are listed in ``empty_cells``.
    """
    ok: bool
    empty_cells: List[Tuple[int, int]] = field(default_factory=list)
    deductions: List[Deduction] = field(default_factory=list)


def apply_singleton(board: Board) -> Optional[Deduction]:
    """Force the first open cell, row-major, that has exactly one candidate."""
    for row in range(board.size):
        for col in range(board.size):
            cell = board.cells[row][col]
            if cell.fixed or count_bits(cell.candidates) != 1:
                continue
            symbol = first_set(cell.candidates, board.size)
            board.force(row, col, symbol)
            return Deduction(Rule.SINGLETON, row, col, symbol)
    return None


def _unique_in_unit(board: Board, unit: Sequence[Tuple[int, int]]) -> Optional[Tuple[int, int, int]]:
    """Smallest symbol that exactly one open cell of the unit can take."""
    seen = [0] * (board.size + 1)
    where: List[Optional[Tuple[int, int]]] = [None] * (board.size + 1)

    for row, col in unit:
        cell = board.cells[row][col]
        if cell.fixed:
            continue
        mask = cell.candidates
        for symbol in range(1, board.size + 1):
            if mask & bit(symbol):
                seen[symbol] += 1
                where[symbol] = (row, col)

    for symbol in range(1, board.size + 1):
        if seen[symbol] == 1:
            row, col = where[symbol]
            return row, col, symbol
    return None


def _apply_unit_rule(board: Board, rule: Rule, units) -> Optional[Deduction]:
    for unit in units:
        found = _unique_in_unit(board, unit)
        if found:
            row, col, symbol = found
            board.force(row, col, symbol)
            return Deduction(rule, row, col, symbol)
    return None


def apply_row(board: Board) -> Optional[Deduction]:
    """Force a symbol that only one open cell of a row can take."""
    return _apply_unit_rule(board, Rule.ROW, board.topology.rows)


def apply_column(board: Board) -> Optional[Deduction]:
    """Force a symbol that only one open cell of a column can take."""
    return _apply_unit_rule(board, Rule.COLUMN, board.topology.columns)


def apply_subsquare(board: Board) -> Optional[Deduction]:
    """Force a symbol that only one open cell of a subsquare can take."""
    return _apply_unit_rule(board, Rule.SUBSQUARE, board.topology.boxes)


RULES = (
    (Rule.SINGLETON, apply_singleton),
    (Rule.ROW, apply_row),
    (Rule.COLUMN, apply_column),
    (Rule.SUBSQUARE, apply_subsquare),
)

_COUNTERS = {
    Rule.SINGLETON: "frozen_singleton",
    Rule.ROW: "frozen_row",
    Rule.COLUMN: "frozen_column",
    Rule.SUBSQUARE: "frozen_subsquare",
}


def propagate(
    board: Board,
    stats: Optional[SolverStats] = None,
    use_rules: bool = True,
) -> PreprocessResult:
    """
    Apply the deduction rules until none fires.

    Candidates are recomputed from scratch before every pass, since each
    forced cell changes its neighbors' candidates. Only one cell is forced
    per pass; the rules are then retried from the singleton rule.

    Args:
        board: Board to refine in place.
        stats: Optional stats to receive candidate sums and rule counters.
        use_rules: If False, only compute candidates.

    Returns:
        PreprocessResult; ``ok`` is False if an open cell has no candidates.
    """
    result = PreprocessResult(ok=True)
    first_pass = True

    while True:
        dead = recompute_all(board)

        if first_pass:
            if stats is not None:
                stats.candidates_before = candidate_total(board)
            first_pass = False

        if dead:
            result.ok = False
            result.empty_cells = dead
            break

        if not use_rules:
            break

        for rule, apply in RULES:
            deduction = apply(board)
            if deduction is not None:
                break
        else:
            break

        log.debug(
            "Square (%d,%d) frozen to %d by %s rule",
            deduction.row + 1, deduction.col + 1, deduction.symbol, rule.value,
        )
        result.deductions.append(deduction)
        if stats is not None:
            counter = _COUNTERS[rule]
            setattr(stats, counter, getattr(stats, counter) + 1)

    if stats is not None:
        stats.candidates_after = candidate_total(board)

    return result
