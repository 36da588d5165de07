"""Unit tests for constraint propagation."""

import pytest

from sudoku_engine.core.board import Board
from sudoku_engine.core.candidates import recompute_all
from sudoku_engine.solvers.base_solver import SolverStats
from sudoku_engine.solvers.propagation import (
    Rule, Deduction, propagate, apply_singleton, apply_row, apply_column, apply_subsquare,
)


TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def hidden_one_board():
    """Board where only (0, 0) can hold a 1 in its row, column and box."""
    board = Board()
    for row, col in [(1, 3), (2, 6), (3, 1), (6, 2)]:
        board.set(row, col, 1)
    recompute_all(board)
    return board


class TestRules:
    """Tests for the individual deduction rules."""

    def test_singleton(self):
        """Test that a cell with one candidate is forced."""
        board = Board.from_string("-23456789" + "-" * 72)
        recompute_all(board)
        deduction = apply_singleton(board)
        assert deduction == Deduction(Rule.SINGLETON, 0, 0, 1)
        assert board.is_fixed(0, 0)
        assert board.get(0, 0) == 1

    def test_singleton_none(self):
        """Test that nothing is forced on an empty board."""
        board = Board()
        recompute_all(board)
        assert apply_singleton(board) is None
        assert apply_row(board) is None
        assert apply_column(board) is None
        assert apply_subsquare(board) is None

    def test_row(self):
        """Test a symbol with a single place in its row."""
        board = hidden_one_board()
        assert apply_singleton(board) is None
        assert apply_row(board) == Deduction(Rule.ROW, 0, 0, 1)
        assert board.get(0, 0) == 1

    def test_column(self):
        """Test a symbol with a single place in its column."""
        board = hidden_one_board()
        assert apply_column(board) == Deduction(Rule.COLUMN, 0, 0, 1)

    def test_subsquare(self):
        """Test a symbol with a single place in its subsquare."""
        board = hidden_one_board()
        assert apply_subsquare(board) == Deduction(Rule.SUBSQUARE, 0, 0, 1)

    def test_one_cell_per_call(self):
        """Test that a rule forces only the first qualifying cell."""
        board = Board.from_string("-23456789" + "-" * 18 + "-12345678" + "-" * 45)
        recompute_all(board)
        assert board.get_candidates(3, 0) == {9}
        assert apply_singleton(board) == Deduction(Rule.SINGLETON, 0, 0, 1)
        assert board.is_empty(3, 0)


class TestPropagate:
    """Tests for the propagation fixpoint."""

    def test_deductions_are_sound(self):
        """Test that every forced value agrees with the unique solution."""
        board = Board.from_string(TEST_PUZZLE)
        stats = SolverStats()
        result = propagate(board, stats)

        assert result.ok
        assert result.deductions
        for d in result.deductions:
            assert board.get(d.row, d.col) == int(TEST_SOLUTION[d.row * 9 + d.col])
        assert stats.deductions == len(result.deductions)
        assert stats.candidates_after <= stats.candidates_before

    def test_counters_by_rule(self):
        """Test that each rule's counter matches its deductions."""
        board = hidden_one_board()
        stats = SolverStats()
        result = propagate(board, stats)

        assert result.ok
        assert result.deductions[0] == Deduction(Rule.ROW, 0, 0, 1)
        for rule, counter in [
            (Rule.SINGLETON, stats.frozen_singleton),
            (Rule.ROW, stats.frozen_row),
            (Rule.COLUMN, stats.frozen_column),
            (Rule.SUBSQUARE, stats.frozen_subsquare),
        ]:
            assert counter == sum(1 for d in result.deductions if d.rule is rule)

    def test_candidates_before(self):
        """Test the candidate sum recorded on the first pass."""
        board = Board()
        stats = SolverStats()
        propagate(board, stats)
        assert stats.candidates_before == 729
        assert stats.candidates_after == 729
        assert stats.deductions == 0

    def test_dead_cell(self):
        """Test that propagation stops when a square has no candidates."""
        board = Board.from_string("-12345678" + "-" * 27 + "9" + "-" * 44)
        result = propagate(board)
        assert not result.ok
        assert result.empty_cells == [(0, 0)]

    def test_without_rules(self):
        """Test that candidates are still computed when rules are off."""
        board = Board.from_string(TEST_PUZZLE)
        stats = SolverStats()
        result = propagate(board, stats, use_rules=False)

        assert result.ok
        assert result.deductions == []
        assert board.count_fixed() == 30
        assert board.get_candidates(0, 2) == {1, 2, 4}
        assert stats.candidates_after == stats.candidates_before

    def test_fixpoint_reached(self):
        """Test that no rule fires after propagation ends."""
        board = Board.from_string(TEST_PUZZLE)
        propagate(board)
        recompute_all(board)
        assert apply_singleton(board) is None
        assert apply_row(board) is None
        assert apply_column(board) is None
        assert apply_subsquare(board) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
