"""Unit tests for the constraint propagation + backtracking solver."""

import os

import pytest

from sudoku_engine.core.board import Board
from sudoku_engine.core.alphabet import int_to_symbol
from sudoku_engine.core.validator import extends_original
from sudoku_engine.puzzle.loader import load_puzzle
from sudoku_engine.solvers import ConstraintSolver, Outcome


# A known solvable puzzle (medium difficulty)
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

# The solution to the test puzzle
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

THREE_ROWS = "123456789" "456789123" "789123456" + "-" * 54

PUZZLE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "puzzles")


def pattern_16x16():
    """A 16x16 puzzle with one blank per row."""
    n, size = 4, 16
    symbols = []
    for r in range(size):
        for c in range(size):
            if c == (5 * r) % size:
                symbols.append("-")
            else:
                symbols.append(int_to_symbol((n * (r % n) + r // n + c) % size + 1))
    return "".join(symbols)


class TestConstraintSolver:
    """Tests for ConstraintSolver."""

    def test_solve_puzzle(self):
        """Test solving a known puzzle."""
        board = Board.from_string(TEST_PUZZLE)
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert stats.solved
        assert solver.outcome is Outcome.SOLVED
        assert stats.outcome == "solved"
        assert solution is not None
        assert solution.to_string() == TEST_SOLUTION

    def test_input_not_modified(self):
        """Test that solving works on a copy of the board."""
        board = Board.from_string(TEST_PUZZLE)
        ConstraintSolver().solve(board)
        assert board.count_fixed() == 30
        assert board.is_empty(0, 2)

    def test_stats_collected(self):
        """Test that stats are collected."""
        board = Board.from_string(TEST_PUZZLE)
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert stats.time_seconds > 0
        assert stats.memory_bytes > 0
        assert stats.num_squares == 81
        assert stats.occupied_originally == 30
        assert stats.empty_before == 51
        assert stats.candidates_before > stats.candidates_after
        assert stats.deductions + stats.placements - stats.unstackings == 51
        assert stats.algorithm == "Propagation+Backtracking"

    def test_invalid_setup(self):
        """Test that duplicate givens are reported without solving."""
        board = Board.from_string("55" + TEST_PUZZLE[2:])
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert solution is None
        assert not stats.solved
        assert solver.outcome is Outcome.INVALID_SETUP
        assert stats.violation == "Row 1 contains 5 2 times"
        assert stats.deductions == 0
        assert stats.placements == 0

    def test_no_candidates(self):
        """Test a consistent puzzle with a square that has no candidates."""
        board = Board.from_string("-12345678" + "-" * 27 + "9" + "-" * 44)
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert solution is None
        assert solver.outcome is Outcome.NO_CANDIDATES
        assert stats.empty_cells == [(0, 0)]
        assert not solver.preprocess_result.ok

    def test_solved_by_propagation(self):
        """Test a 16x16 puzzle that needs no search."""
        board = Board.from_string(pattern_16x16())
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert solver.outcome is Outcome.SOLVED
        assert solution.count_open() == 0
        assert stats.frozen_singleton == 16
        assert stats.placements == 0
        assert stats.unstackings == 0
        assert stats.candidates_before == 16
        assert stats.candidates_after == 0

    def test_backtracking(self):
        """Test a puzzle that propagation cannot advance."""
        board = Board.from_string(THREE_ROWS)
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert solver.outcome is Outcome.SOLVED
        assert stats.deductions == 0
        assert stats.unstackings > 0
        assert solution.to_string()[:27] == THREE_ROWS[:27]

    def test_exhausted(self):
        """Test an unsolvable puzzle that only the search detects."""
        board = Board()
        for col in range(7):
            board.set(0, col, col + 1)
        board.set(3, 7, 8)
        board.set(6, 8, 8)
        solver = ConstraintSolver(use_propagation=False)

        solution, stats = solver.solve(board)

        assert solution is None
        assert solver.outcome is Outcome.EXHAUSTED
        assert stats.unstackings == 1

    def test_without_propagation(self):
        """Test that search alone reaches the same solution."""
        board = Board.from_string(TEST_PUZZLE)
        solver = ConstraintSolver(use_propagation=False)

        solution, stats = solver.solve(board)

        assert solution.to_string() == TEST_SOLUTION
        assert stats.deductions == 0
        assert stats.placements - stats.unstackings == 51

    def test_deterministic(self):
        """Test that repeated solves give identical grids and counters."""
        board = Board.from_string(THREE_ROWS)
        solver = ConstraintSolver()

        first, stats_a = solver.solve(board.copy())
        counters_a = stats_a.counters()
        second, stats_b = solver.solve(board.copy())

        assert first == second
        assert counters_a == stats_b.counters()


class TestFinalChecks:
    """Tests for the checks run on the completed grid."""

    def test_not_original(self):
        """Test that a grid overwriting a given is rejected."""

        class OverwritingSolver(ConstraintSolver):
            def search(self, board):
                state = super().search(board)
                board.cell(0, 0).value = 4
                return state

        solution, stats = OverwritingSolver().solve(Board.from_string(TEST_PUZZLE))

        assert solution is None
        assert stats.outcome == Outcome.NOT_ORIGINAL.value

    def test_invalid_solution(self):
        """Test that a grid with duplicates is rejected."""

        class DuplicatingSolver(ConstraintSolver):
            def search(self, board):
                state = super().search(board)
                board.cell(0, 2).value = 5
                return state

        solution, stats = DuplicatingSolver().solve(Board.from_string(TEST_PUZZLE))

        assert solution is None
        assert stats.outcome == Outcome.INVALID_SOLUTION.value
        # the overwritten 4 is the first symbol the full check misses
        assert stats.violation == "Row 1 contains 4 0 times"


class TestExamplePuzzles:
    """Tests for the puzzle files shipped in puzzles/."""

    @pytest.mark.parametrize("name", ["press_democrat.txt", "pattern_16x16.txt"])
    def test_solve_file(self, name):
        """Test that each example puzzle is solved."""
        board = load_puzzle(os.path.join(PUZZLE_DIR, name))
        solver = ConstraintSolver()

        solution, stats = solver.solve(board)

        assert solver.outcome is Outcome.SOLVED
        assert extends_original(board.snapshot(), solution)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
