"""Exceptions raised by the Sudoku engine."""


class SudokuError(Exception):
    """Base class for all errors raised by this package."""


class PuzzleFormatError(SudokuError, ValueError):
    """
    A puzzle file or string could not be turned into a board.

    Raised by the puzzle reader for bad characters, short or long rows,
    an invalid ``//N=`` line or a file that ends before the last row.
    """


class InvariantViolation(SudokuError):
    """
    An internal consistency check of the engine failed.

    This signals a defect in the candidate bookkeeping or the undo stack,
    not a bad puzzle. It is never caught inside the package.
    """
