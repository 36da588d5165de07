"""Reader for the plain-text puzzle format.

Example (9x9, the default size)::

    // From The Santa Rosa, CA Press Democrat, 2006 Feb 18.

      - - 4   5 - -   - - 9
      - 8 -   - 7 2   - - -
      2 - 1   9 - -   - 7 -

      - - -   2 5 -   9 - -
      - 1 9   - - -   6 5 -
      - - 2   - 9 7   - - -

      - 6 -   - - 9   2 - 4
      - - -   3 6 -   - 9 -
      1 - -   - - 8   3 - -

Blank lines and lines starting with ``//`` are ignored, except that a
``//N=<digit>`` line before the first row sets the subsquare side (3 to 6),
giving 9x9, 16x16, 25x25 or 36x36 puzzles. Whitespace between squares is
optional.
"""

from __future__ import annotations
import logging
import os
import re
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from ..core.alphabet import symbol_to_int, BLANKS
from ..core.board import Board
from ..exceptions import PuzzleFormatError

log = logging.getLogger(__name__)

DEFAULT_N = 3
MIN_N = 3
MAX_N = 6

SIZE_DIRECTIVE = "//N="
_LEADING_INT = re.compile(r"\s*(\d+)")


def _puzzle_lines(text: str, source: str, allow_size: bool) -> Iterator[Tuple[int, Optional[str], int]]:
    """
    Yield (line number, row text, n) for each puzzle row.

    ``n`` is the subsquare side in force; it can only change before the
    first row is read. A size line yields ``None`` as its row text. Only the
    leading integer after ``//N=`` counts, so ``//N=4 (16x16)`` is accepted.
    """
    n = DEFAULT_N
    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith("//"):
            if allow_size and line.startswith(SIZE_DIRECTIVE):
                match = _LEADING_INT.match(line, len(SIZE_DIRECTIVE))
                if not match or not MIN_N <= int(match.group(1)) <= MAX_N:
                    raise PuzzleFormatError(
                        f"{source}, line {lineno}: a line begins with '{SIZE_DIRECTIVE}' but "
                        f"an integer in the range [{MIN_N}, {MAX_N}] does not follow"
                    )
                n = int(match.group(1))
                log.debug("%s: subsquare size set to %d", source, n)
                yield lineno, None, n
            continue

        row = line.rstrip()
        if not row:
            continue

        allow_size = False
        yield lineno, row, n


def _parse_row(row: str, lineno: int, row_index: int, size: int, source: str) -> List[int]:
    squares = [c for c in row if not c.isspace()]
    if len(squares) < size:
        raise PuzzleFormatError(
            f"{source}, line {lineno}: row {row_index + 1} has {len(squares)} "
            f"squares, expected {size}"
        )
    if len(squares) > size:
        raise PuzzleFormatError(
            f"{source}, line {lineno}: unexpected characters after square {size} "
            f"of row {row_index + 1}"
        )

    values = []
    for col, c in enumerate(squares):
        if c in BLANKS:
            values.append(0)
            continue
        value = symbol_to_int(c)
        if value is None or value > size:
            raise PuzzleFormatError(
                f"{source}: square ({row_index + 1}, {col + 1}) is not '-' nor a valid "
                f"character for a puzzle of size {size}x{size}"
            )
        values.append(value)
    return values


def parse_puzzle(text: str, source: str = "<string>", allow_size: bool = True) -> Board:
    """
    Build a board from puzzle text.

    Args:
        text: Puzzle in the format described in the module docstring.
        source: Name used in error messages (usually the file name).
        allow_size: Honor a ``//N=`` line before the first row.

    Returns:
        A Board whose non-blank squares are fixed givens.

    Raises:
        PuzzleFormatError: If the text is not a well-formed puzzle.
    """
    rows: List[List[int]] = []
    n = DEFAULT_N

    for lineno, row, n in _puzzle_lines(text, source, allow_size):
        if row is None:
            continue
        size = n * n
        rows.append(_parse_row(row, lineno, len(rows), size, source))
        if len(rows) == size:
            break

    size = n * n
    if len(rows) < size:
        raise PuzzleFormatError(
            f"{source} ended prematurely trying to read row {len(rows) + 1} of {size}"
        )

    board = Board(n, np.array(rows, dtype=np.int32))
    log.debug("Loaded %s: %dx%d, %d givens", source, size, size, board.count_fixed())
    return board


def load_puzzle(path: Union[str, os.PathLike], allow_size: bool = True) -> Board:
    """Read a puzzle file; see :func:`parse_puzzle`."""
    with open(path, "r") as f:
        text = f.read()
    return parse_puzzle(text, source=os.fspath(path), allow_size=allow_size)
