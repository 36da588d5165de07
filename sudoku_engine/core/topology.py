"""Neighbor relation and units for an N^2 x N^2 board."""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from ..exceptions import InvariantViolation

Coord = Tuple[int, int]
Unit = Tuple[Coord, ...]


@dataclass(frozen=True)
class Topology:
    """
    Geometry shared by every board of one size.

    Attributes:
        n: Side of a subsquare (3 for a 9x9 board).
        size: Side of the board, n * n.
        num_neighbors: Peers per cell, always 3*size - 2*n - 1.
        neighbors: neighbors[row][col] is a tuple of (r, c) peers.
        rows, columns, boxes: The units scanned by deduction and validation.
    """
    n: int
    size: int
    num_neighbors: int
    neighbors: Tuple[Tuple[Unit, ...], ...]
    rows: Tuple[Unit, ...]
    columns: Tuple[Unit, ...]
    boxes: Tuple[Unit, ...]

    def box_origin(self, row: int, col: int) -> Coord:
        """Top-left cell of the subsquare containing (row, col)."""
        return (row // self.n) * self.n, (col // self.n) * self.n

    def box_index(self, row: int, col: int) -> int:
        """Row-major index (0 to size-1) of the subsquare containing a cell."""
        return (row // self.n) * self.n + (col // self.n)


def _cell_neighbors(n: int, row: int, col: int) -> Unit:
    size = n * n
    peers = []

    # same column
    for r in range(size):
        if r != row:
            peers.append((r, col))

    # same row
    for c in range(size):
        if c != col:
            peers.append((row, c))

    # rest of the subsquare
    box_row = (row // n) * n
    box_col = (col // n) * n
    for r in range(box_row, box_row + n):
        if r == row:
            continue
        for c in range(box_col, box_col + n):
            if c != col:
                peers.append((r, c))

    return tuple(peers)


@lru_cache(maxsize=None)
def build_topology(n: int) -> Topology:
    """
    Compute the neighbor relation for subsquare side ``n``.

    The result depends only on ``n`` and is cached, so every board of a
    given size shares one instance.
    """
    if n < 1:
        raise ValueError(f"Subsquare side must be positive, got {n}")

    size = n * n
    num_neighbors = 3 * size - 2 * n - 1

    neighbors = []
    for row in range(size):
        row_peers = []
        for col in range(size):
            peers = _cell_neighbors(n, row, col)
            if len(peers) != num_neighbors:
                raise InvariantViolation(
                    f"Cell ({row + 1}, {col + 1}) has {len(peers)} neighbors, "
                    f"expected {num_neighbors}"
                )
            row_peers.append(peers)
        neighbors.append(tuple(row_peers))

    rows = tuple(tuple((r, c) for c in range(size)) for r in range(size))
    columns = tuple(tuple((r, c) for r in range(size)) for c in range(size))
    boxes = tuple(
        tuple(
            (box_row + i, box_col + j)
            for i in range(n)
            for j in range(n)
        )
        for box_row in range(0, size, n)
        for box_col in range(0, size, n)
    )

    return Topology(
        n=n,
        size=size,
        num_neighbors=num_neighbors,
        neighbors=tuple(neighbors),
        rows=rows,
        columns=columns,
        boxes=boxes,
    )
