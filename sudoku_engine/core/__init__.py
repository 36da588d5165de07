"""Core module for board representation, candidates and validation."""

from .board import Board, Cell
from .topology import Topology, build_topology
from .validator import Violation, verify, verify_grid, is_valid_board, validate_solution

__all__ = [
    "Board",
    "Cell",
    "Topology",
    "build_topology",
    "Violation",
    "verify",
    "verify_grid",
    "is_valid_board",
    "validate_solution",
]
