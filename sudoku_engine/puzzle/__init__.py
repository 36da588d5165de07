"""Puzzle text input and report output."""

from .loader import parse_puzzle, load_puzzle
from .report import format_board, format_candidates, format_statistics

__all__ = [
    "parse_puzzle",
    "load_puzzle",
    "format_board",
    "format_candidates",
    "format_statistics",
]
