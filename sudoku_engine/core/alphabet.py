"""Mapping between puzzle characters and symbol numbers.

    N   N^2   alphabet
    ---------------------------------
    3    9    1-9
    4   16    1-9, 0, A-F
    5   25    1-9, 0, A-O
    6   36    1-9, 0, A-Z
    7   49    1-9, 0, A-Z, a-m
    8   64    1-9, 0, A-Z, a-z, #, $
"""

from __future__ import annotations
from typing import Optional

ALPHABET = (
    "1234567890"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "#$"
)
BLANK = "-"
BLANKS = frozenset("-.")

_SYMBOL_VALUES = {c: i for i, c in enumerate(ALPHABET, start=1)}


def symbol_to_int(c: str) -> Optional[int]:
    """Map a puzzle character to its symbol number, or None if it is not one."""
    return _SYMBOL_VALUES.get(c)


def int_to_symbol(value: int) -> str:
    """Map a symbol number to its character; 0 maps to the blank '-'."""
    if value < 0 or value > len(ALPHABET):
        raise ValueError(f"Symbol must be 0-{len(ALPHABET)}, got {value}")
    if value == 0:
        return BLANK
    return ALPHABET[value - 1]


def alphabet_for(size: int) -> str:
    """The characters used by a board with ``size`` symbols."""
    return ALPHABET[:size]
