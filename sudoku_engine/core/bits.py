"""Fixed-width bitmask helpers for candidate sets.

Symbol ``k`` (1-based) is stored in bit ``k - 1`` of a plain Python int.
Masks never need more than 64 bits: the widest alphabet has 64 symbols.
"""

from __future__ import annotations
from typing import Iterator

from ..exceptions import InvariantViolation

MAX_SYMBOL = 64


def bit(k: int) -> int:
    """Return a mask with only symbol ``k`` set, for ``k`` in [1, 64]."""
    if k < 1 or k > MAX_SYMBOL:
        raise InvariantViolation(f"Bit position must be 1-{MAX_SYMBOL}, got {k}")
    return 1 << (k - 1)


def full_mask(size: int) -> int:
    """Mask with every symbol 1..size set."""
    if size < 0 or size > MAX_SYMBOL:
        raise InvariantViolation(f"Mask width must be 0-{MAX_SYMBOL}, got {size}")
    return (1 << size) - 1


def first_set(mask: int, limit: int, start: int = 1) -> int:
    """
    Return the smallest symbol k in [start, limit] whose bit is set.

    Returns 0 if there is none.
    """
    start = max(start, 1)
    if start > limit:
        return 0
    window = mask & full_mask(limit) & ~((1 << (start - 1)) - 1)
    if not window:
        return 0
    # isolate the lowest set bit
    return (window & -window).bit_length()


def count_bits(mask: int) -> int:
    """Number of symbols in a mask."""
    return bin(mask).count("1")


def iter_bits(mask: int, limit: int) -> Iterator[int]:
    """Yield the symbols set in ``mask`` in ascending order, up to ``limit``."""
    k = first_set(mask, limit)
    while k:
        yield k
        k = first_set(mask, limit, k + 1)


def mask_to_string(mask: int, width: int = MAX_SYMBOL) -> str:
    """
    Render a mask as '0'/'1' characters, symbol 1 first.

    Used by the detailed board dump to show candidate stacks.
    """
    return "".join("1" if mask & (1 << i) else "0" for i in range(width))
