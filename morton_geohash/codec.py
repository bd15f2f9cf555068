#!/usr/bin/env python3
# morton_geohash/codec.py
"""
Morton (Z-order) codec for two 32-bit grid coordinates.

Bit 2i of a code holds bit i of ``x`` and bit 2i+1 holds bit i of ``y``.
Spreading and contracting is done with fixed masks in five doubling steps,
so the cost does not depend on the number of bits.
"""

import numbers
from typing import Tuple

__all__ = [
    "interleave",
    "deinterleave",
    "precision_mask",
    "truncate",
    "check_precision",
    "PrecisionError",
    "ALL_ONES",
    "GRID_MASK",
]

# 0101 0101 ...
B0 = 0x5555555555555555
# 0011 0011 ...
B1 = 0x3333333333333333
# 0000 1111 ...
B2 = 0x0F0F0F0F0F0F0F0F
# 0000 0000 1111 1111 ...
B3 = 0x00FF00FF00FF00FF
B4 = 0x0000FFFF0000FFFF
B5 = 0x00000000FFFFFFFF

ALL_ONES = 0xFFFFFFFFFFFFFFFF
GRID_MASK = B5

MAX_PRECISION = 64


class PrecisionError(ValueError):
    """Raised when a precision falls outside 1..64."""


def check_precision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, numbers.Integral):
        raise PrecisionError(f"Precision must be an int, got {precision!r}")
    if not 1 <= precision <= MAX_PRECISION:
        raise PrecisionError(f"Precision must be between 1 and {MAX_PRECISION}, got {precision}")
    return int(precision)


def interleave(x: int, y: int) -> int:
    """Interleave two 32-bit values into one 64-bit Morton code."""
    i = int(x) & GRID_MASK
    j = int(y) & GRID_MASK

    i = (i | (i << 16)) & B4
    j = (j | (j << 16)) & B4

    i = (i | (i << 8)) & B3
    j = (j | (j << 8)) & B3

    i = (i | (i << 4)) & B2
    j = (j | (j << 4)) & B2

    i = (i | (i << 2)) & B1
    j = (j | (j << 2)) & B1

    i = (i | (i << 1)) & B0
    j = (j | (j << 1)) & B0

    return i | (j << 1)


def deinterleave(z: int) -> Tuple[int, int]:
    """Split a 64-bit Morton code back into its (x, y) pair."""
    z = int(z)
    i = z & B0
    j = (z >> 1) & B0

    i = (i | (i >> 1)) & B1
    j = (j | (j >> 1)) & B1

    i = (i | (i >> 2)) & B2
    j = (j | (j >> 2)) & B2

    i = (i | (i >> 4)) & B3
    j = (j | (j >> 4)) & B3

    i = (i | (i >> 8)) & B4
    j = (j | (j >> 8)) & B4

    i = (i | (i >> 16)) & B5
    j = (j | (j >> 16)) & B5

    return i, j


def precision_mask(precision: int) -> int:
    """Mask with the top ``precision`` bits of a 64-bit code set."""
    return ALL_ONES ^ (ALL_ONES >> precision)


def truncate(code: int, precision: int) -> int:
    """Clear every bit below the top ``precision`` bits."""
    return code & precision_mask(precision)
