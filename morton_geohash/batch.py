#!/usr/bin/env python3
# morton_geohash/batch.py
"""
Vectorised codec for arrays of points.

Same masks and grid mapping as codec.py/geodesy.py, applied to numpy
``uint64`` arrays so millions of points encode without a Python loop.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from morton_geohash.codec import (
    ALL_ONES,
    B0, B1, B2, B3, B4, B5,
    check_precision,
)
from morton_geohash.geodesy import GRID_SIZE

__all__ = [
    "interleave_array",
    "deinterleave_array",
    "encode_many",
    "decode_many",
]

_B = [np.uint64(b) for b in (B0, B1, B2, B3, B4, B5)]
_SHIFTS = [np.uint64(s) for s in (1, 2, 4, 8, 16)]
_ONE = np.uint64(1)


def _spread(v: np.ndarray) -> np.ndarray:
    v = v & _B[5]
    for shift, mask in zip(reversed(_SHIFTS), (_B[4], _B[3], _B[2], _B[1], _B[0])):
        v = (v | (v << shift)) & mask
    return v


def _compact(v: np.ndarray) -> np.ndarray:
    v = v & _B[0]
    for shift, mask in zip(_SHIFTS, (_B[1], _B[2], _B[3], _B[4], _B[5])):
        v = (v | (v >> shift)) & mask
    return v


def interleave_array(x, y) -> np.ndarray:
    """Element-wise interleave() for arrays of 32-bit values."""
    i = _spread(np.asarray(x, dtype=np.uint64))
    j = _spread(np.asarray(y, dtype=np.uint64))
    return i | (j << _ONE)


def deinterleave_array(z) -> Tuple[np.ndarray, np.ndarray]:
    """Element-wise deinterleave(); returns (x, y) as uint64 arrays."""
    z = np.asarray(z, dtype=np.uint64)
    return _compact(z), _compact(z >> _ONE)


def _to_grid_array(values: np.ndarray, offset: float, span: float) -> np.ndarray:
    scaled = np.floor((values + offset) / span * GRID_SIZE)
    return np.mod(scaled, GRID_SIZE).astype(np.uint64)


def encode_many(lats, lons, precision: int = 64) -> np.ndarray:
    """
    Encode arrays of latitudes/longitudes into Morton codes truncated to
    ``precision`` bits. Returns a uint64 array shaped like the broadcast input.
    """
    precision = check_precision(precision)
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)

    lat_grid = _to_grid_array(lats, 90.0, 180.0)
    lon_grid = _to_grid_array(lons, 180.0, 360.0)
    mask = np.uint64(ALL_ONES ^ (ALL_ONES >> precision))
    return interleave_array(lat_grid, lon_grid) & mask


def decode_many(codes) -> Tuple[np.ndarray, np.ndarray]:
    """Decode Morton codes into (lats, lons) of the cell centres."""
    lat_grid, lon_grid = deinterleave_array(codes)
    lats = -90.0 + (lat_grid.astype(np.float64) + 0.5) / GRID_SIZE * 180.0
    lons = -180.0 + (lon_grid.astype(np.float64) + 0.5) / GRID_SIZE * 360.0
    return lats, lons
