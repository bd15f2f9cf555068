#!/usr/bin/env python3
# morton_geohash/geohash.py
"""
GeoHash value type.

A GeoHash holds a location either as (latitude, longitude) or as a 64-bit
Morton code plus a precision, and converts between the two on demand. Each
conversion is computed once and kept on the instance.

Usage:
    from morton_geohash import GeoHash, Direction
    h = GeoHash.from_coordinates(52.52, 13.405)
    cell = h.with_precision(20)
    north = cell.adjacent(Direction.N)      # None at the north pole
    for r in h.ranges_within(500.0):
        scan(r.min, r.max)
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import List, Optional, Tuple

from morton_geohash.codec import (
    MAX_PRECISION,
    PrecisionError,
    check_precision,
    deinterleave,
    interleave,
    truncate,
)
from morton_geohash.geodesy import GRID_SIZE, grid_bounds, to_coords, to_grid
from morton_geohash.proximity import (
    EARTH_RADIUS_M,
    FULL_RANGE,
    Range,
    cell_range,
    merge_ranges,
    precision_for_radius,
)

__all__ = ["GeoHash", "Direction"]

log = logging.getLogger(__name__)

_GRID_MAX = GRID_SIZE - 1

# Only the from_* constructors hold this
_BUILD = object()


class Direction(IntEnum):
    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7


_NORTHWARD = (Direction.N, Direction.NE, Direction.NW)
_SOUTHWARD = (Direction.S, Direction.SE, Direction.SW)
_EASTWARD = (Direction.E, Direction.NE, Direction.SE)
_WESTWARD = (Direction.W, Direction.NW, Direction.SW)


class GeoHash:
    """
    A cell of the Earth named by the top ``precision`` bits of a Morton code.

    Build instances with from_coordinates() or from_hash(). Lazily computed
    fields are written on first use without locking, so an instance must not
    be shared between threads until hash() and coordinates() have been
    called once. Distinct instances are independent.
    """

    __slots__ = (
        "_hash",
        "_lat_grid",
        "_lon_grid",
        "_lat",
        "_lon",
        "_precision",
        "_hash_calculated",
        "_grid_calculated",
        "_coords_calculated",
    )

    def __init__(self, precision: int, _token: object = None):
        if _token is not _BUILD:
            raise TypeError("use GeoHash.from_coordinates() or GeoHash.from_hash()")
        self._hash = 0
        self._lat_grid = 0
        self._lon_grid = 0
        self._lat = 0.0
        self._lon = 0.0
        self._precision = check_precision(precision)
        self._hash_calculated = False
        self._grid_calculated = False
        self._coords_calculated = False

    # ------------- constructors -------------

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> "GeoHash":
        """Full precision hash of the cell containing (latitude, longitude)."""
        g = cls(MAX_PRECISION, _BUILD)
        g._lat = latitude
        g._lon = longitude
        g._coords_calculated = True
        g._lat_grid, g._lon_grid = to_grid(latitude, longitude)
        g._grid_calculated = True
        return g

    @classmethod
    def from_hash(cls, code: int, precision: int) -> "GeoHash":
        """Wrap a code; bits below ``precision`` are cleared."""
        g = cls(precision, _BUILD)
        g._hash = truncate(int(code), g._precision)
        g._hash_calculated = True
        return g

    @classmethod
    def _from_grid(cls, lat_grid: int, lon_grid: int, precision: int) -> "GeoHash":
        g = cls(precision, _BUILD)
        g._lat_grid = lat_grid
        g._lon_grid = lon_grid
        g._grid_calculated = True
        return g

    # ------------- conversions -------------

    def _ensure_grid(self) -> None:
        if self._grid_calculated:
            return
        if self._hash_calculated:
            self._lat_grid, self._lon_grid = deinterleave(self._hash)
        else:
            self._lat_grid, self._lon_grid = to_grid(self._lat, self._lon)
        self._grid_calculated = True

    def hash(self) -> int:
        if not self._hash_calculated:
            self._ensure_grid()
            self._hash = truncate(interleave(self._lat_grid, self._lon_grid), self._precision)
            self._hash_calculated = True
        return self._hash

    def coordinates(self) -> Tuple[float, float]:
        """(latitude, longitude); the cell centre unless built from coordinates."""
        if not self._coords_calculated:
            self._ensure_grid()
            self._lat, self._lon = to_coords(self._lat_grid, self._lon_grid)
            self._coords_calculated = True
        return self._lat, self._lon

    def grid(self) -> Tuple[int, int]:
        """(lat_grid, lon_grid) as 32-bit fixed-point values."""
        self._ensure_grid()
        return self._lat_grid, self._lon_grid

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def latitude(self) -> float:
        return self.coordinates()[0]

    @property
    def longitude(self) -> float:
        return self.coordinates()[1]

    # ------------- precision -------------

    def with_precision(self, precision: int) -> "GeoHash":
        return GeoHash.from_hash(self.hash(), precision)

    def parent(self) -> "GeoHash":
        """Enclosing cell one bit coarser."""
        if self._precision == 1:
            raise PrecisionError("A precision 1 hash has no parent")
        return self.with_precision(self._precision - 1)

    def contains(self, other: "GeoHash") -> bool:
        """True when ``other`` lies inside this cell."""
        if other.precision < self._precision:
            return False
        return truncate(other.hash(), self._precision) == self.hash()

    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Return bounding box (lat_min, lon_min, lat_max, lon_max) of the cell.
        Longitude takes the odd bit when the precision is odd.
        """
        self._ensure_grid()
        lon_bits = (self._precision + 1) // 2
        lat_bits = self._precision // 2
        return grid_bounds(self._lat_grid, self._lon_grid, lat_bits, lon_bits)

    # ------------- adjacency -------------

    def adjacent(self, direction: Direction) -> Optional["GeoHash"]:
        """
        Neighbouring cell at the same precision, or None when the move would
        cross a pole. Longitude wraps around the antimeridian.
        """
        if isinstance(direction, bool) or not isinstance(direction, int):
            raise TypeError(f"direction must be a Direction, got {direction!r}")
        direction = Direction(direction)
        self._ensure_grid()

        lon_bits = self._precision // 2
        lat_bits = lon_bits
        if self._precision & 1:
            # odd precision: latitude is the less accurate axis
            lat_bits -= 1
        lat_step = 1 << (32 - lat_bits)
        lon_step = 1 << (32 - lon_bits)

        lat_grid = self._lat_grid
        lon_grid = self._lon_grid

        if direction in _NORTHWARD:
            if lat_grid + lat_step > _GRID_MAX:
                log.debug("no cell %s of %r: touching north pole", direction.name, self)
                return None
            lat_grid += lat_step
        elif direction in _SOUTHWARD:
            if lat_grid < lat_step:
                log.debug("no cell %s of %r: touching south pole", direction.name, self)
                return None
            lat_grid -= lat_step

        if direction in _EASTWARD:
            lon_grid = (lon_grid + lon_step) % GRID_SIZE
        elif direction in _WESTWARD:
            lon_grid = (lon_grid - lon_step) % GRID_SIZE

        return GeoHash._from_grid(lat_grid, lon_grid, self._precision)

    def neighbors(self) -> Tuple[Optional["GeoHash"], ...]:
        """The 8 adjacent cells in Direction order (N, NE, E, SE, S, SW, W, NW)."""
        return tuple(self.adjacent(d) for d in Direction)

    # ------------- proximity -------------

    def ranges_within(self, radius_m: float, earth_radius_m: float = EARTH_RADIUS_M) -> List[Range]:
        """
        Code ranges covering this cell and its neighbours at the precision
        chosen for ``radius_m``. Each Range is inclusive on both ends.

        Neighbours come from adjacent(), whose step at an odd precision is
        two cells wide. When the chosen precision is odd (typical near the
        equator) the cover holds this cell and cells two steps away, not the
        eight cells touching it. Even precisions cover the touching 3x3 block.
        """
        precision = precision_for_radius(self.latitude, radius_m, earth_radius_m)
        if precision == 0:
            return [FULL_RANGE]

        center = self.with_precision(precision)
        cells = [center]
        cells.extend(n for n in center.neighbors() if n is not None)
        return merge_ranges(cell_range(c.hash(), precision) for c in cells)

    # ------------- dunder -------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoHash):
            return NotImplemented
        return self._precision == other._precision and self.hash() == other.hash()

    def __hash__(self) -> int:
        return hash((self.hash(), self._precision))

    def __repr__(self) -> str:
        return f"GeoHash(0x{self.hash():016x}, precision={self._precision})"
