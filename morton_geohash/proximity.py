#!/usr/bin/env python3
# morton_geohash/proximity.py
r"""
Proximity search helpers.

- precision_for_radius() picks the coarsest precision whose cells are at
  least radius x radius at a given latitude.
- cell_range() turns a truncated code into the inclusive span of full
  resolution codes inside that cell.
- merge_ranges() coalesces touching spans into as few ranges as one greedy
  pass allows.

A 3x3 block of cells at the chosen precision always contains the circle:

    |--------|--------|--------|
    |        |     / -|\       |
    |--------|--------|--------|
    |       (|       x|       )|
    |--------|--------|--------|
    |        |     \ _|/       |
    |--------|--------|--------|
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List

from morton_geohash.codec import ALL_ONES

__all__ = [
    "Range",
    "EARTH_RADIUS_M",
    "FULL_RANGE",
    "precision_for_radius",
    "cell_range",
    "merge_ranges",
]

log = logging.getLogger(__name__)

# WGS84 equatorial radius
EARTH_RADIUS_M = 6378137.0

# Halvings per axis; each grid coordinate has 32 bits
_MAX_AXIS_BITS = 32


@dataclass(frozen=True)
class Range:
    """Inclusive span of 64-bit codes."""
    min: int
    max: int

    def __contains__(self, code: int) -> bool:
        return self.min <= code <= self.max

    @property
    def span(self) -> int:
        return self.max - self.min + 1


FULL_RANGE = Range(0, ALL_ONES)


def _axis_precision(required_degrees: float, full_degrees: float) -> int:
    """Count halvings of ``full_degrees`` that still leave twice the required span."""
    degrees = full_degrees
    bits = 0
    for _ in range(_MAX_AXIS_BITS):
        if required_degrees >= degrees / 2:
            break
        degrees /= 2
        bits += 1
    return bits


def precision_for_radius(latitude: float, radius_m: float, earth_radius_m: float = EARTH_RADIUS_M) -> int:
    """
    Return the coarsest precision at which a cell spans at least
    ``radius_m`` on both axes around ``latitude``.

    0 means no cell is small enough to be useful; the whole code space has
    to be scanned.
    """
    lat_degree_len = earth_radius_m * (math.pi / 180.0)
    lon_degree_len = lat_degree_len * math.cos(latitude * math.pi / 180.0)

    required_lat = radius_m / lat_degree_len
    required_lon = radius_m / lon_degree_len

    lat_bits = _axis_precision(required_lat, 180.0)
    lon_bits = _axis_precision(required_lon, 360.0)

    # Latitude needs fewer bits than longitude near the equator
    if lat_bits < lon_bits:
        precision = lon_bits * 2 - 1
    else:
        precision = lon_bits * 2
    log.debug(
        "radius %.1fm at lat %.5f: lat_bits=%d lon_bits=%d -> precision %d",
        radius_m, latitude, lat_bits, lon_bits, precision,
    )
    return precision


def cell_range(code: int, precision: int) -> Range:
    """Span of full resolution codes inside the cell ``code`` names at ``precision``."""
    low = ALL_ONES >> precision
    return Range(code & ~low & ALL_ONES, code | low)


def merge_ranges(ranges: Iterable[Range]) -> List[Range]:
    """
    Merge touching ranges in one greedy pass.

    Inputs are expected to be cells of a single precision, so any two of them
    are either identical or disjoint. Output order is not defined.
    """
    merged: List[List[int]] = []
    for r in ranges:
        if any(lo <= r.min and r.max <= hi for lo, hi in merged):
            continue

        found = False
        for i, cur in enumerate(merged):
            if r.max + 1 == cur[0]:
                # r goes right before cur
                cur[0] = r.min
                for j in range(i + 1, len(merged)):
                    if merged[j][1] + 1 == r.min:
                        cur[0] = merged[j][0]
                        del merged[j]
                        break
                found = True
                break
            if cur[1] + 1 == r.min:
                # r goes right after cur
                cur[1] = r.max
                for j in range(i + 1, len(merged)):
                    if r.max + 1 == merged[j][0]:
                        cur[1] = merged[j][1]
                        del merged[j]
                        break
                found = True
                break
        if not found:
            merged.append([r.min, r.max])

    log.debug("merged into %d range(s)", len(merged))
    return [Range(lo, hi) for lo, hi in merged]
