#!/usr/bin/env python3
# morton_geohash/geodesy.py
"""
Geodesy utilities for morton_geohash.
Handles conversions between latitude/longitude and 32-bit fixed-point grid
coordinates covering [-90, 90) x [-180, 180).
"""

import math
from typing import Tuple

__all__ = [
    "to_grid",
    "to_coords",
    "grid_bounds",
    "GRID_SIZE",
]

# Number of grid steps per axis
GRID_SIZE = 1 << 32


def to_grid(lat: float, lon: float) -> Tuple[int, int]:
    """
    Convert lat/lon to (lat_grid, lon_grid).
    Inputs are not validated; out-of-range values wrap modulo the grid size.
    """
    # 0..1
    lat_offset = (lat + 90.0) / 180.0
    lon_offset = (lon + 180.0) / 360.0

    lat_grid = math.floor(lat_offset * GRID_SIZE) % GRID_SIZE
    lon_grid = math.floor(lon_offset * GRID_SIZE) % GRID_SIZE
    return lat_grid, lon_grid


def to_coords(lat_grid: int, lon_grid: int) -> Tuple[float, float]:
    """
    Convert grid coordinates to latitude/longitude (grid cell center).
    Returns (lat, lon).
    """
    lat_offset = (lat_grid + 0.5) / GRID_SIZE
    lon_offset = (lon_grid + 0.5) / GRID_SIZE
    return -90.0 + lat_offset * 180.0, -180.0 + lon_offset * 360.0


def grid_bounds(lat_grid: int, lon_grid: int, lat_bits: int, lon_bits: int) -> Tuple[float, float, float, float]:
    """
    Return bounding box (lat_min, lon_min, lat_max, lon_max) of the cell that
    keeps the top ``lat_bits``/``lon_bits`` bits of each grid coordinate.
    """
    lat_span = GRID_SIZE >> lat_bits
    lon_span = GRID_SIZE >> lon_bits
    lat_lo = lat_grid - lat_grid % lat_span
    lon_lo = lon_grid - lon_grid % lon_span
    lat_min = -90.0 + lat_lo / GRID_SIZE * 180.0
    lon_min = -180.0 + lon_lo / GRID_SIZE * 360.0
    lat_max = -90.0 + (lat_lo + lat_span) / GRID_SIZE * 180.0
    lon_max = -180.0 + (lon_lo + lon_span) / GRID_SIZE * 360.0
    return lat_min, lon_min, lat_max, lon_max
