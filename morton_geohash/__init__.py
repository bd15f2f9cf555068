#!/usr/bin/env python3
# morton_geohash/__init__.py
"""
64-bit Morton geohashes: encode/decode, truncation, neighbours and range
covers for radius queries against a sorted key store.
"""

from morton_geohash.batch import decode_many, encode_many
from morton_geohash.codec import PrecisionError, deinterleave, interleave
from morton_geohash.geodesy import to_coords, to_grid
from morton_geohash.geohash import Direction, GeoHash
from morton_geohash.proximity import Range, cell_range, merge_ranges, precision_for_radius
from morton_geohash.version import __version__

__all__ = [
    "GeoHash",
    "Direction",
    "Range",
    "PrecisionError",
    "interleave",
    "deinterleave",
    "to_grid",
    "to_coords",
    "precision_for_radius",
    "merge_ranges",
    "cell_range",
    "encode_many",
    "decode_many",
    "__version__",
]
