#!/usr/bin/env python3
# morton_geohash/version.py
"""
Version metadata for morton_geohash.
"""

__version__ = "1.0.0"
__license__ = "MIT"
