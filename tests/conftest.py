"""Pytest configuration and fixtures."""

import pytest

from morton_geohash import GeoHash, interleave


@pytest.fixture
def berlin():
    """Full precision hash of central Berlin."""
    return GeoHash.from_coordinates(52.520008, 13.404954)


@pytest.fixture
def sample_points():
    """Points spread over all four hemispheres plus the grid edges."""
    return [
        (0.0, 0.0),
        (52.520008, 13.404954),
        (-33.868820, 151.209290),
        (40.712776, -74.005974),
        (-54.801912, -68.302951),
        (89.999, 179.999),
        (-90.0, -180.0),
        (60.5, 10.3),
    ]


@pytest.fixture
def grid_cell():
    """Factory: cell built from raw grid coordinates at a given precision."""
    def make(lat_grid, lon_grid, precision):
        return GeoHash.from_hash(interleave(lat_grid, lon_grid), precision)
    return make
