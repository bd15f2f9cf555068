"""Tests for precision selection, cell ranges and range covers."""

import pytest

from morton_geohash import GeoHash, Range, cell_range, merge_ranges, precision_for_radius
from morton_geohash.codec import ALL_ONES, interleave, truncate
from morton_geohash.geodesy import GRID_SIZE
from morton_geohash.proximity import FULL_RANGE


def _assert_disjoint_and_apart(ranges):
    ordered = sorted(ranges, key=lambda r: r.min)
    for a, b in zip(ordered, ordered[1:]):
        assert a.max + 1 < b.min


# ------------- precision_for_radius -------------

def test_one_degree_of_longitude_at_equator():
    # 8 longitude halvings, 7 latitude halvings
    assert precision_for_radius(0.0, 78271.52) == 15


def test_zero_radius_is_full_precision():
    assert precision_for_radius(0.0, 0.0) == 64


def test_even_precision_away_from_equator():
    assert precision_for_radius(60.5, 1000.0) == 28


def test_pole_region_uses_longitude_bits():
    assert precision_for_radius(89.0, 5000.0) == 14


def test_huge_radius_needs_whole_globe():
    assert precision_for_radius(0.0, 2.0e7) == 1
    assert precision_for_radius(0.0, 3.0e7) == 0


def test_higher_latitude_is_never_finer():
    for radius in (10.0, 500.0, 25000.0):
        assert precision_for_radius(70.0, radius) <= precision_for_radius(0.0, radius)


def test_smaller_radius_is_never_coarser():
    assert precision_for_radius(45.0, 100.0) >= precision_for_radius(45.0, 10000.0)


def test_earth_radius_scales_selection():
    assert precision_for_radius(0.0, 78271.52, earth_radius_m=6378137.0 / 4) < 15


# ------------- Range / cell_range -------------

def test_range_contains_and_span():
    r = Range(10, 19)
    assert 10 in r and 19 in r
    assert 20 not in r
    assert r.span == 10


def test_cell_range_bounds():
    assert cell_range(0xC000000000000000, 2) == Range(0xC000000000000000, ALL_ONES)
    assert cell_range(0x1234, 64) == Range(0x1234, 0x1234)
    assert cell_range(0x5555555555555555, 0) == FULL_RANGE


def test_cell_range_covers_full_resolution_members(berlin):
    cell = berlin.with_precision(23)
    assert berlin.hash() in cell_range(cell.hash(), 23)


# ------------- merge_ranges -------------

def test_merge_appends_disjoint():
    merged = merge_ranges([Range(0, 9), Range(20, 29)])
    assert sorted(merged, key=lambda r: r.min) == [Range(0, 9), Range(20, 29)]


def test_merge_extends_right():
    assert merge_ranges([Range(0, 9), Range(10, 19)]) == [Range(0, 19)]


def test_merge_extends_left():
    assert merge_ranges([Range(10, 19), Range(0, 9)]) == [Range(0, 19)]


def test_merge_bridges_two_ranges():
    assert merge_ranges([Range(0, 9), Range(20, 29), Range(10, 19)]) == [Range(0, 29)]
    assert merge_ranges([Range(20, 29), Range(0, 9), Range(10, 19)]) == [Range(0, 29)]


def test_merge_drops_duplicates():
    assert merge_ranges([Range(0, 9), Range(0, 9), Range(10, 19), Range(10, 19)]) == [Range(0, 19)]


def test_merge_does_not_wrap_past_top():
    merged = merge_ranges([Range(ALL_ONES - 9, ALL_ONES), Range(0, 9)])
    assert len(merged) == 2


def test_merge_empty():
    assert merge_ranges([]) == []


# ------------- GeoHash.ranges_within -------------

def test_ranges_cover_true_neighbours():
    h = GeoHash.from_coordinates(60.5, 10.3)
    ranges = h.ranges_within(1000.0)
    p = 28
    step = 1 << (32 - p // 2)
    lat_grid, lon_grid = h.with_precision(p).grid()

    for dlat in (-1, 0, 1):
        for dlon in (-1, 0, 1):
            code = truncate(interleave(lat_grid + dlat * step, (lon_grid + dlon * step) % GRID_SIZE), p)
            cr = cell_range(code, p)
            assert any(r.min <= cr.min and cr.max <= r.max for r in ranges)

    # exactly the 9 cells, nothing more
    assert sum(r.span for r in ranges) == 9 << (64 - p)
    _assert_disjoint_and_apart(ranges)


def test_ranges_contain_own_code(sample_points):
    for lat, lon in sample_points[:5]:
        h = GeoHash.from_coordinates(lat, lon)
        ranges = h.ranges_within(250.0)
        assert any(h.hash() in r for r in ranges)
        _assert_disjoint_and_apart(ranges)


def test_ranges_from_hash_born_value(berlin):
    cell = GeoHash.from_hash(berlin.hash(), 40)
    ranges = cell.ranges_within(2000.0)
    assert any(cell.hash() in r for r in ranges)
    _assert_disjoint_and_apart(ranges)


@pytest.mark.parametrize("lat", [89.0, -89.0])
def test_ranges_skip_missing_pole_neighbours(lat):
    h = GeoHash.from_coordinates(lat, 45.0)
    ranges = h.ranges_within(5000.0)
    # top (or bottom) latitude band: 3 cells of the 3x3 block fall off the pole
    assert sum(r.span for r in ranges) == 6 << (64 - 14)
    assert any(h.hash() in r for r in ranges)
    _assert_disjoint_and_apart(ranges)


def test_ranges_across_antimeridian():
    h = GeoHash.from_coordinates(60.5, 179.9999)
    ranges = h.ranges_within(1000.0)
    west_of_line = GeoHash.from_coordinates(60.5, -179.9999)
    assert precision_for_radius(60.5, 1000.0) == 28
    assert any(west_of_line.hash() in r for r in ranges)
    _assert_disjoint_and_apart(ranges)


def test_ranges_whole_globe():
    assert GeoHash.from_coordinates(0.0, 0.0).ranges_within(3.0e7) == [FULL_RANGE]


def test_odd_precision_cover_steps_two_cells():
    h = GeoHash.from_coordinates(10.0, 20.0)
    p = precision_for_radius(10.0, 1000.0)
    assert p == 29
    ranges = h.ranges_within(1000.0)
    lat_grid, lon_grid = h.with_precision(p).grid()
    cell_width = 1 << 17

    def covered(dlon):
        code = truncate(interleave(lat_grid, lon_grid + dlon), p)
        cr = cell_range(code, p)
        return any(r.min <= cr.min and cr.max <= r.max for r in ranges)

    assert not covered(cell_width)
    assert not covered(-cell_width)
    assert covered(2 * cell_width)
    assert covered(-2 * cell_width)
