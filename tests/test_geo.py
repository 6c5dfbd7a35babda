"""Tests for great-circle distance and drawn-path buffer geometry.

Covers:
  - Haversine in miles and meters (identity, symmetry, known pair)
  - Endpoint vs segment distance models
  - is_within_buffered_path edge cases
"""

from __future__ import annotations

import pytest

from fuel_locator.config.schema import EARTH_RADIUS_METERS, EARTH_RADIUS_MILES
from fuel_locator.engine.geo import (
    distance_meters,
    distance_miles,
    endpoint_distance_meters,
    is_within_buffered_path,
    segment_distance_meters,
)

from conftest import LONDON, MANCHESTER


# ═══════════════════════════════════════════════════════════════════════════
# Haversine
# ═══════════════════════════════════════════════════════════════════════════

class TestDistance:

    @pytest.mark.parametrize("lat,lng", [(0.0, 0.0), (51.5074, -0.1278), (-33.86, 151.21), (89.9, 179.9)])
    def test_identical_points_are_zero(self, lat, lng):
        assert distance_miles(lat, lng, lat, lng) == 0
        assert distance_meters(lat, lng, lat, lng) == 0

    def test_symmetric(self):
        there = distance_miles(*LONDON, *MANCHESTER)
        back = distance_miles(*MANCHESTER, *LONDON)
        assert there == pytest.approx(back)

    def test_london_to_manchester(self):
        assert distance_miles(*LONDON, *MANCHESTER) == pytest.approx(163, abs=2)

    def test_meters_and_miles_share_formula(self):
        miles = distance_miles(*LONDON, *MANCHESTER)
        meters = distance_meters(*LONDON, *MANCHESTER)
        assert meters / miles == pytest.approx(EARTH_RADIUS_METERS / EARTH_RADIUS_MILES)

    def test_one_degree_of_latitude(self):
        # 2πR / 360 for R = 3959 mi
        assert distance_miles(0, 0, 1, 0) == pytest.approx(69.097, abs=0.01)

    def test_antipodal_points(self):
        assert distance_miles(0, 0, 0, 180) == pytest.approx(3.141592653589793 * EARTH_RADIUS_MILES)


# ═══════════════════════════════════════════════════════════════════════════
# Segment distance models
# ═══════════════════════════════════════════════════════════════════════════

class TestSegmentDistance:

    START = (51.0, 0.0)
    END = (51.0, 1.0)

    def test_endpoint_model_uses_nearer_endpoint(self):
        point = (51.0, 0.1)
        expected = distance_meters(*point, *self.START)
        assert endpoint_distance_meters(point, self.START, self.END) == pytest.approx(expected)

    def test_segment_model_sees_the_middle(self):
        midpoint = (51.0, 0.5)
        # ~35 km from either endpoint, on the segment itself
        assert endpoint_distance_meters(midpoint, self.START, self.END) > 30_000
        assert segment_distance_meters(midpoint, self.START, self.END) == pytest.approx(0, abs=1)

    def test_segment_model_perpendicular_offset(self):
        beside = (51.01, 0.5)
        # 0.01° of latitude ≈ 1112 m
        assert segment_distance_meters(beside, self.START, self.END) == pytest.approx(1112, rel=0.01)

    def test_segment_never_exceeds_endpoint(self):
        for point in [(51.2, -0.3), (50.7, 0.4), (51.0, 1.5), (52.0, 0.5)]:
            assert segment_distance_meters(point, self.START, self.END) <= endpoint_distance_meters(
                point, self.START, self.END
            )

    def test_degenerate_segment(self):
        point = (51.01, 0.0)
        d = segment_distance_meters(point, self.START, self.START)
        assert d == pytest.approx(distance_meters(*point, *self.START), rel=0.001)


# ═══════════════════════════════════════════════════════════════════════════
# Buffered path test
# ═══════════════════════════════════════════════════════════════════════════

class TestBufferedPath:

    PATH = [(51.0, 0.0), (51.0, 1.0), (52.0, 1.0)]

    @pytest.mark.parametrize("vertex", PATH)
    def test_vertex_matches_with_zero_buffer(self, vertex):
        assert is_within_buffered_path(vertex, self.PATH, 0)

    def test_single_point_path_never_matches(self):
        assert not is_within_buffered_path((51.0, 0.0), [(51.0, 0.0)], 10_000)

    def test_empty_path_never_matches(self):
        assert not is_within_buffered_path((51.0, 0.0), [], 10_000)

    def test_far_point_does_not_match(self):
        assert not is_within_buffered_path((55.0, -3.0), self.PATH, 1000)

    def test_near_second_segment_only(self):
        # 500 m-ish from (52.0, 1.0), far from the first segment
        point = (51.996, 1.0)
        assert is_within_buffered_path(point, self.PATH, 1000)
        assert not is_within_buffered_path(point, self.PATH[:2], 1000)

    def test_endpoint_mode_misses_segment_middle(self):
        midpoint = (51.0, 0.5)
        assert not is_within_buffered_path(midpoint, self.PATH, 1000)
        assert is_within_buffered_path(midpoint, self.PATH, 1000, mode="segment")

    def test_beyond_segment_end_rejected_in_both_modes(self):
        # ~700 m past the end of the first segment along its direction, far from the rest
        point = (51.0, 1.01)
        path = self.PATH[:2]
        assert not is_within_buffered_path(point, path, 500)
        assert not is_within_buffered_path(point, path, 500, mode="segment")
        assert is_within_buffered_path(point, path, 800)
