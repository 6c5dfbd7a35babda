"""Geometry — great-circle distance and drawn-path buffer tests.

All distances use the Haversine formula on a spherical Earth:

  a = sin²(Δlat/2) + cos(lat1)·cos(lat2)·sin²(Δlng/2)
  d = 2·R·atan2(√a, √(1−a))

with R = 3959 mi for radius searches and R = 6 371 000 m for path buffers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Literal

from fuel_locator.config.schema import EARTH_RADIUS_METERS, EARTH_RADIUS_MILES

Coordinate = tuple[float, float]
BufferMode = Literal["endpoint", "segment"]


def _haversine(lat1: float, lng1: float, lat2: float, lng2: float, radius: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    a = min(a, 1.0)
    return 2 * radius * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in miles."""
    return _haversine(lat1, lng1, lat2, lng2, EARTH_RADIUS_MILES)


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in meters."""
    return _haversine(lat1, lng1, lat2, lng2, EARTH_RADIUS_METERS)


def endpoint_distance_meters(point: Coordinate, start: Coordinate, end: Coordinate) -> float:
    """Distance from ``point`` to the nearer of the segment's two endpoints.

    This is not the distance to the segment itself: a point beside the
    middle of a long segment can be far from both endpoints.
    """
    to_start = distance_meters(point[0], point[1], start[0], start[1])
    to_end = distance_meters(point[0], point[1], end[0], end[1])
    return min(to_start, to_end)


def segment_distance_meters(point: Coordinate, start: Coordinate, end: Coordinate) -> float:
    """Distance from ``point`` to the closest point on the segment.

    Uses an equirectangular projection centred on ``point``, which is
    accurate for corridors of a few kilometres.  Never larger than
    ``endpoint_distance_meters`` for the same inputs.
    """
    lat0 = math.radians(point[0])
    cos_lat0 = math.cos(lat0)

    def project(c: Coordinate) -> tuple[float, float]:
        x = math.radians(c[1] - point[1]) * cos_lat0 * EARTH_RADIUS_METERS
        y = math.radians(c[0] - point[0]) * EARTH_RADIUS_METERS
        return x, y

    ax, ay = project(start)
    bx, by = project(end)
    dx, dy = bx - ax, by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        projected = math.hypot(ax, ay)
    else:
        t = max(0.0, min(1.0, -(ax * dx + ay * dy) / length_sq))
        projected = math.hypot(ax + t * dx, ay + t * dy)
    return min(projected, endpoint_distance_meters(point, start, end))


def is_within_buffered_path(
    point: Coordinate,
    path: Sequence[Coordinate],
    buffer_meters: float,
    mode: BufferMode = "endpoint",
) -> bool:
    """True if ``point`` lies within ``buffer_meters`` of any segment of ``path``.

    ``mode="endpoint"`` measures each segment by its nearer endpoint;
    ``mode="segment"`` measures to the closest point on the segment.
    Paths with fewer than two points never match.
    """
    if len(path) < 2:
        return False

    measure = segment_distance_meters if mode == "segment" else endpoint_distance_meters
    for i in range(len(path) - 1):
        if measure(point, path[i], path[i + 1]) <= buffer_meters:
            return True
    return False
