"""Ring geometry primitives.

Pure, total helpers composed by the validator, the repairer and the
codecs.  None of them mutates its argument; functions that "change" a
ring return a new ``Ring``.

Area and orientation are computed with shapely on ``(lon, lat)``
coordinates, so a positive signed area means counter-clockwise on a
lon/lat plot.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from fir_converter.core.constants import ANTIMERIDIAN_SPAN, MIN_DISTINCT_POINTS
from fir_converter.models.boundary import Point, Ring

if TYPE_CHECKING:
    from collections.abc import Sequence


class Winding(enum.Enum):
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"
    FLAT = "flat"


# ---------------------------------------------------------------------------
# Closure
# ---------------------------------------------------------------------------


def is_closed(ring: Ring) -> bool:
    """Whether the ring's first and last points are equal."""
    return bool(ring.points) and ring.points[0] == ring.points[-1]


def close(ring: Ring) -> Ring:
    """Return a copy of ``ring`` with its first point appended if it is open."""
    if not ring.points or is_closed(ring):
        return Ring(list(ring.points))
    return Ring([*ring.points, ring.points[0]])


def open_points(ring: Ring) -> list[Point]:
    """Points of the ring without the closing repeat of the first point."""
    if len(ring.points) > 1 and is_closed(ring):
        return list(ring.points[:-1])
    return list(ring.points)


# ---------------------------------------------------------------------------
# Consecutive duplicates
# ---------------------------------------------------------------------------


def has_consecutive_duplicates(ring: Ring) -> bool:
    return any(a == b for a, b in zip(ring.points, ring.points[1:]))


def dedupe_consecutive(ring: Ring) -> Ring:
    """Return a copy of ``ring`` with immediately repeated points removed."""
    points: list[Point] = []
    for point in ring.points:
        if not points or points[-1] != point:
            points.append(point)
    return Ring(points)


# ---------------------------------------------------------------------------
# Area / degeneracy / orientation
# ---------------------------------------------------------------------------


def distinct_point_count(ring: Ring) -> int:
    return len(set(ring.points))


def signed_area(ring: Ring) -> float:
    """Signed planar area in square degrees; positive is counter-clockwise.

    Rings with fewer than 3 distinct points have zero area.
    """
    from shapely.geometry import LinearRing, Polygon

    if distinct_point_count(ring) < MIN_DISTINCT_POINTS:
        return 0.0
    coords = [point.to_lon_lat() for point in ring.points]
    area = Polygon(coords).area
    if area == 0:
        return 0.0
    return area if LinearRing(coords).is_ccw else -area


def is_degenerate(ring: Ring) -> bool:
    """Fewer than 3 distinct points, or no enclosed area."""
    if distinct_point_count(ring) < MIN_DISTINCT_POINTS:
        return True
    return signed_area(ring) == 0


def winding(ring: Ring) -> Winding:
    area = signed_area(ring)
    if area > 0:
        return Winding.COUNTER_CLOCKWISE
    if area < 0:
        return Winding.CLOCKWISE
    return Winding.FLAT


def with_winding(ring: Ring, target: Winding) -> Ring:
    """Return a copy of ``ring`` wound in ``target`` direction.

    Every point after the first is reversed, so the starting point (and
    closure, if any) is kept.  Flat rings are returned unchanged.
    """
    current = winding(ring)
    if current is Winding.FLAT or current is target or target is Winding.FLAT:
        return Ring(list(ring.points))
    closed = is_closed(ring) and len(ring.points) > 1
    points = open_points(ring)
    reversed_points = [points[0], *reversed(points[1:])]
    if closed:
        reversed_points.append(reversed_points[0])
    return Ring(reversed_points)


# ---------------------------------------------------------------------------
# Extent
# ---------------------------------------------------------------------------


def bounding_box(rings: Sequence[Ring]) -> tuple[float, float, float, float] | None:
    """Return ``(min_lat, min_lon, max_lat, max_lon)`` over all points.

    When the longitude span exceeds 180 degrees the box is taken to
    cross the antimeridian and min/max longitude are swapped, matching
    what radar clients expect.  Returns ``None`` when there are no points.
    """
    points = [point for ring in rings for point in ring.points]
    if not points:
        return None
    min_lat = min(point.lat for point in points)
    max_lat = max(point.lat for point in points)
    min_lon = min(point.lon for point in points)
    max_lon = max(point.lon for point in points)
    if max_lon - min_lon > ANTIMERIDIAN_SPAN:
        min_lon, max_lon = max_lon, min_lon
    return (min_lat, min_lon, max_lat, max_lon)


def label_point(rings: Sequence[Ring]) -> Point | None:
    """Default label position: centre of the first ring's bounding box."""
    for ring in rings:
        box = bounding_box([ring])
        if box is None:
            continue
        min_lat, min_lon, max_lat, max_lon = box
        lon = (min_lon + max_lon) / 2
        if min_lon > max_lon:
            # antimeridian box: the midpoint lies on the far side of the globe
            lon = lon + 180.0 if lon <= 0 else lon - 180.0
        return Point(lat=(min_lat + max_lat) / 2, lon=lon)
    return None
