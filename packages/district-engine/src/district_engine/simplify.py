from __future__ import annotations

import math

from district_engine.models import GeoPoint, Ring

DEFAULT_SIMPLIFY_TOLERANCE = 0.0005


def perpendicular_distance(point: GeoPoint, line_start: GeoPoint, line_end: GeoPoint) -> float:
    """Distance from ``point`` to the segment ``line_start``-``line_end`` in degree units."""
    a = point.lng - line_start.lng
    b = point.lat - line_start.lat
    c = line_end.lng - line_start.lng
    d = line_end.lat - line_start.lat

    length_sq = c * c + d * d
    if length_sq == 0:
        return math.sqrt(a * a + b * b)

    param = (a * c + b * d) / length_sq
    if param < 0:
        nearest_lng, nearest_lat = line_start.lng, line_start.lat
    elif param > 1:
        nearest_lng, nearest_lat = line_end.lng, line_end.lat
    else:
        nearest_lng = line_start.lng + param * c
        nearest_lat = line_start.lat + param * d

    dx = point.lng - nearest_lng
    dy = point.lat - nearest_lat
    return math.sqrt(dx * dx + dy * dy)


def simplify(ring: Ring, tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE) -> Ring:
    """Douglas-Peucker simplification for rendering.

    The output is lossy and must not be used for containment checks.
    """
    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")
    points = tuple(ring)
    if tolerance == 0 or len(points) <= 2:
        return points
    return tuple(_douglas_peucker(points, tolerance))


def _douglas_peucker(points: tuple[GeoPoint, ...], tolerance: float) -> list[GeoPoint]:
    if len(points) <= 2:
        return list(points)

    end = len(points) - 1
    max_distance = 0.0
    index = 0
    for i in range(1, end):
        distance = perpendicular_distance(points[i], points[0], points[end])
        if distance > max_distance:
            index = i
            max_distance = distance

    if max_distance > tolerance:
        left = _douglas_peucker(points[: index + 1], tolerance)
        right = _douglas_peucker(points[index:], tolerance)
        return left[:-1] + right
    return [points[0], points[end]]
