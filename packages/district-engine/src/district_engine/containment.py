"""Point-in-polygon tests over normalized district geometry.

Crossings are counted with a half-open rule: an edge counts when exactly one
of its endpoints lies strictly above the point's latitude and the crossing
lies strictly east of the point. A point on a boundary therefore always gets
the same answer for the same geometry (south/west edges inside, north/east
edges outside), and an explicitly closed ring behaves exactly like its open
form because the closing edge has zero height.
"""

from __future__ import annotations

from collections.abc import Iterable

from district_engine.models import DistrictBoundary, Geometry, GeoPoint, MultiPolygon, Polygon, Ring


def is_degenerate_ring(ring: Ring) -> bool:
    return len(set(ring)) < 3


def ring_contains(point: GeoPoint, ring: Ring) -> bool:
    if is_degenerate_ring(ring):
        return False
    inside = False
    count = len(ring)
    j = count - 1
    for i in range(count):
        lat_i, lng_i = ring[i].lat, ring[i].lng
        lat_j, lng_j = ring[j].lat, ring[j].lng
        if (lat_i > point.lat) != (lat_j > point.lat):
            crossing_lng = (lng_j - lng_i) * (point.lat - lat_i) / (lat_j - lat_i) + lng_i
            if point.lng < crossing_lng:
                inside = not inside
        j = i
    return inside


def polygon_contains(point: GeoPoint, polygon: Polygon) -> bool:
    if not ring_contains(point, polygon.outer):
        return False
    return not any(ring_contains(point, hole) for hole in polygon.holes)


def contains(point: GeoPoint, geometry: Geometry) -> bool:
    if isinstance(geometry, Polygon):
        return polygon_contains(point, geometry)
    if isinstance(geometry, MultiPolygon):
        for polygon in geometry.polygons:
            if polygon_contains(point, polygon):
                return True
        return False
    return False


def find_containing_district(
    point: GeoPoint,
    districts: Iterable[DistrictBoundary],
) -> DistrictBoundary | None:
    # Input order decides overlaps; do not reorder.
    for district in districts:
        if contains(point, district.geometry):
            return district
    return None
