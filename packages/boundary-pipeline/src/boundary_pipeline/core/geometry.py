"""GeoJSON geometry parsing.

The geometry ``type`` is read first and selects the coordinate layout; nesting
depth is never used to guess it. Positions are ``[lng, lat]`` (optionally with
extra ordinates, which are ignored).
"""

from __future__ import annotations

import math
from typing import Any

from district_engine.distance import is_valid_point
from district_engine.models import Geometry, GeoPoint, MultiPolygon, Polygon, Ring

from boundary_pipeline.core.exceptions import FeatureParseError
from boundary_pipeline.core.projection import CoordinateTransform

MIN_RING_POSITIONS = 3


def parse_area_geometry(raw: Any, transform: CoordinateTransform | None = None) -> Geometry:
    geometry_type, coordinates = _split(raw)
    if geometry_type == "Polygon":
        return _parse_polygon(coordinates, transform)
    if geometry_type == "MultiPolygon":
        if not isinstance(coordinates, list) or not coordinates:
            raise FeatureParseError("multipolygon has no polygons")
        return MultiPolygon(polygons=tuple(_parse_polygon(item, transform) for item in coordinates))
    raise FeatureParseError(f"unsupported area geometry type: {geometry_type!r}")


def parse_point_geometry(raw: Any, transform: CoordinateTransform | None = None) -> GeoPoint:
    geometry_type, coordinates = _split(raw)
    if geometry_type == "Point":
        return parse_position(coordinates, transform)
    if geometry_type == "MultiPoint":
        if not isinstance(coordinates, list) or not coordinates:
            raise FeatureParseError("multipoint has no points")
        return parse_position(coordinates[0], transform)
    raise FeatureParseError(f"unsupported point geometry type: {geometry_type!r}")


def parse_position(raw: Any, transform: CoordinateTransform | None = None) -> GeoPoint:
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        raise FeatureParseError("position must be [lng, lat]")
    x, y = _to_coordinate(raw[0]), _to_coordinate(raw[1])
    if transform is not None:
        x, y = transform(x, y)
    point = GeoPoint(lat=y, lng=x)
    if not is_valid_point(point):
        raise FeatureParseError(f"position out of range: lng={x}, lat={y}")
    return point


def _split(raw: Any) -> tuple[Any, Any]:
    if not isinstance(raw, dict):
        raise FeatureParseError("geometry is not an object")
    return raw.get("type"), raw.get("coordinates")


def _parse_polygon(raw: Any, transform: CoordinateTransform | None) -> Polygon:
    if not isinstance(raw, list) or not raw:
        raise FeatureParseError("polygon has no rings")
    rings = [_parse_ring(item, transform) for item in raw]
    return Polygon(outer=rings[0], holes=tuple(rings[1:]))


def _parse_ring(raw: Any, transform: CoordinateTransform | None) -> Ring:
    if not isinstance(raw, list) or len(raw) < MIN_RING_POSITIONS:
        raise FeatureParseError(f"ring needs at least {MIN_RING_POSITIONS} positions")
    return tuple(parse_position(item, transform) for item in raw)


def _to_coordinate(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FeatureParseError(f"coordinate is not a number: {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise FeatureParseError(f"coordinate is not finite: {value!r}")
    return number
