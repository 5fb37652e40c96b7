from __future__ import annotations

from dataclasses import dataclass

from district_engine.cache import CacheView
from district_engine.models import AgencyType, DistrictBoundary, MultiPolygon, Polygon, Ring
from district_engine.simplify import DEFAULT_SIMPLIFY_TOLERANCE, simplify


@dataclass(frozen=True)
class SimplifiedBoundary:
    station_id: str
    station_name: str
    region: str
    area: float
    # polygons -> rings (outer first) -> points
    polygons: tuple[tuple[Ring, ...], ...]


def simplified_boundaries(
    view: CacheView,
    agency_type: AgencyType,
    tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE,
    limit: int | None = None,
) -> list[SimplifiedBoundary]:
    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")
    if limit is not None and limit <= 0:
        raise ValueError("limit must be > 0")
    districts = view.districts(agency_type)
    if limit is not None:
        districts = districts[:limit]
    return [_simplify_district(district, tolerance) for district in districts]


def _simplify_district(district: DistrictBoundary, tolerance: float) -> SimplifiedBoundary:
    geometry = district.geometry
    polygons = geometry.polygons if isinstance(geometry, MultiPolygon) else (geometry,)
    return SimplifiedBoundary(
        station_id=district.station_id,
        station_name=district.station_name,
        region=district.region,
        area=district.area,
        polygons=tuple(_simplify_polygon(polygon, tolerance) for polygon in polygons),
    )


def _simplify_polygon(polygon: Polygon, tolerance: float) -> tuple[Ring, ...]:
    return tuple(simplify(ring, tolerance) for ring in (polygon.outer, *polygon.holes))
