from __future__ import annotations

from collections.abc import Iterable

from district_engine.distance import haversine_distance_meters
from district_engine.models import Facility, GeoPoint


def nearest(point: GeoPoint, facilities: Iterable[Facility]) -> tuple[Facility, float] | None:
    best: Facility | None = None
    best_distance = 0.0
    for facility in facilities:
        distance = haversine_distance_meters(point, facility.location)
        # Strict comparison keeps the first facility on ties.
        if best is None or distance < best_distance:
            best = facility
            best_distance = distance
    if best is None:
        return None
    return best, best_distance
