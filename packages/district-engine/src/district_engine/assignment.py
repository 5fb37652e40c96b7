from __future__ import annotations

from district_engine.cache import BoundaryCache
from district_engine.containment import find_containing_district
from district_engine.distance import is_valid_point
from district_engine.models import AgencyType, AssignmentMethod, AssignmentResult, GeoPoint
from district_engine.nearest import nearest

INVALID_COORDINATES_MESSAGE = "invalid coordinates"
UNKNOWN_AGENCY_MESSAGE = "unknown agency type"
NO_STATION_DATA_MESSAGE = "no station data available"
NO_DISTRICT_OR_STATION_MESSAGE = "no responsible district found and no station data available"


class AssignmentOrchestrator:
    """Suggests the responsible station for a location.

    Reads one cache view per call and never writes, so identical calls against
    an unchanged cache return identical results.
    """

    def __init__(self, cache: BoundaryCache) -> None:
        self._cache = cache

    def assign(self, point: GeoPoint, agency_type: AgencyType | str) -> AssignmentResult:
        if not is_valid_point(point):
            return _negative(INVALID_COORDINATES_MESSAGE)
        agency = AgencyType.parse(agency_type)
        if agency is None:
            return _negative(UNKNOWN_AGENCY_MESSAGE)

        view = self._cache.current()
        districts = view.districts(agency)
        if districts:
            district = find_containing_district(point, districts)
            if district is not None:
                return AssignmentResult(
                    found=True,
                    method=AssignmentMethod.DISTRICT,
                    message=f"Incident should be handled by {district.station_name}",
                    station_id=district.station_id,
                    station_name=district.station_name,
                    region=district.region,
                    district_name=district.station_name,
                    distance_meters=0.0,
                )

        match = nearest(point, view.facilities(agency))
        if match is None:
            message = NO_DISTRICT_OR_STATION_MESSAGE if districts else NO_STATION_DATA_MESSAGE
            return _negative(message)

        facility, distance_meters = match
        return AssignmentResult(
            found=True,
            method=AssignmentMethod.NEAREST,
            message=f"Nearest station {facility.name} at {distance_meters:.0f} m",
            station_id=facility.facility_id,
            station_name=facility.name,
            region=facility.region,
            distance_meters=distance_meters,
        )


def _negative(message: str) -> AssignmentResult:
    return AssignmentResult(found=False, method=AssignmentMethod.NONE, message=message)
