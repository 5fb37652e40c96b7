from district_engine.assignment import (
    INVALID_COORDINATES_MESSAGE,
    NO_DISTRICT_OR_STATION_MESSAGE,
    NO_STATION_DATA_MESSAGE,
    UNKNOWN_AGENCY_MESSAGE,
    AssignmentOrchestrator,
)
from district_engine.cache import BoundaryCache
from district_engine.distance import haversine_distance_meters
from district_engine.models import (
    AgencyType,
    AssignmentMethod,
    DatasetKey,
    DatasetKind,
    DistrictBoundary,
    Facility,
    GeoPoint,
    Polygon,
)

CENTRAL_ATHENS = Polygon(
    outer=(
        GeoPoint(lat=37.95, lng=23.70),
        GeoPoint(lat=37.95, lng=23.76),
        GeoPoint(lat=38.01, lng=23.76),
        GeoPoint(lat=38.01, lng=23.70),
        GeoPoint(lat=37.95, lng=23.70),
    )
)


def _cache_with(
    districts: list[DistrictBoundary] | None = None,
    facilities: list[Facility] | None = None,
    agency_type: AgencyType = AgencyType.FIRE,
) -> BoundaryCache:
    cache = BoundaryCache()
    if districts is not None:
        cache.publish(DatasetKey(DatasetKind.DISTRICT, agency_type), districts)
    if facilities is not None:
        cache.publish(DatasetKey(DatasetKind.FACILITY, agency_type), facilities)
    return cache


def _athens_district() -> DistrictBoundary:
    return DistrictBoundary(
        station_id="A",
        station_name="Athens Fire Station",
        region="Attica",
        area=42.0,
        geometry=CENTRAL_ATHENS,
    )


def test_district_match_assigns_containing_station() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    result = orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), AgencyType.FIRE)

    assert result.found is True
    assert result.method == AssignmentMethod.DISTRICT
    assert result.station_id == "A"
    assert result.station_name == "Athens Fire Station"
    assert result.region == "Attica"
    assert result.district_name == "Athens Fire Station"


def test_nearest_fallback_when_no_districts() -> None:
    facilities = [
        Facility(
            facility_id="P1",
            name="Omonia Police",
            location=GeoPoint(lat=37.99, lng=23.74),
            agency_type=AgencyType.POLICE,
            region="Attica",
        ),
        Facility(
            facility_id="P2",
            name="Patras Police",
            location=GeoPoint(lat=38.25, lng=21.73),
            agency_type=AgencyType.POLICE,
        ),
    ]
    orchestrator = AssignmentOrchestrator(_cache_with(facilities=facilities, agency_type=AgencyType.POLICE))

    result = orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), AgencyType.POLICE)

    assert result.found is True
    assert result.method == AssignmentMethod.NEAREST
    assert result.station_id == "P1"
    assert result.distance_meters is not None
    assert result.distance_meters > 0
    assert result.district_name is None


def test_nearest_fallback_when_point_is_outside_all_districts() -> None:
    facility = Facility(
        facility_id="F9",
        name="Thessaloniki Fire",
        location=GeoPoint(lat=40.64, lng=22.94),
        agency_type=AgencyType.FIRE,
    )
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()], facilities=[facility]))

    result = orchestrator.assign(GeoPoint(lat=40.6, lng=22.9), AgencyType.FIRE)

    assert result.method == AssignmentMethod.NEAREST
    assert result.station_id == "F9"


def test_empty_data_returns_negative_result() -> None:
    orchestrator = AssignmentOrchestrator(BoundaryCache())

    result = orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), AgencyType.COAST_GUARD)

    assert result.found is False
    assert result.method == AssignmentMethod.NONE
    assert result.message == NO_STATION_DATA_MESSAGE
    assert result.station_id is None


def test_districts_without_match_or_facilities_explain_both() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    result = orchestrator.assign(GeoPoint(lat=40.6, lng=22.9), AgencyType.FIRE)

    assert result.found is False
    assert result.message == NO_DISTRICT_OR_STATION_MESSAGE


def test_invalid_coordinates_are_rejected() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    for point in (
        GeoPoint(lat=91.0, lng=0.0),
        GeoPoint(lat=0.0, lng=-181.0),
        GeoPoint(lat=float("inf"), lng=0.0),
        GeoPoint(lat=True, lng=0.0),
    ):
        result = orchestrator.assign(point, AgencyType.FIRE)
        assert result.found is False
        assert result.message == INVALID_COORDINATES_MESSAGE


def test_unknown_agency_is_rejected() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    result = orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), "Ambulance")

    assert result.found is False
    assert result.message == UNKNOWN_AGENCY_MESSAGE


def test_agency_names_are_parsed_leniently() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    for agency in ("Fire", "fire", " FIRE "):
        assert orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), agency).station_id == "A"
    assert AgencyType.parse("coast_guard") is AgencyType.COAST_GUARD
    assert AgencyType.parse("Coast Guard") is AgencyType.COAST_GUARD


def test_agency_datasets_are_isolated() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))

    result = orchestrator.assign(GeoPoint(lat=37.9838, lng=23.7275), AgencyType.POLICE)

    assert result.found is False
    assert result.message == NO_STATION_DATA_MESSAGE


def test_assignment_is_deterministic() -> None:
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()]))
    point = GeoPoint(lat=37.9838, lng=23.7275)

    results = {orchestrator.assign(point, AgencyType.FIRE) for _ in range(10)}

    assert len(results) == 1


def test_point_outside_districts_picks_closest_of_three_fire_stations() -> None:
    stations = [
        Facility(facility_id="F1", name="Patras", location=GeoPoint(lat=38.2466, lng=21.7346), agency_type=AgencyType.FIRE),
        Facility(facility_id="F2", name="Lamia", location=GeoPoint(lat=38.9000, lng=22.4333), agency_type=AgencyType.FIRE),
        Facility(facility_id="F3", name="Volos", location=GeoPoint(lat=39.3622, lng=22.9420), agency_type=AgencyType.FIRE),
    ]
    point = GeoPoint(lat=39.0, lng=22.5)
    orchestrator = AssignmentOrchestrator(_cache_with(districts=[_athens_district()], facilities=stations))

    result = orchestrator.assign(point, AgencyType.FIRE)

    assert result.method == AssignmentMethod.NEAREST
    assert result.station_id == "F2"
    assert abs(result.distance_meters - haversine_distance_meters(point, stations[1].location)) < 1.0


def test_hospital_without_polygons_is_always_nearest() -> None:
    hospital = Facility(
        facility_id="H1",
        name="Evangelismos",
        location=GeoPoint(lat=37.976, lng=23.747),
        agency_type=AgencyType.HOSPITAL,
    )
    orchestrator = AssignmentOrchestrator(_cache_with(facilities=[hospital], agency_type=AgencyType.HOSPITAL))

    for lat, lng in ((37.9838, 23.7275), (40.64, 22.94), (35.34, 25.13)):
        assert orchestrator.assign(GeoPoint(lat=lat, lng=lng), AgencyType.HOSPITAL).method == AssignmentMethod.NEAREST


def test_nearest_station_on_the_opposite_side_of_the_globe() -> None:
    hospital = Facility(
        facility_id="H2",
        name="Polar Station Clinic",
        location=GeoPoint(lat=74.6, lng=0.0),
        agency_type=AgencyType.HOSPITAL,
    )
    orchestrator = AssignmentOrchestrator(_cache_with(facilities=[hospital], agency_type=AgencyType.HOSPITAL))

    result = orchestrator.assign(GeoPoint(lat=-74.6, lng=-180.0), AgencyType.HOSPITAL)

    assert result.found is True
    assert result.method == AssignmentMethod.NEAREST
    assert result.station_id == "H2"
    assert result.distance_meters > 20_000_000
