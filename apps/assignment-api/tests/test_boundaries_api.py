import json

from fastapi.testclient import TestClient

from assignment_api.app import create_app
from assignment_api.dependencies import get_boundary_service
from assignment_api.services.boundary_service import BoundaryService
from boundary_pipeline.jobs.refresh import DatasetRefresher
from devkit.config import AssignmentSettings
from district_engine.cache import BoundaryCache
from district_engine.models import (
    AgencyType,
    DatasetKey,
    DatasetKind,
    DistrictBoundary,
    GeoPoint,
    MultiPolygon,
    Polygon,
)


def _square(lat: float, lng: float) -> tuple[GeoPoint, ...]:
    return (
        GeoPoint(lat=lat, lng=lng),
        GeoPoint(lat=lat, lng=lng + 0.005),
        GeoPoint(lat=lat, lng=lng + 0.01),
        GeoPoint(lat=lat + 0.01, lng=lng + 0.01),
        GeoPoint(lat=lat + 0.01, lng=lng),
        GeoPoint(lat=lat, lng=lng),
    )


def _client(tmp_path, settings: AssignmentSettings | None = None) -> tuple[TestClient, BoundaryCache]:
    cache = BoundaryCache()
    cache.publish(
        DatasetKey(DatasetKind.DISTRICT, AgencyType.FIRE),
        [
            DistrictBoundary(
                station_id="A",
                station_name="Athens",
                region="Attica",
                area=1.0,
                geometry=Polygon(outer=_square(37.95, 23.70)),
            ),
            DistrictBoundary(
                station_id="B",
                station_name="Islands",
                region="Aegean",
                area=2.0,
                geometry=MultiPolygon(polygons=(Polygon(outer=_square(37.0, 25.0)), Polygon(outer=_square(36.5, 25.4)))),
            ),
        ],
        source_ref="fire_districts.geojson",
    )
    refresher = DatasetRefresher.from_settings(settings or AssignmentSettings(), cache)
    service = BoundaryService(cache, refresher, default_tolerance=0.0005)
    app = create_app()
    app.dependency_overrides[get_boundary_service] = lambda: service
    return TestClient(app), cache


def test_boundaries_are_returned_as_simplified_geojson(tmp_path) -> None:
    client, _ = _client(tmp_path)

    response = client.get("/v1/boundaries/Fire")
    body = response.json()

    assert response.status_code == 200
    assert body["meta"]["count"] == 2
    collection = body["data"]
    assert collection["type"] == "FeatureCollection"
    assert collection["agencyType"] == "Fire"
    athens, islands = collection["features"]
    assert athens["properties"] == {"stationId": "A", "stationName": "Athens", "region": "Attica", "area": 1.0}
    assert athens["geometry"]["type"] == "Polygon"
    assert [23.705, 37.95] not in athens["geometry"]["coordinates"][0]
    assert islands["geometry"]["type"] == "MultiPolygon"
    assert len(islands["geometry"]["coordinates"]) == 2


def test_boundaries_without_simplification_keep_every_point(tmp_path) -> None:
    client, _ = _client(tmp_path)

    collection = client.get("/v1/boundaries/fire?simplify=false&limit=1").json()["data"]

    assert collection["simplified"] is False
    assert len(collection["features"]) == 1
    assert len(collection["features"][0]["geometry"]["coordinates"][0]) == 6


def test_boundaries_for_agency_without_districts_are_empty(tmp_path) -> None:
    client, _ = _client(tmp_path)

    body = client.get("/v1/boundaries/Hospital").json()

    assert body["data"]["features"] == []


def test_boundaries_reject_unknown_agency_and_bad_query(tmp_path) -> None:
    client, _ = _client(tmp_path)

    unknown = client.get("/v1/boundaries/Ambulance")
    negative = client.get("/v1/boundaries/Fire?tolerance=-1")
    zero_limit = client.get("/v1/boundaries/Fire?limit=0")

    assert unknown.status_code == 422
    assert unknown.json()["error"]["code"] == "VALIDATION_ERROR"
    assert negative.status_code == 422
    assert zero_limit.status_code == 422


def test_datasets_endpoint_lists_snapshot_info(tmp_path) -> None:
    client, _ = _client(tmp_path)

    items = {item["dataset"]: item for item in client.get("/v1/datasets").json()["data"]}

    assert items["fire_districts"]["loaded"] is True
    assert items["fire_districts"]["recordCount"] == 2
    assert items["fire_districts"]["sourceRef"] == "fire_districts.geojson"
    assert items["hospitals"]["loaded"] is False


def test_refresh_endpoint_loads_configured_datasets(tmp_path) -> None:
    path = tmp_path / "hospitals.geojson"
    path.write_text(
        json.dumps(
            {
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "properties": {"name": "Evangelismos", "city": "Athens"},
                        "geometry": {"type": "Point", "coordinates": [23.747, 37.976]},
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    settings = AssignmentSettings(HOSPITALS={"source_ref": str(path), "enable_loading": True})
    client, cache = _client(tmp_path, settings)

    body = client.post("/v1/datasets/refresh").json()

    statuses = {item["dataset"]: item["status"] for item in body["data"]}
    assert statuses["hospitals"] == "loaded"
    assert statuses["fire_districts"] == "disabled"
    assert body["meta"]["failed"] == 0
    assert len(cache.current().facilities(AgencyType.HOSPITAL)) == 1
    assert len(cache.current().districts(AgencyType.FIRE)) == 2
