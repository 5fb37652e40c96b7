import pytest
from pydantic import ValidationError

from devkit.config import AssignmentSettings, load_settings


def test_load_settings_reads_nested_dataset_env(monkeypatch) -> None:
    monkeypatch.setenv("FIRE_DISTRICTS__SOURCE_REF", "/data/fire_districts.geojson")
    monkeypatch.setenv("FIRE_DISTRICTS__ENABLE_LOADING", "true")
    monkeypatch.setenv("FIRE_DISTRICTS__SOURCE_CRS", "EPSG:2100")
    monkeypatch.setenv("HOSPITALS__MAX_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("HOSPITALS__RETRY_DELAY_MS", "250")
    settings = load_settings("assignment-api")

    assert settings.SERVICE_NAME == "assignment-api"
    assert settings.FIRE_DISTRICTS.source_ref == "/data/fire_districts.geojson"
    assert settings.FIRE_DISTRICTS.enable_loading is True
    assert settings.FIRE_DISTRICTS.source_crs == "EPSG:2100"
    assert settings.HOSPITALS.max_retry_attempts == 5
    assert settings.HOSPITALS.retry_delay_seconds == 0.25


def test_dataset_defaults_match_loader_contract() -> None:
    settings = AssignmentSettings()
    dataset = settings.POLICE_STATIONS

    assert dataset.enable_loading is False
    assert dataset.max_retry_attempts == 3
    assert dataset.retry_delay_ms == 1000
    assert dataset.source_crs == "EPSG:4326"
    assert settings.DATASET_REFRESH_INTERVAL_SECONDS is None
    assert settings.BOUNDARY_SIMPLIFY_TOLERANCE == 0.0005


def test_zero_retry_attempts_are_accepted(monkeypatch) -> None:
    monkeypatch.setenv("POLICE_STATIONS__MAX_RETRY_ATTEMPTS", "0")
    assert load_settings().POLICE_STATIONS.max_retry_attempts == 0


def test_negative_retry_count_is_fatal(monkeypatch) -> None:
    monkeypatch.setenv("POLICE_STATIONS__MAX_RETRY_ATTEMPTS", "-1")
    with pytest.raises(ValidationError):
        load_settings()


def test_enabled_dataset_requires_source(monkeypatch) -> None:
    monkeypatch.setenv("HOSPITALS__ENABLE_LOADING", "true")
    with pytest.raises(ValidationError):
        load_settings()


def test_datasets_lists_every_dataset_tag() -> None:
    tags = [tag for tag, _ in AssignmentSettings().datasets()]
    assert tags == ["fire_districts", "fire_stations", "police_stations", "coast_guard_stations", "hospitals"]
