from __future__ import annotations

from typing import Any

from district_engine.models import AgencyType, Facility

from boundary_pipeline.adapters.base import (
    _pick,
    _to_optional_str,
    _to_str,
    properties_of,
    require_name,
    resolve_identifier,
)
from boundary_pipeline.core.geometry import parse_point_geometry
from boundary_pipeline.core.projection import CoordinateTransform


def parse_fire_station(feature: dict[str, Any], transform: CoordinateTransform | None = None) -> Facility:
    return _parse_city_facility(feature, transform, AgencyType.FIRE)


def parse_hospital(feature: dict[str, Any], transform: CoordinateTransform | None = None) -> Facility:
    return _parse_city_facility(feature, transform, AgencyType.HOSPITAL)


def parse_police_station(feature: dict[str, Any], transform: CoordinateTransform | None = None) -> Facility:
    properties = properties_of(feature)
    name = require_name(properties, "name", "Name")
    location = parse_point_geometry(feature.get("geometry"), transform)
    return Facility(
        facility_id=resolve_identifier(feature, properties, ("id", "gid"), name),
        name=name,
        location=location,
        agency_type=AgencyType.POLICE,
        address=_to_str(_pick(properties, "address")),
        region=_to_str(_pick(properties, "sinoikia")),
    )


def parse_coast_guard_station(feature: dict[str, Any], transform: CoordinateTransform | None = None) -> Facility:
    properties = properties_of(feature)
    name = require_name(properties, "name", "name_gr")
    location = parse_point_geometry(feature.get("geometry"), transform)
    return Facility(
        facility_id=resolve_identifier(feature, properties, ("id",), name),
        name=name,
        location=location,
        agency_type=AgencyType.COAST_GUARD,
        address=_to_str(_pick(properties, "address")),
        region=_to_str(_pick(properties, "area")),
        telephone=_to_optional_str(_pick(properties, "telephone")),
        email=_to_optional_str(_pick(properties, "email")),
    )


def _parse_city_facility(
    feature: dict[str, Any],
    transform: CoordinateTransform | None,
    agency_type: AgencyType,
) -> Facility:
    properties = properties_of(feature)
    name = require_name(properties, "name", "Name")
    location = parse_point_geometry(feature.get("geometry"), transform)
    return Facility(
        facility_id=resolve_identifier(feature, properties, ("id", "station_id"), name),
        name=name,
        location=location,
        agency_type=agency_type,
        address=_to_str(_pick(properties, "address", "Address")),
        region=_to_str(_pick(properties, "region", "city")),
    )
