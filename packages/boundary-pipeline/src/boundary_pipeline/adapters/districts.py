from __future__ import annotations

from typing import Any

from district_engine.models import DistrictBoundary

from boundary_pipeline.adapters.base import (
    _pick,
    _to_float,
    _to_optional_str,
    _to_str,
    properties_of,
    require_name,
    resolve_identifier,
)
from boundary_pipeline.core.geometry import parse_area_geometry
from boundary_pipeline.core.projection import CoordinateTransform


def parse_fire_district(
    feature: dict[str, Any],
    transform: CoordinateTransform | None = None,
) -> DistrictBoundary:
    properties = properties_of(feature)
    name = require_name(properties, "PYR_YPIRES")
    code = _to_optional_str(_pick(properties, "FIRST_NOM_"))
    geometry = parse_area_geometry(feature.get("geometry"), transform)
    return DistrictBoundary(
        station_id=resolve_identifier(feature, properties, ("STATION_ID", "station_id"), code, name),
        station_name=name,
        region=_to_str(_pick(properties, "FIRST_PER_")),
        # Area ships as either a number or a numeric string.
        area=_to_float(_pick(properties, "Area")),
        geometry=geometry,
        code=code,
    )
