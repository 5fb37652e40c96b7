from __future__ import annotations

from datetime import datetime
from typing import Any

from assignment_api.schemas.assignment import CamelModel


class BoundaryProperties(CamelModel):
    station_id: str
    station_name: str
    region: str
    area: float


class BoundaryFeature(CamelModel):
    type: str = "Feature"
    properties: BoundaryProperties
    geometry: dict[str, Any]


class BoundaryCollection(CamelModel):
    type: str = "FeatureCollection"
    agency_type: str
    simplified: bool
    tolerance: float
    features: list[BoundaryFeature]


class DatasetInfo(CamelModel):
    dataset: str
    agency_type: str
    kind: str
    loaded: bool
    generation: int | None = None
    record_count: int = 0
    skipped_count: int = 0
    loaded_at: datetime | None = None
    source_ref: str = ""


class DatasetLoadResult(CamelModel):
    dataset: str
    status: str
    record_count: int = 0
    skipped_count: int = 0
    attempts: int = 0
    generation: int | None = None
    duration_seconds: float = 0.0
    error: str | None = None
