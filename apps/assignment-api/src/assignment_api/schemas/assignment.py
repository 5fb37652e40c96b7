from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StationAssignmentRequest(CamelModel):
    latitude: float
    longitude: float
    agency_type: str = Field(min_length=1)


class StationAssignmentResult(CamelModel):
    found: bool
    assignment_method: str
    message: str
    station_id: str | None = None
    station_name: str | None = None
    region: str | None = None
    district_name: str | None = None
    # meters; 0 for district matches
    distance: float | None = None
