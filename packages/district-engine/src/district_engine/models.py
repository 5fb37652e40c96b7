from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


Ring = tuple[GeoPoint, ...]


@dataclass(frozen=True)
class Polygon:
    outer: Ring
    holes: tuple[Ring, ...] = ()


@dataclass(frozen=True)
class MultiPolygon:
    polygons: tuple[Polygon, ...]


Geometry = Union[Polygon, MultiPolygon]


class AgencyType(str, Enum):
    FIRE = "Fire"
    POLICE = "Police"
    COAST_GUARD = "CoastGuard"
    HOSPITAL = "Hospital"

    @classmethod
    def parse(cls, value: AgencyType | str | None) -> AgencyType | None:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().replace("_", "").replace("-", "").replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class DatasetKind(str, Enum):
    DISTRICT = "district"
    FACILITY = "facility"


class AssignmentMethod(str, Enum):
    DISTRICT = "District"
    NEAREST = "Nearest"
    NONE = "None"


@dataclass(frozen=True)
class DistrictBoundary:
    station_id: str
    station_name: str
    region: str
    area: float
    geometry: Geometry
    code: str | None = None


@dataclass(frozen=True)
class Facility:
    facility_id: str
    name: str
    location: GeoPoint
    agency_type: AgencyType
    address: str = ""
    region: str = ""
    telephone: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DatasetKey:
    kind: DatasetKind
    agency_type: AgencyType


@dataclass(frozen=True)
class AssignmentResult:
    found: bool
    method: AssignmentMethod
    message: str
    station_id: str | None = None
    station_name: str | None = None
    region: str | None = None
    district_name: str | None = None
    distance_meters: float | None = None
