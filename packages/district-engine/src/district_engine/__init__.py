"""District/station assignment engine core package."""

from district_engine.assignment import AssignmentOrchestrator
from district_engine.boundaries import SimplifiedBoundary, simplified_boundaries
from district_engine.cache import BoundaryCache, CacheView, DatasetSnapshot
from district_engine.containment import contains, find_containing_district, ring_contains
from district_engine.distance import haversine_distance_meters, is_valid_point
from district_engine.models import (
    AgencyType,
    AssignmentMethod,
    AssignmentResult,
    DatasetKey,
    DatasetKind,
    DistrictBoundary,
    Facility,
    GeoPoint,
    MultiPolygon,
    Polygon,
)
from district_engine.nearest import nearest
from district_engine.simplify import DEFAULT_SIMPLIFY_TOLERANCE, simplify

__all__ = [
    "AgencyType",
    "AssignmentMethod",
    "AssignmentOrchestrator",
    "AssignmentResult",
    "BoundaryCache",
    "CacheView",
    "DEFAULT_SIMPLIFY_TOLERANCE",
    "DatasetKey",
    "DatasetKind",
    "DatasetSnapshot",
    "DistrictBoundary",
    "Facility",
    "GeoPoint",
    "MultiPolygon",
    "Polygon",
    "SimplifiedBoundary",
    "contains",
    "find_containing_district",
    "haversine_distance_meters",
    "is_valid_point",
    "nearest",
    "ring_contains",
    "simplified_boundaries",
    "simplify",
]
