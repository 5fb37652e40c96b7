"""Per-schema dataset adapters."""

from boundary_pipeline.adapters.base import DatasetAdapter
from boundary_pipeline.adapters.districts import parse_fire_district
from boundary_pipeline.adapters.facilities import (
    parse_coast_guard_station,
    parse_fire_station,
    parse_hospital,
    parse_police_station,
)
from boundary_pipeline.adapters.factory import get_dataset_adapter, supported_dataset_tags

__all__ = [
    "DatasetAdapter",
    "get_dataset_adapter",
    "parse_coast_guard_station",
    "parse_fire_district",
    "parse_fire_station",
    "parse_hospital",
    "parse_police_station",
    "supported_dataset_tags",
]
