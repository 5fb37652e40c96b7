from __future__ import annotations

from district_engine.models import AgencyType, DatasetKey, DatasetKind

from boundary_pipeline.adapters.base import DatasetAdapter
from boundary_pipeline.adapters.districts import parse_fire_district
from boundary_pipeline.adapters.facilities import (
    parse_coast_guard_station,
    parse_fire_station,
    parse_hospital,
    parse_police_station,
)

_ADAPTERS: dict[str, DatasetAdapter] = {
    "fire_districts": DatasetAdapter(
        tag="fire_districts",
        key=DatasetKey(DatasetKind.DISTRICT, AgencyType.FIRE),
        parse_feature=parse_fire_district,
    ),
    "fire_stations": DatasetAdapter(
        tag="fire_stations",
        key=DatasetKey(DatasetKind.FACILITY, AgencyType.FIRE),
        parse_feature=parse_fire_station,
    ),
    "police_stations": DatasetAdapter(
        tag="police_stations",
        key=DatasetKey(DatasetKind.FACILITY, AgencyType.POLICE),
        parse_feature=parse_police_station,
    ),
    "coast_guard_stations": DatasetAdapter(
        tag="coast_guard_stations",
        key=DatasetKey(DatasetKind.FACILITY, AgencyType.COAST_GUARD),
        parse_feature=parse_coast_guard_station,
    ),
    "hospitals": DatasetAdapter(
        tag="hospitals",
        key=DatasetKey(DatasetKind.FACILITY, AgencyType.HOSPITAL),
        parse_feature=parse_hospital,
    ),
}


def supported_dataset_tags() -> list[str]:
    return sorted(_ADAPTERS.keys())


def get_dataset_adapter(tag: str) -> DatasetAdapter:
    adapter = _ADAPTERS.get(tag)
    if adapter is None:
        supported = ", ".join(supported_dataset_tags())
        raise ValueError(f"unsupported dataset '{tag}', supported: {supported}")
    return adapter
