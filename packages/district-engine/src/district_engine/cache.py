from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Union

from district_engine.models import AgencyType, DatasetKey, DatasetKind, DistrictBoundary, Facility

DatasetRecord = Union[DistrictBoundary, Facility]


@dataclass(frozen=True)
class DatasetSnapshot:
    key: DatasetKey
    records: tuple[DatasetRecord, ...]
    generation: int
    loaded_at: datetime
    source_ref: str = ""
    skipped_count: int = 0


@dataclass(frozen=True)
class CacheView:
    """One consistent, read-only view over every published dataset."""

    datasets: Mapping[DatasetKey, DatasetSnapshot]

    def snapshot(self, key: DatasetKey) -> DatasetSnapshot | None:
        return self.datasets.get(key)

    def districts(self, agency_type: AgencyType) -> tuple[DistrictBoundary, ...]:
        snapshot = self.datasets.get(DatasetKey(DatasetKind.DISTRICT, agency_type))
        if snapshot is None:
            return ()
        return snapshot.records  # type: ignore[return-value]

    def facilities(self, agency_type: AgencyType) -> tuple[Facility, ...]:
        snapshot = self.datasets.get(DatasetKey(DatasetKind.FACILITY, agency_type))
        if snapshot is None:
            return ()
        return snapshot.records  # type: ignore[return-value]


class BoundaryCache:
    def __init__(self) -> None:
        self._view = CacheView(datasets=MappingProxyType({}))
        self._generation = 0
        self._publish_lock = threading.Lock()

    def current(self) -> CacheView:
        return self._view

    def publish(
        self,
        key: DatasetKey,
        records: Sequence[DatasetRecord],
        source_ref: str = "",
        skipped_count: int = 0,
    ) -> DatasetSnapshot:
        with self._publish_lock:
            self._generation += 1
            snapshot = DatasetSnapshot(
                key=key,
                records=tuple(records),
                generation=self._generation,
                loaded_at=datetime.now(timezone.utc),
                source_ref=source_ref,
                skipped_count=skipped_count,
            )
            datasets = dict(self._view.datasets)
            datasets[key] = snapshot
            self._view = CacheView(datasets=MappingProxyType(datasets))
        return snapshot
