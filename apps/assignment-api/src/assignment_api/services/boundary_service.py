from __future__ import annotations

from typing import Any

from boundary_pipeline.jobs.refresh import DatasetRefresher
from district_engine.boundaries import SimplifiedBoundary, simplified_boundaries
from district_engine.cache import BoundaryCache
from district_engine.models import AgencyType, Ring

from assignment_api.schemas.boundaries import (
    BoundaryCollection,
    BoundaryFeature,
    BoundaryProperties,
    DatasetInfo,
    DatasetLoadResult,
)


class BoundaryService:
    def __init__(
        self,
        cache: BoundaryCache,
        refresher: DatasetRefresher,
        default_tolerance: float = 0.0005,
    ) -> None:
        self._cache = cache
        self._refresher = refresher
        self._default_tolerance = default_tolerance

    async def boundaries(
        self,
        agency_type: str,
        simplify: bool = True,
        tolerance: float | None = None,
        limit: int | None = None,
    ) -> BoundaryCollection:
        agency = AgencyType.parse(agency_type)
        if agency is None:
            supported = ", ".join(member.value for member in AgencyType)
            raise ValueError(f"unknown agency type '{agency_type}', supported: {supported}")
        effective_tolerance = (self._default_tolerance if tolerance is None else tolerance) if simplify else 0.0
        items = simplified_boundaries(self._cache.current(), agency, tolerance=effective_tolerance, limit=limit)
        return BoundaryCollection(
            agency_type=agency.value,
            simplified=simplify,
            tolerance=effective_tolerance,
            features=[_to_feature(item) for item in items],
        )

    async def datasets(self) -> list[DatasetInfo]:
        view = self._cache.current()
        infos: list[DatasetInfo] = []
        for loader in self._refresher.loaders:
            key = loader.adapter.key
            snapshot = view.snapshot(key)
            info = DatasetInfo(
                dataset=loader.dataset,
                agency_type=key.agency_type.value,
                kind=key.kind.value,
                loaded=snapshot is not None,
                source_ref=loader.source_ref,
            )
            if snapshot is not None:
                info = info.model_copy(
                    update={
                        "generation": snapshot.generation,
                        "record_count": len(snapshot.records),
                        "skipped_count": snapshot.skipped_count,
                        "loaded_at": snapshot.loaded_at,
                        "source_ref": snapshot.source_ref,
                    }
                )
            infos.append(info)
        return infos

    async def refresh(self) -> list[DatasetLoadResult]:
        reports = await self._refresher.refresh_all()
        return [
            DatasetLoadResult(
                dataset=report.dataset,
                status=report.status.value,
                record_count=report.record_count,
                skipped_count=report.skipped_count,
                attempts=report.attempts,
                generation=report.generation,
                duration_seconds=round(report.duration_seconds, 4),
                error=report.error,
            )
            for report in reports
        ]


def _ring_coordinates(ring: Ring) -> list[list[float]]:
    return [[point.lng, point.lat] for point in ring]


def _to_feature(item: SimplifiedBoundary) -> BoundaryFeature:
    polygons = [[_ring_coordinates(ring) for ring in polygon] for polygon in item.polygons]
    geometry: dict[str, Any]
    if len(polygons) == 1:
        geometry = {"type": "Polygon", "coordinates": polygons[0]}
    else:
        geometry = {"type": "MultiPolygon", "coordinates": polygons}
    return BoundaryFeature(
        properties=BoundaryProperties(
            station_id=item.station_id,
            station_name=item.station_name,
            region=item.region,
            area=item.area,
        ),
        geometry=geometry,
    )
