from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

import httpx
from devkit.config import AssignmentSettings
from district_engine.cache import BoundaryCache

from boundary_pipeline.adapters.factory import get_dataset_adapter
from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from boundary_pipeline.core.projection import build_coordinate_transform
from boundary_pipeline.jobs.loader import DatasetLoader, LoadReport
from boundary_pipeline.sources.factory import build_dataset_source

logger = logging.getLogger(__name__)


class DatasetRefresher:
    def __init__(self, loaders: Sequence[DatasetLoader]) -> None:
        self._loaders = list(loaders)

    @property
    def loaders(self) -> list[DatasetLoader]:
        return list(self._loaders)

    @classmethod
    def from_settings(
        cls,
        settings: AssignmentSettings,
        cache: BoundaryCache,
        metrics: InMemoryIngestionMetricsCollector | None = None,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> DatasetRefresher:
        loaders: list[DatasetLoader] = []
        for tag, dataset in settings.datasets():
            source = None
            if dataset.source_ref:
                source = build_dataset_source(
                    dataset.source_ref,
                    read_timeout_seconds=dataset.read_timeout_seconds,
                    client_factory=client_factory,
                )
            loaders.append(
                DatasetLoader(
                    adapter=get_dataset_adapter(tag),
                    cache=cache,
                    source=source,
                    enable_loading=dataset.enable_loading,
                    max_retry_attempts=dataset.max_retry_attempts,
                    retry_delay_seconds=dataset.retry_delay_seconds,
                    read_timeout_seconds=dataset.read_timeout_seconds,
                    transform=build_coordinate_transform(dataset.source_crs),
                    metrics=metrics,
                )
            )
        return cls(loaders)

    async def refresh_all(self) -> list[LoadReport]:
        reports = await asyncio.gather(*(loader.load() for loader in self._loaders))
        return list(reports)

    async def run_periodic(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.refresh_all()
            except Exception:
                logger.exception("dataset_refresh_crashed")
