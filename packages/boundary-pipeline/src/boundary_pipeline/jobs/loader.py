from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from time import perf_counter

from district_engine.cache import BoundaryCache

from boundary_pipeline.adapters.base import DatasetAdapter
from boundary_pipeline.core.exceptions import DatasetNormalizationError, DatasetRequestError, DatasetTemporaryError
from boundary_pipeline.core.metrics import InMemoryIngestionMetricsCollector
from boundary_pipeline.core.normalize import decode_feature_collection, normalize_feature_collection
from boundary_pipeline.core.projection import CoordinateTransform
from boundary_pipeline.core.retry import with_fixed_delay
from boundary_pipeline.sources.base import DatasetSource

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    LOADED = "loaded"
    DISABLED = "disabled"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class LoadReport:
    dataset: str
    status: LoadStatus
    record_count: int = 0
    skipped_count: int = 0
    attempts: int = 0
    generation: int | None = None
    loaded_at: datetime | None = None
    duration_seconds: float = 0.0
    error: str | None = None


class DatasetLoader:
    """Loads one dataset into the cache.

    A failed or disabled load never touches the published snapshot. Only a
    fully normalized document with at least one valid record is published.
    """

    def __init__(
        self,
        adapter: DatasetAdapter,
        cache: BoundaryCache,
        source: DatasetSource | None = None,
        enable_loading: bool = False,
        max_retry_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
        read_timeout_seconds: float = 10.0,
        transform: CoordinateTransform | None = None,
        metrics: InMemoryIngestionMetricsCollector | None = None,
    ) -> None:
        if max_retry_attempts < 0:
            raise ValueError("max_retry_attempts must be >= 0")
        if retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")
        if enable_loading and source is None:
            raise ValueError(f"dataset '{adapter.tag}' is enabled but has no source")
        self.adapter = adapter
        self._cache = cache
        self._source = source
        self._enabled = enable_loading
        self._attempts = max(1, max_retry_attempts)
        self._retry_delay_seconds = retry_delay_seconds
        self._read_timeout_seconds = read_timeout_seconds
        self._transform = transform
        self._metrics = metrics
        self._in_progress = False

    @property
    def dataset(self) -> str:
        return self.adapter.tag

    @property
    def source_ref(self) -> str:
        return self._source.source_ref if self._source else ""

    async def load(self) -> LoadReport:
        if not self._enabled or self._source is None:
            logger.info("dataset_load_disabled", extra={"dataset": self.dataset})
            return self._finish(LoadReport(dataset=self.dataset, status=LoadStatus.DISABLED))
        if self._in_progress:
            logger.info("dataset_load_skipped", extra={"dataset": self.dataset, "reason": "load_in_progress"})
            return self._finish(LoadReport(dataset=self.dataset, status=LoadStatus.SKIPPED))

        self._in_progress = True
        try:
            return await self._load(self._source)
        finally:
            self._in_progress = False

    async def _load(self, source: DatasetSource) -> LoadReport:
        logger.info("dataset_load_started", extra={"dataset": self.dataset, "source_ref": source.source_ref})
        started = perf_counter()
        attempts = 0

        async def _read_once() -> bytes:
            nonlocal attempts
            attempts += 1
            try:
                return await asyncio.wait_for(source.read(), timeout=self._read_timeout_seconds)
            except asyncio.TimeoutError as exc:
                raise DatasetTemporaryError(
                    f"dataset read timed out after {self._read_timeout_seconds}s"
                ) from exc

        try:
            raw = await with_fixed_delay(
                _read_once,
                attempts=self._attempts,
                delay_seconds=self._retry_delay_seconds,
                on_retry=self._on_retry,
                should_retry=lambda exc: isinstance(exc, DatasetTemporaryError),
            )
            features = decode_feature_collection(raw)
            result = normalize_feature_collection(features, self.adapter, self._transform)
            if not result.records:
                raise DatasetNormalizationError(
                    f"dataset yielded no valid records ({result.skipped_count} of {result.total} skipped)"
                )
        except (DatasetRequestError, DatasetNormalizationError) as exc:
            logger.warning(
                "dataset_load_failed",
                extra={"dataset": self.dataset, "attempts": attempts, "error": str(exc)},
            )
            return self._failed(started, attempts, exc)
        except Exception as exc:
            logger.exception(
                "dataset_load_failed",
                extra={"dataset": self.dataset, "attempts": attempts, "error": repr(exc)},
            )
            return self._failed(started, attempts, exc)

        snapshot = self._cache.publish(
            self.adapter.key,
            result.records,
            source_ref=source.source_ref,
            skipped_count=result.skipped_count,
        )
        duration = perf_counter() - started
        if self._metrics:
            self._metrics.add_records(self.dataset, "accepted", len(result.records))
            self._metrics.add_records(self.dataset, "skipped", result.skipped_count)
            self._metrics.observe_load_duration(self.dataset, duration)
            self._metrics.set_snapshot(self.dataset, snapshot.generation, len(snapshot.records))
        logger.info(
            "dataset_load_completed",
            extra={
                "dataset": self.dataset,
                "record_count": len(result.records),
                "skipped_count": result.skipped_count,
                "generation": snapshot.generation,
                "attempts": attempts,
            },
        )
        return self._finish(
            LoadReport(
                dataset=self.dataset,
                status=LoadStatus.LOADED,
                record_count=len(result.records),
                skipped_count=result.skipped_count,
                attempts=attempts,
                generation=snapshot.generation,
                loaded_at=snapshot.loaded_at,
                duration_seconds=duration,
            )
        )

    def _on_retry(self, attempt: int, delay_seconds: float, exc: Exception) -> None:
        logger.warning(
            "dataset_read_retry",
            extra={
                "dataset": self.dataset,
                "attempt": attempt,
                "delay_seconds": delay_seconds,
                "error": str(exc),
            },
        )
        if self._metrics:
            self._metrics.increment_read_retry(self.dataset)

    def _finish(self, report: LoadReport) -> LoadReport:
        if self._metrics:
            self._metrics.increment_load(self.dataset, report.status.value)
        return report

    def _failed(self, started: float, attempts: int, exc: Exception) -> LoadReport:
        duration = perf_counter() - started
        if self._metrics:
            self._metrics.observe_load_duration(self.dataset, duration)
        return self._finish(
            LoadReport(
                dataset=self.dataset,
                status=LoadStatus.FAILED,
                attempts=attempts,
                duration_seconds=duration,
                error=str(exc) or type(exc).__name__,
            )
        )
