from __future__ import annotations

from collections.abc import Callable

import httpx

from boundary_pipeline.sources.base import DatasetSource
from boundary_pipeline.sources.file import FileDatasetSource
from boundary_pipeline.sources.http import HttpDatasetSource

_HTTP_SCHEMES = ("http://", "https://")


def build_dataset_source(
    source_ref: str,
    read_timeout_seconds: float = 10.0,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
) -> DatasetSource:
    if not source_ref:
        raise ValueError("dataset source_ref is empty")
    if source_ref.lower().startswith(_HTTP_SCHEMES):
        return HttpDatasetSource(
            url=source_ref,
            read_timeout_seconds=read_timeout_seconds,
            client_factory=client_factory,
        )
    return FileDatasetSource(path=source_ref)
