from __future__ import annotations

from collections.abc import Callable

import httpx

from boundary_pipeline.core.exceptions import DatasetRequestError, DatasetTemporaryError
from boundary_pipeline.sources.base import DatasetSource


class HttpDatasetSource(DatasetSource):
    def __init__(
        self,
        url: str,
        connect_timeout_seconds: float = 2.0,
        read_timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self.source_ref = url
        self._url = url
        self._timeout = httpx.Timeout(
            connect=connect_timeout_seconds,
            read=read_timeout_seconds,
            write=read_timeout_seconds,
            pool=connect_timeout_seconds,
        )
        self._client_factory = client_factory

    async def read(self) -> bytes:
        factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout, follow_redirects=True))
        async with factory() as client:
            try:
                response = await client.get(self._url)
            except httpx.TimeoutException as exc:
                raise DatasetTemporaryError(f"dataset request timeout: {self._url}") from exc
            except httpx.TransportError as exc:
                raise DatasetTemporaryError(f"dataset transport error: {self._url}: {exc}") from exc
            except httpx.HTTPError as exc:
                raise DatasetRequestError(f"dataset request error: {self._url}: {exc}") from exc

        if response.status_code == 429 or response.status_code >= 500:
            raise DatasetTemporaryError(f"dataset temporary error: status={response.status_code}")
        if response.status_code >= 400:
            raise DatasetRequestError(f"dataset request rejected: status={response.status_code}")
        return response.content
