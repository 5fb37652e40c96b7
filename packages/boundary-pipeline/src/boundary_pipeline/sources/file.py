from __future__ import annotations

import asyncio
from pathlib import Path

from boundary_pipeline.core.exceptions import DatasetRequestError, DatasetTemporaryError
from boundary_pipeline.sources.base import DatasetSource


class FileDatasetSource(DatasetSource):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.source_ref = str(path)

    async def read(self) -> bytes:
        try:
            return await asyncio.to_thread(self._path.read_bytes)
        except FileNotFoundError as exc:
            raise DatasetRequestError(f"dataset file not found: {self._path}") from exc
        except IsADirectoryError as exc:
            raise DatasetRequestError(f"dataset path is a directory: {self._path}") from exc
        except OSError as exc:
            raise DatasetTemporaryError(f"dataset file read error: {self._path}: {exc}") from exc
