from __future__ import annotations

from abc import ABC, abstractmethod


class DatasetSource(ABC):
    source_ref: str

    @abstractmethod
    async def read(self) -> bytes:
        """Return the raw document bytes.

        Raises ``DatasetTemporaryError`` for failures worth retrying and
        ``DatasetRequestError`` for everything else.
        """
        raise NotImplementedError
