import asyncio
from typing import Awaitable, Callable, TypeVar

from boundary_pipeline.core.exceptions import DatasetRequestError

T = TypeVar("T")


async def with_fixed_delay(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 3,
    delay_seconds: float = 1.0,
    on_retry: Callable[[int, float, Exception], None] | None = None,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    attempts = max(1, attempts)
    attempt = 0
    while attempt < attempts:
        try:
            return await operation()
        except Exception as exc:
            if should_retry and not should_retry(exc):
                raise DatasetRequestError(str(exc)) from exc
            attempt += 1
            if attempt >= attempts:
                raise DatasetRequestError(str(exc)) from exc
            if on_retry:
                on_retry(attempt, delay_seconds, exc)
            await asyncio.sleep(delay_seconds)
    raise DatasetRequestError("retry attempts exhausted")
