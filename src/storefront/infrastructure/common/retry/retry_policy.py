from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from storefront.core.exceptions import DataStoreError

_T = TypeVar("_T")

logger = structlog.get_logger()


def _retryable(exc: BaseException) -> bool:
    return isinstance(exc, DataStoreError) and exc.retryable


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        "Transient storage failure, retrying",
        processing_retries=state.attempt_number,
        error_type=type(exc).__name__ if exc else None,
        error_details=str(exc) if exc else None,
        error_retryable=True,
    )


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    initial_wait: float = 0.1
    max_wait: float = 2.0

    async def run(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        """Await ``fn()``, retrying transient storage failures.

        ``fn`` may be any zero-argument callable returning an awaitable, such as a lambda.
        """
        async for attempt in self._retrying():
            with attempt:
                return await fn()
        raise RuntimeError("retry loop ended without an outcome")

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(_retryable),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(initial=self.initial_wait, max=self.max_wait),
            before_sleep=_log_retry,
            reraise=True,
        )
