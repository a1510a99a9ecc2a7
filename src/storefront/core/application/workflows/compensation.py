from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

from storefront.core.exceptions import DataStoreError
from storefront.infrastructure.common.retry import RetryPolicy

logger = structlog.get_logger()


@dataclass(frozen=True)
class CompensationStep:
    description: str
    action: Callable[[], Awaitable[Any]]


class Compensations:
    """Undo actions recorded as a workflow writes, replayed newest first on failure."""

    def __init__(self, retry_policy: RetryPolicy) -> None:
        self._retry = retry_policy
        self._steps: list[CompensationStep] = []

    def push(self, description: str, action: Callable[[], Awaitable[Any]]) -> None:
        self._steps.append(CompensationStep(description, action))

    @property
    def pending(self) -> bool:
        return bool(self._steps)

    async def unwind(self) -> list[str]:
        """Run every recorded undo; return the descriptions of those that failed."""
        failed: list[str] = []
        while self._steps:
            step = self._steps.pop()
            try:
                await self._retry.run(step.action)
                logger.info("Compensation applied", compensation=step.description)
            except DataStoreError as exc:
                logger.error(
                    "Compensation failed",
                    compensation=step.description,
                    error_type=type(exc).__name__,
                    error_details=str(exc),
                )
                failed.append(step.description)
        return failed
