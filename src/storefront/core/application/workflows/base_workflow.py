import asyncio
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

import structlog

from storefront.core.application.exceptions import PartialWriteError, StorageFailureError, StorefrontError
from storefront.core.application.ports import DataStorePort, Filter, Query, Row
from storefront.core.application.workflows.compensation import Compensations
from storefront.core.exceptions import DataStoreError, UniqueViolationError
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.observability.metrics_service import (
    COMPENSATIONS_TOTAL,
    WORKFLOW_DURATION_SECONDS,
    WORKFLOWS_TOTAL,
)

logger = structlog.get_logger()

_T = TypeVar("_T")
T_Input = TypeVar("T_Input")
T_Output = TypeVar("T_Output")


class BaseWorkflow(ABC, Generic[T_Input, T_Output]):
    """Abstract base for multi-step writes that must either complete or roll back.

    Subclasses record an undo action after each write; ``_run`` replays them
    when a later step fails or the request is cancelled, with the replay
    shielded from cancellation.
    """

    name: str = "workflow"

    def __init__(self, data_store: DataStorePort, retry_policy: RetryPolicy) -> None:
        self._store = data_store
        self._retry = retry_policy

    @abstractmethod
    async def execute(self, input_data: T_Input) -> T_Output:
        """Run the full workflow."""

    async def _io(self, fn: Callable[[], Awaitable[_T]]) -> _T:
        return await self._retry.run(fn)

    async def _insert(self, table: str, row: Row) -> Row:
        """Insert under retry with a client-side id, so a retried request never stores the row twice."""
        staged = _with_id(row)
        try:
            return await self._io(lambda: self._store.insert(table, staged))
        except UniqueViolationError:
            found = await self._already_stored(table, [staged])
            if found is None:
                raise
            return found[0]

    async def _insert_many(self, table: str, rows: list[Row]) -> list[Row]:
        staged = [_with_id(row) for row in rows]
        try:
            return await self._io(lambda: self._store.insert_many(table, staged))
        except UniqueViolationError:
            found = await self._already_stored(table, staged)
            if found is None:
                raise
            return found

    async def _already_stored(self, table: str, staged: list[Row]) -> list[Row] | None:
        """Rows stored by an earlier attempt whose response was lost, or None for a real conflict."""
        ids = [row["id"] for row in staged]
        found = await self._io(lambda: self._store.select(table, Query.where(Filter.is_in("id", ids))))
        if len(found) != len(ids):
            return None
        by_id = {str(r["id"]): r for r in found}
        return [by_id[i] for i in ids]

    async def _run(
        self,
        steps: Callable[[Compensations], Awaitable[_T]],
        *,
        context: dict[str, Any],
    ) -> _T:
        saga = Compensations(self._retry)
        started = time.perf_counter()
        try:
            result = await steps(saga)
        except asyncio.CancelledError:
            logger.warning("Workflow cancelled, rolling back", workflow=self.name)
            if await asyncio.shield(self._unwind(saga, context)):
                await asyncio.shield(self._on_partial_write(context))
            self._record("cancelled", started)
            raise
        except StorefrontError:
            await self._rollback_or_escalate(saga, context, started)
            raise
        except DataStoreError as exc:
            await self._rollback_or_escalate(saga, context, started, cause=exc)
            raise StorageFailureError(
                "The data service is unavailable; nothing was changed. Please try again.",
                context={**context, "table": exc.table},
            ) from exc
        self._record("success", started)
        return result

    async def _rollback_or_escalate(
        self,
        saga: Compensations,
        context: dict[str, Any],
        started: float,
        cause: Exception | None = None,
    ) -> None:
        had_writes = saga.pending
        failed = await asyncio.shield(self._unwind(saga, context))
        if failed:
            self._record("partial_write", started)
            await self._on_partial_write(context)
            raise PartialWriteError(
                "The operation could not be completed or undone. Please contact support.",
                context={**context, "failed_compensations": failed},
            ) from cause
        self._record("compensated" if had_writes else "rejected", started)

    async def _unwind(self, saga: Compensations, context: dict[str, Any]) -> list[str]:
        if not saga.pending:
            return []
        failed = await saga.unwind()
        COMPENSATIONS_TOTAL.labels(workflow=self.name, outcome="failed" if failed else "applied").inc()
        if failed:
            logger.error("Rollback incomplete", workflow=self.name, failed_compensations=failed, **context)
        return failed

    async def _on_partial_write(self, context: dict[str, Any]) -> None:
        """Hook for a last-resort marker write when rollback failed."""

    def _record(self, outcome: str, started: float) -> None:
        WORKFLOWS_TOTAL.labels(workflow=self.name, outcome=outcome).inc()
        WORKFLOW_DURATION_SECONDS.labels(workflow=self.name).observe(time.perf_counter() - started)


def _with_id(row: Row) -> Row:
    return {**row, "id": row.get("id") or str(uuid.uuid4())}
