"""Return request: record the request, put the goods back in stock and flag the order.

Steps: Validate input -> Load order -> Check eligibility -> Insert request ->
Restock -> Mark order in_return (single-product orders only).
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars

from storefront.core.application.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.workflows.base_workflow import BaseWorkflow
from storefront.core.application.workflows.compensation import Compensations
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import Order, OrderLine, OrderStatus, ReturnWindow
from storefront.core.domain.returns import ReturnReason, ReturnRequest, ReturnStatus
from storefront.core.domain.shared import utc_now
from storefront.core.exceptions import UniqueViolationError
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.observability.tracing_setup import trace_operation

logger = structlog.get_logger()


@dataclass(frozen=True)
class RequestReturnInput:
    principal: Principal | None
    order_id: str
    product_id: str
    reason_code: str
    reason: str
    comments: str = ""


class RequestReturnWorkflow(BaseWorkflow[RequestReturnInput, ReturnRequest]):
    name = "return_request"

    def __init__(
        self,
        data_store: DataStorePort,
        return_window: ReturnWindow,
        retry_policy: RetryPolicy,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__(data_store, retry_policy)
        self._window = return_window
        self._clock = clock

    @trace_operation("workflow.return_request")
    async def execute(self, input_data: RequestReturnInput) -> ReturnRequest:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        bind_contextvars(user_id=principal.user_id, event_type="workflow.return_request")
        reason_code, reason = _validate_reason(input_data)
        context: dict[str, Any] = {"order_id": input_data.order_id, "product_id": input_data.product_id}

        async def steps(saga: Compensations) -> ReturnRequest:
            order, lines = await self._step_1_load_order(principal, input_data.order_id)
            quantity = self._step_2_check_eligibility(order, lines, input_data.product_id)
            await self._step_3_reject_duplicate(order.id, input_data.product_id)
            request = await self._step_4_insert_request(saga, order, input_data, reason_code, reason, quantity)
            await self._step_5_restock(saga, request)
            await self._step_6_flag_order(order, lines)
            return request

        request = await self._run(steps, context=context)
        logger.info("Return requested", return_id=request.id, quantity=request.quantity, **context)
        return request

    # ── Step Methods ─────────────────────────────────────────────────

    async def _step_1_load_order(self, principal: Principal, order_id: str) -> tuple[Order, list[OrderLine]]:
        rows = await self._io(lambda: self._store.select(Table.ORDERS, Query.where(Filter.eq("id", order_id), limit=1)))
        if not rows:
            raise NotFoundError("Order not found.", context={"order_id": order_id})
        order = Order.from_row(rows[0])
        if order.user_id != principal.user_id:
            raise AuthorizationError("You can only return products from your own orders.", context={"order_id": order_id})
        line_rows = await self._io(
            lambda: self._store.select(Table.ORDER_LINES, Query.where(Filter.eq("order_id", order.id)))
        )
        return order, [OrderLine.from_row(r) for r in line_rows]

    def _step_2_check_eligibility(self, order: Order, lines: list[OrderLine], product_id: str) -> int:
        if not order.status.is_settled:
            raise ValidationError(
                f"Orders in status '{order.status.value}' cannot be returned.", context={"order_id": order.id}
            )
        if not self._window.is_open(order.created_at, self._clock()):
            raise ValidationError(
                "The return window for this order has closed.",
                context={"order_id": order.id, "closed_at": self._window.closes_at(order.created_at).isoformat()},
            )
        quantity = sum(line.quantity for line in lines if line.product_id == product_id)
        if quantity == 0:
            raise ValidationError("This product is not part of the order.", context={"order_id": order.id})
        return quantity

    async def _step_3_reject_duplicate(self, order_id: str, product_id: str) -> None:
        existing = await self._io(
            lambda: self._store.select(
                Table.RETURN_REQUESTS,
                Query.where(Filter.eq("order_id", order_id), Filter.eq("product_id", product_id), limit=1),
            )
        )
        if existing:
            raise ConflictError("A return was already requested for this product.")

    async def _step_4_insert_request(
        self,
        saga: Compensations,
        order: Order,
        data: RequestReturnInput,
        reason_code: ReturnReason,
        reason: str,
        quantity: int,
    ) -> ReturnRequest:
        try:
            row = await self._insert(
                Table.RETURN_REQUESTS,
                {
                    "order_id": order.id,
                    "product_id": data.product_id,
                    "quantity": quantity,
                    "reason_code": reason_code.value,
                    "reason": reason,
                    "comments": data.comments.strip(),
                    "status": ReturnStatus.PENDING.value,
                    "requested_at": utc_now().isoformat(),
                },
            )
        except UniqueViolationError as exc:
            raise ConflictError("A return was already requested for this product.") from exc
        request = ReturnRequest.from_row(row)
        saga.push(
            "delete return request",
            lambda: self._store.delete(Table.RETURN_REQUESTS, (Filter.eq("id", request.id),)),
        )
        return request

    async def _step_5_restock(self, saga: Compensations, request: ReturnRequest) -> None:
        product_id, quantity = request.product_id, request.quantity
        restocked = await self._io(
            lambda: self._store.increment(
                Table.PRODUCTS,
                (Filter.eq("id", product_id),),
                {"stock": quantity},
                floor=None,
                request_key=f"{request.id}:restock",
            )
        )
        if not restocked:
            logger.warning("Returned product no longer exists, stock not restored", product_id=product_id)
            return
        saga.push(
            "undo restock",
            lambda: self._store.increment(
                Table.PRODUCTS,
                (Filter.eq("id", product_id),),
                {"stock": -quantity},
                floor=None,
                request_key=f"{request.id}:undo-restock",
            ),
        )

    async def _step_6_flag_order(self, order: Order, lines: list[OrderLine]) -> None:
        if len({line.product_id for line in lines}) != 1:
            return
        if not order.status.can_transition_to(OrderStatus.IN_RETURN):
            logger.info("Order status kept for return", order_id=order.id, order_status=order.status.value)
            return
        # Conditional on the status read in step 1 so a concurrent admin transition wins.
        flagged = await self._io(
            lambda: self._store.update(
                Table.ORDERS,
                (Filter.eq("id", order.id), Filter.eq("status", order.status.value)),
                {"status": OrderStatus.IN_RETURN.value},
            )
        )
        if flagged:
            logger.info("Order moved to in_return", order_id=order.id)


def _validate_reason(data: RequestReturnInput) -> tuple[ReturnReason, str]:
    try:
        reason_code = ReturnReason(data.reason_code)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown return reason '{data.reason_code}'.",
            context={"allowed": [r.value for r in ReturnReason]},
        ) from exc
    reason = data.reason.strip()
    if not reason:
        raise ValidationError("Please describe the reason for the return.")
    return reason_code, reason
