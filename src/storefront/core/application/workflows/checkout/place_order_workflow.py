"""Checkout: turn the caller's cart into an order with stock reserved.

Steps: Load cart -> Check address -> Insert order -> Insert lines ->
Reserve stock -> Clear cart. Everything before the cart is cleared is
undone if a later step fails; a failed cart clear leaves the order intact.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars

from storefront.core.application.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.cart import CartLoader
from storefront.core.application.workflows.base_workflow import BaseWorkflow
from storefront.core.application.workflows.compensation import Compensations
from storefront.core.domain.cart import CartSummary, PricedLine
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import Order, OrderLine, OrderStatus
from storefront.core.domain.shared import utc_now
from storefront.core.exceptions import DataStoreError
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.observability.metrics_service import ORDER_REVENUE_TOTAL
from storefront.infrastructure.observability.tracing_setup import trace_operation

logger = structlog.get_logger()


@dataclass(frozen=True)
class PlaceOrderInput:
    principal: Principal | None
    address_id: str


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    lines: list[OrderLine]
    cart_cleared: bool = True


class PlaceOrderWorkflow(BaseWorkflow[PlaceOrderInput, PlacedOrder]):
    name = "checkout"

    def __init__(self, data_store: DataStorePort, cart_loader: CartLoader, retry_policy: RetryPolicy) -> None:
        super().__init__(data_store, retry_policy)
        self._cart = cart_loader

    @trace_operation("workflow.checkout")
    async def execute(self, input_data: PlaceOrderInput) -> PlacedOrder:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        bind_contextvars(user_id=principal.user_id, event_type="workflow.checkout")
        logger.info("Checkout started", address_id=input_data.address_id)
        context: dict[str, Any] = {"user_id": principal.user_id}

        async def steps(saga: Compensations) -> tuple[Order, list[OrderLine]]:
            summary = await self._step_1_load_cart(principal)
            await self._step_2_check_address(principal, input_data.address_id)
            order = await self._step_3_insert_order(saga, principal, input_data.address_id, summary)
            context["order_id"] = order.id
            lines = await self._step_4_insert_lines(saga, order, summary)
            await self._step_5_reserve_stock(saga, order, summary)
            return order, lines

        order, lines = await self._run(steps, context=context)
        cart_cleared = await self._step_6_clear_cart(principal, order)
        ORDER_REVENUE_TOTAL.inc(float(order.total))
        logger.info("Checkout completed", order_id=order.id, total=str(order.total), lines=len(lines))
        return PlacedOrder(order=order, lines=lines, cart_cleared=cart_cleared)

    # ── Step Methods ─────────────────────────────────────────────────

    async def _step_1_load_cart(self, principal: Principal) -> CartSummary:
        summary = await self._io(lambda: self._cart.load(principal.user_id))
        if summary.is_empty:
            raise ValidationError("Your cart is empty.")
        for priced in summary.lines:
            product = priced.product
            if not product.is_active:
                raise ValidationError(
                    f"'{product.title}' is no longer available.", context={"product_id": product.id}
                )
            if priced.line.quantity > product.stock:
                raise InsufficientStockError(
                    f"Only {product.stock} units of '{product.title}' are available.",
                    context={"product_id": product.id, "stock": product.stock, "requested": priced.line.quantity},
                )
        if summary.unavailable:
            logger.warning("Cart lines skipped, product no longer exists", skipped=len(summary.unavailable))
        return summary

    async def _step_2_check_address(self, principal: Principal, address_id: str) -> None:
        rows = await self._io(
            lambda: self._store.select(
                Table.ADDRESSES,
                Query.where(Filter.eq("id", address_id), Filter.eq("user_id", principal.user_id), limit=1),
            )
        )
        if not rows:
            raise NotFoundError("Shipping address not found.", context={"address_id": address_id})

    async def _step_3_insert_order(
        self, saga: Compensations, principal: Principal, address_id: str, summary: CartSummary
    ) -> Order:
        row = await self._insert(
            Table.ORDERS,
            {
                "user_id": principal.user_id,
                "address_id": address_id,
                "subtotal": summary.subtotal,
                "tax": summary.tax,
                "shipping": summary.shipping,
                "total": summary.total,
                "status": OrderStatus.PENDING.value,
                "created_at": utc_now().isoformat(),
            },
        )
        order = Order.from_row(row)
        saga.push("delete order", lambda: self._store.delete(Table.ORDERS, (Filter.eq("id", order.id),)))
        logger.info("Order inserted", order_id=order.id, total=str(order.total))
        return order

    async def _step_4_insert_lines(self, saga: Compensations, order: Order, summary: CartSummary) -> list[OrderLine]:
        rows = [_line_row(order.id, priced) for priced in summary.lines]
        inserted = await self._insert_many(Table.ORDER_LINES, rows)
        saga.push(
            "delete order lines", lambda: self._store.delete(Table.ORDER_LINES, (Filter.eq("order_id", order.id),))
        )
        return [OrderLine.from_row(r) for r in inserted]

    async def _step_5_reserve_stock(self, saga: Compensations, order: Order, summary: CartSummary) -> None:
        for priced in summary.lines:
            product_id, quantity = priced.product.id, priced.line.quantity
            reserved = await self._io(
                lambda: self._store.increment(
                    Table.PRODUCTS,
                    (Filter.eq("id", product_id),),
                    {"stock": -quantity},
                    floor=0,
                    request_key=f"{order.id}:reserve:{product_id}",
                )
            )
            if not reserved:
                raise InsufficientStockError(
                    f"'{priced.product.title}' sold out while placing the order.",
                    context={"product_id": product_id, "requested": quantity},
                )
            saga.push(
                f"restore stock {product_id}",
                _restock(self._store, product_id, quantity, request_key=f"{order.id}:restore:{product_id}"),
            )

    async def _step_6_clear_cart(self, principal: Principal, order: Order) -> bool:
        try:
            await self._io(
                lambda: self._store.delete(Table.CART_LINES, (Filter.eq("user_id", principal.user_id),))
            )
        except DataStoreError as exc:
            logger.warning(
                "Order placed but cart could not be cleared",
                order_id=order.id,
                error_type=type(exc).__name__,
                error_details=str(exc),
            )
            return False
        return True

    async def _on_partial_write(self, context: dict[str, Any]) -> None:
        order_id = context.get("order_id")
        if order_id is None:
            return
        try:
            await self._io(
                lambda: self._store.update(
                    Table.ORDERS, (Filter.eq("id", order_id),), {"status": OrderStatus.CANCELLED.value}
                )
            )
            logger.error("Order marked cancelled after failed rollback", order_id=order_id)
        except DataStoreError as exc:
            logger.error("Could not mark order cancelled", order_id=order_id, error_details=str(exc))


def _line_row(order_id: str, priced: PricedLine) -> dict[str, Any]:
    return {
        "order_id": order_id,
        "product_id": priced.product.id,
        "quantity": priced.line.quantity,
        "unit_price": priced.unit_price,
        "line_total": priced.line_total,
    }


def _restock(
    store: DataStorePort, product_id: str, quantity: int, request_key: str
) -> Callable[[], Awaitable[Any]]:
    async def action() -> Any:
        return await store.increment(
            Table.PRODUCTS, (Filter.eq("id", product_id),), {"stock": quantity}, floor=None, request_key=request_key
        )

    return action
