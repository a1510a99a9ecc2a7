import asyncio
from decimal import Decimal

import pytest

from storefront.core.application.exceptions import (
    InsufficientStockError,
    NotFoundError,
    PartialWriteError,
    StorageFailureError,
    ValidationError,
)
from storefront.core.application.ports import Table
from storefront.core.application.skills.cart import CartLoader
from storefront.core.application.workflows.checkout import PlaceOrderInput, PlaceOrderWorkflow
from storefront.core.domain.cart import PricingRules
from storefront.core.domain.order import OrderStatus
from storefront.core.exceptions import StorageUnavailableError


def _stock(data_store, product_id: str) -> int:
    return next(r["stock"] for r in data_store.rows(Table.PRODUCTS) if r["id"] == product_id)


def _fail_on(table: str, real):
    """Wrap a data store method so calls against ``table`` raise a transient error."""

    async def wrapper(target, *args, **kwargs):
        if target == table:
            raise StorageUnavailableError(table=target, message="connection reset", status_code=503)
        return await real(target, *args, **kwargs)

    return wrapper


@pytest.fixture()
def workflow(data_store, retry_policy) -> PlaceOrderWorkflow:
    return PlaceOrderWorkflow(data_store, CartLoader(data_store, PricingRules()), retry_policy)


@pytest.fixture()
def cart(data_store, customer):
    def _fill(*items: tuple[str, int]) -> None:
        data_store.load(
            Table.CART_LINES,
            [{"user_id": customer.user_id, "product_id": pid, "quantity": qty} for pid, qty in items],
        )

    return _fill


class TestPlaceOrderHappyPath:
    async def test_order_lines_stock_and_cart(self, workflow, data_store, customer, cart):
        cart(("prod-1", 2))

        placed = await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert placed.order.status is OrderStatus.PENDING
        assert (placed.order.subtotal, placed.order.tax, placed.order.total) == (
            Decimal("100000.00"),
            Decimal("10000.00"),
            Decimal("110000.00"),
        )
        assert [(line.product_id, line.quantity, line.unit_price) for line in placed.lines] == [
            ("prod-1", 2, Decimal("50000.00"))
        ]
        assert placed.cart_cleared
        assert data_store.rows(Table.CART_LINES) == []
        assert _stock(data_store, "prod-1") == 3

    async def test_line_price_is_a_snapshot(self, workflow, data_store, customer, cart):
        cart(("prod-1", 1))
        placed = await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        await data_store.update(Table.PRODUCTS, (), {"price": Decimal("99999.00")})

        stored = data_store.rows(Table.ORDER_LINES)
        assert [r["unit_price"] for r in stored] == [Decimal("50000.00")]
        assert placed.lines[0].line_total == Decimal("50000.00")


class TestPlaceOrderRejections:
    async def test_empty_cart(self, workflow, data_store, customer):
        with pytest.raises(ValidationError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert data_store.rows(Table.ORDERS) == []

    async def test_quantity_above_stock(self, workflow, data_store, customer, cart):
        cart(("prod-2", 3))

        with pytest.raises(InsufficientStockError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert data_store.rows(Table.ORDERS) == []

    async def test_inactive_product(self, workflow, data_store, customer, cart, product_row):
        data_store.load(Table.PRODUCTS, [product_row("prod-off", state="inactive")])
        cart(("prod-off", 1))

        with pytest.raises(ValidationError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

    async def test_someone_elses_address(self, workflow, data_store, other_customer):
        data_store.load(
            Table.CART_LINES, [{"user_id": other_customer.user_id, "product_id": "prod-1", "quantity": 1}]
        )

        with pytest.raises(NotFoundError):
            await workflow.execute(PlaceOrderInput(other_customer, "addr-1"))

        assert data_store.rows(Table.ORDERS) == []


class TestPlaceOrderRollback:
    async def test_sold_out_during_reservation_restores_everything(
        self, workflow, data_store, customer, cart, monkeypatch
    ):
        cart(("prod-1", 2), ("prod-2", 2))
        real_increment = data_store.increment

        async def racing_increment(table, filters, deltas, floor=0, request_key=None):
            if filters[0].value == "prod-2" and deltas["stock"] < 0:
                return []
            return await real_increment(table, filters, deltas, floor=floor, request_key=request_key)

        monkeypatch.setattr(data_store, "increment", racing_increment)

        with pytest.raises(InsufficientStockError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert data_store.rows(Table.ORDERS) == []
        assert data_store.rows(Table.ORDER_LINES) == []
        assert _stock(data_store, "prod-1") == 5
        assert len(data_store.rows(Table.CART_LINES)) == 2

    async def test_storage_outage_reports_failure_without_leftovers(
        self, workflow, data_store, customer, cart, monkeypatch
    ):
        cart(("prod-1", 1))
        monkeypatch.setattr(data_store, "insert_many", _fail_on(Table.ORDER_LINES, data_store.insert_many))

        with pytest.raises(StorageFailureError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert data_store.rows(Table.ORDERS) == []
        assert _stock(data_store, "prod-1") == 5

    async def test_failed_rollback_marks_order_cancelled(self, workflow, data_store, customer, cart, monkeypatch):
        cart(("prod-1", 1), ("prod-2", 1))
        real_increment = data_store.increment

        async def racing_increment(table, filters, deltas, floor=0, request_key=None):
            if filters[0].value == "prod-2" and deltas["stock"] < 0:
                return []
            return await real_increment(table, filters, deltas, floor=floor, request_key=request_key)

        monkeypatch.setattr(data_store, "increment", racing_increment)
        monkeypatch.setattr(data_store, "delete", _fail_on(Table.ORDERS, data_store.delete))

        with pytest.raises(PartialWriteError) as exc_info:
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert exc_info.value.context["failed_compensations"] == ["delete order"]
        orders = data_store.rows(Table.ORDERS)
        assert [o["status"] for o in orders] == ["cancelled"]
        assert exc_info.value.context["order_id"] == orders[0]["id"]
        assert _stock(data_store, "prod-1") == 5

    async def test_cancellation_mid_flight_rolls_back(self, workflow, data_store, customer, cart, monkeypatch):
        cart(("prod-1", 1))
        reached = asyncio.Event()

        async def hanging_increment(*args, **kwargs):
            reached.set()
            await asyncio.Event().wait()

        monkeypatch.setattr(data_store, "increment", hanging_increment)

        task = asyncio.create_task(workflow.execute(PlaceOrderInput(customer, "addr-1")))
        await reached.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert data_store.rows(Table.ORDERS) == []
        assert data_store.rows(Table.ORDER_LINES) == []


class TestPlaceOrderLostResponses:
    @pytest.mark.parametrize("method", ["insert", "insert_many", "increment"])
    async def test_retried_write_is_applied_once(
        self, workflow, data_store, customer, cart, monkeypatch, lose_first_response, method
    ):
        cart(("prod-1", 2))
        monkeypatch.setattr(data_store, method, lose_first_response(getattr(data_store, method)))

        placed = await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert [o["id"] for o in data_store.rows(Table.ORDERS)] == [placed.order.id]
        lines = data_store.rows(Table.ORDER_LINES)
        assert [(line["order_id"], line["quantity"]) for line in lines] == [(placed.order.id, 2)]
        assert _stock(data_store, "prod-1") == 3

    async def test_lost_restore_response_returns_stock_once(
        self, workflow, data_store, customer, cart, monkeypatch, lose_first_response
    ):
        cart(("prod-1", 2), ("prod-2", 1))
        real_increment = data_store.increment
        restore = lose_first_response(real_increment)

        async def racing_increment(table, filters, deltas, floor=0, request_key=None):
            if filters[0].value == "prod-2" and deltas["stock"] < 0:
                return []
            call = restore if deltas["stock"] > 0 else real_increment
            return await call(table, filters, deltas, floor=floor, request_key=request_key)

        monkeypatch.setattr(data_store, "increment", racing_increment)

        with pytest.raises(InsufficientStockError):
            await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert _stock(data_store, "prod-1") == 5
        assert data_store.rows(Table.ORDERS) == []


class TestCartClearFailure:
    async def test_order_stands_when_cart_cannot_be_cleared(self, workflow, data_store, customer, cart, monkeypatch):
        cart(("prod-1", 1))
        monkeypatch.setattr(data_store, "delete", _fail_on(Table.CART_LINES, data_store.delete))

        placed = await workflow.execute(PlaceOrderInput(customer, "addr-1"))

        assert not placed.cart_cleared
        assert len(data_store.rows(Table.ORDERS)) == 1
        assert _stock(data_store, "prod-1") == 4
