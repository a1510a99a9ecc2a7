from decimal import Decimal

import pytest

from storefront.core.application.policies import ReviewEligibilityPolicy, ReviewPolicy
from storefront.core.application.ports import Table


def _order(order_id: str, user_id: str, status: str) -> dict:
    return {
        "id": order_id,
        "user_id": user_id,
        "address_id": "addr-1",
        "subtotal": Decimal("50000"),
        "tax": Decimal("5000"),
        "shipping": Decimal("0"),
        "total": Decimal("55000"),
        "status": status,
        "created_at": "2026-02-01T00:00:00+00:00",
    }


def _line(order_id: str, product_id: str) -> dict:
    return {
        "id": f"{order_id}-{product_id}",
        "order_id": order_id,
        "product_id": product_id,
        "quantity": 1,
        "unit_price": Decimal("50000"),
        "line_total": Decimal("50000"),
    }


class TestAnyPaidOrder:
    async def test_paid_order_for_other_product_is_enough(self, data_store, customer):
        data_store.load(Table.ORDERS, [_order("o-1", customer.user_id, "paid")])
        data_store.load(Table.ORDER_LINES, [_line("o-1", "prod-2")])
        policy = ReviewEligibilityPolicy(data_store, ReviewPolicy.ANY_PAID_ORDER)

        assert await policy.is_eligible(customer, "prod-1")

    async def test_pending_order_is_not_enough(self, data_store, customer):
        data_store.load(Table.ORDERS, [_order("o-1", customer.user_id, "pending")])
        policy = ReviewEligibilityPolicy(data_store, ReviewPolicy.ANY_PAID_ORDER)

        assert not await policy.is_eligible(customer, "prod-1")


class TestPurchasedProduct:
    @pytest.fixture()
    def policy(self, data_store) -> ReviewEligibilityPolicy:
        return ReviewEligibilityPolicy(data_store, ReviewPolicy.PURCHASED_PRODUCT)

    async def test_requires_the_product_in_a_settled_order(self, data_store, customer, policy):
        data_store.load(Table.ORDERS, [_order("o-1", customer.user_id, "delivered")])
        data_store.load(Table.ORDER_LINES, [_line("o-1", "prod-1")])

        assert await policy.is_eligible(customer, "prod-1")
        assert not await policy.is_eligible(customer, "prod-2")

    async def test_cancelled_order_does_not_count(self, data_store, customer, policy):
        data_store.load(Table.ORDERS, [_order("o-1", customer.user_id, "cancelled")])
        data_store.load(Table.ORDER_LINES, [_line("o-1", "prod-1")])

        assert not await policy.is_eligible(customer, "prod-1")

    async def test_someone_elses_order_does_not_count(self, data_store, customer, other_customer, policy):
        data_store.load(Table.ORDERS, [_order("o-1", other_customer.user_id, "paid")])
        data_store.load(Table.ORDER_LINES, [_line("o-1", "prod-1")])

        assert not await policy.is_eligible(customer, "prod-1")
