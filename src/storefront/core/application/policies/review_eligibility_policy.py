from enum import StrEnum

import structlog

from storefront.core.application.ports.data_store_port import DataStorePort
from storefront.core.application.ports.query import Filter, Query
from storefront.core.application.ports.tables import Table
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import OrderStatus

logger = structlog.get_logger()


class ReviewPolicy(StrEnum):
    # Any paid order at all qualifies, even one that never contained the product.
    ANY_PAID_ORDER = "any_paid_order"
    PURCHASED_PRODUCT = "purchased_product"


_SETTLED_STATUSES = tuple(s.value for s in OrderStatus if s.is_settled)


class ReviewEligibilityPolicy:
    """Decides whether a principal has bought enough to leave a review."""

    def __init__(self, data_store: DataStorePort, policy: ReviewPolicy) -> None:
        self._store = data_store
        self._policy = policy
        if policy == ReviewPolicy.ANY_PAID_ORDER:
            logger.warning(
                "Review policy 'any_paid_order' does not check the reviewed product was bought",
                review_policy=policy.value,
            )

    @property
    def policy(self) -> ReviewPolicy:
        return self._policy

    async def is_eligible(self, principal: Principal, product_id: str) -> bool:
        match self._policy:
            case ReviewPolicy.ANY_PAID_ORDER:
                return await self._has_paid_order(principal)
            case ReviewPolicy.PURCHASED_PRODUCT:
                return await self._bought_product(principal, product_id)

    async def _has_paid_order(self, principal: Principal) -> bool:
        rows = await self._store.select(
            Table.ORDERS,
            Query.where(
                Filter.eq("user_id", principal.user_id),
                Filter.eq("status", OrderStatus.PAID.value),
                limit=1,
            ),
        )
        return bool(rows)

    async def _bought_product(self, principal: Principal, product_id: str) -> bool:
        orders = await self._store.select(
            Table.ORDERS,
            Query.where(
                Filter.eq("user_id", principal.user_id),
                Filter.is_in("status", _SETTLED_STATUSES),
            ),
        )
        if not orders:
            return False
        lines = await self._store.select(
            Table.ORDER_LINES,
            Query.where(
                Filter.is_in("order_id", [o["id"] for o in orders]),
                Filter.eq("product_id", product_id),
                limit=1,
            ),
        )
        return bool(lines)
