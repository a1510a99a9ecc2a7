from collections.abc import Callable
from datetime import datetime

from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.order.contracts import GetOrderInput, OrderDetail, OrderLineView
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.address import Address
from storefront.core.domain.order import Order, OrderLine, ReturnWindow
from storefront.core.domain.shared import utc_now


class GetOrderSkill(BaseSkill[GetOrderInput, OrderDetail]):
    """Loads one order with its lines, shipping address and return deadline.

    Only the buyer or an admin may read it. A foreign order is reported as
    an authorization failure, an unknown id as not-found.
    """

    def __init__(
        self,
        data_store: DataStorePort,
        return_window: ReturnWindow,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = data_store
        self._window = return_window
        self._clock = clock

    async def execute(self, input_data: GetOrderInput) -> OrderDetail:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        rows = await self._store.select(Table.ORDERS, Query.where(Filter.eq("id", input_data.order_id), limit=1))
        if not rows:
            raise NotFoundError("Order not found.", context={"order_id": input_data.order_id})
        order = Order.from_row(rows[0])
        AccessPolicy.ensure_owner(principal, order.user_id, "order")

        lines = [
            OrderLine.from_row(r)
            for r in await self._store.select(Table.ORDER_LINES, Query.where(Filter.eq("order_id", order.id)))
        ]
        titles = await self._product_titles({line.product_id for line in lines})
        return OrderDetail(
            order=order,
            lines=[OrderLineView(line=line, product_title=titles.get(line.product_id)) for line in lines],
            address=await self._address(order.address_id),
            return_deadline=self._window.closes_at(order.created_at),
            returnable=order.status.is_settled and self._window.is_open(order.created_at, self._clock()),
        )

    async def _product_titles(self, product_ids: set[str]) -> dict[str, str]:
        if not product_ids:
            return {}
        rows = await self._store.select(Table.PRODUCTS, Query.where(Filter.is_in("id", sorted(product_ids))))
        return {str(r["id"]): r.get("title") or "" for r in rows}

    async def _address(self, address_id: str | None) -> Address | None:
        if not address_id:
            return None
        rows = await self._store.select(Table.ADDRESSES, Query.where(Filter.eq("id", address_id), limit=1))
        return Address.from_row(rows[0]) if rows else None
