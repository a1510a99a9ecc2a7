from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.domain.catalog import Product
from storefront.core.domain.order import Order, OrderLine, OrderStatus


class SellerSalesReader:
    """Batched reads of a seller's products and the live orders that contain them.

    Cancelled orders are left out: they never shipped and carry no revenue.
    """

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def products(self, seller_id: str) -> list[Product]:
        rows = await self._store.select(Table.PRODUCTS, Query.where(Filter.eq("seller_id", seller_id)))
        return [Product.from_row(r) for r in rows]

    async def sales(self, product_ids: list[str]) -> tuple[dict[str, Order], list[OrderLine]]:
        if not product_ids:
            return {}, []
        lines = [
            OrderLine.from_row(r)
            for r in await self._store.select(Table.ORDER_LINES, Query.where(Filter.is_in("product_id", product_ids)))
        ]
        if not lines:
            return {}, []
        order_rows = await self._store.select(
            Table.ORDERS,
            Query.where(
                Filter.is_in("id", sorted({line.order_id for line in lines})),
                Filter.neq("status", OrderStatus.CANCELLED.value),
                order_by=(OrderBy("created_at", descending=True),),
            ),
        )
        orders = {str(r["id"]): Order.from_row(r) for r in order_rows}
        return orders, [line for line in lines if line.order_id in orders]
