from collections import defaultdict

from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.order.contracts import OrderLineView
from storefront.core.application.skills.seller.contracts import SellerOrderView
from storefront.core.application.skills.seller.seller_sales_reader import SellerSalesReader
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.identity import Principal, UserProfile
from storefront.core.domain.order import OrderLine


class ListSellerOrdersSkill(BaseSkill[Principal | None, list[SellerOrderView]]):
    """Orders containing the vendor's products, newest first, with buyer contact details."""

    def __init__(self, data_store: DataStorePort, sales: SellerSalesReader) -> None:
        self._store = data_store
        self._sales = sales

    async def execute(self, input_data: Principal | None) -> list[SellerOrderView]:
        principal = AccessPolicy.require(input_data, Capability.SELL)
        products = await self._sales.products(principal.user_id)
        titles = {p.id: p.title for p in products}
        orders, lines = await self._sales.sales(list(titles))
        if not orders:
            return []

        by_order: dict[str, list[OrderLine]] = defaultdict(list)
        for line in lines:
            by_order[line.order_id].append(line)
        buyers = await self._buyers({o.user_id for o in orders.values()})

        views = []
        for order in orders.values():
            buyer = buyers.get(order.user_id)
            order_lines = [
                OrderLineView(line=line, product_title=titles.get(line.product_id)) for line in by_order[order.id]
            ]
            views.append(
                SellerOrderView(
                    order=order,
                    buyer_name=buyer.name if buyer else None,
                    buyer_email=buyer.email if buyer else None,
                    lines=order_lines,
                )
            )
        return views

    async def _buyers(self, user_ids: set[str]) -> dict[str, UserProfile]:
        rows = await self._store.select(Table.USERS, Query.where(Filter.is_in("id", sorted(user_ids))))
        return {str(r["id"]): UserProfile.from_row(r) for r in rows}
