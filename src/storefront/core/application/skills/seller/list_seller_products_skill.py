from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Product
from storefront.core.domain.identity import Principal


class ListSellerProductsSkill(BaseSkill[Principal | None, list[Product]]):
    """Every product of the calling vendor, whatever its state."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: Principal | None) -> list[Product]:
        principal = AccessPolicy.require(input_data, Capability.SELL)
        rows = await self._store.select(
            Table.PRODUCTS,
            Query.where(
                Filter.eq("seller_id", principal.user_id),
                order_by=(OrderBy("created_at", descending=True),),
            ),
        )
        return [Product.from_row(r) for r in rows]
