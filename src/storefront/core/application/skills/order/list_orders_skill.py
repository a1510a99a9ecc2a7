from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import Order


class ListOrdersSkill(BaseSkill[Principal | None, list[Order]]):
    """Order history of the caller, newest first."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: Principal | None) -> list[Order]:
        principal = AccessPolicy.require(input_data, Capability.SHOP)
        rows = await self._store.select(
            Table.ORDERS,
            Query.where(
                Filter.eq("user_id", principal.user_id),
                order_by=(OrderBy("created_at", descending=True),),
            ),
        )
        return [Order.from_row(r) for r in rows]
