from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.address import Address
from storefront.core.domain.identity import Principal


class ListAddressesSkill(BaseSkill[Principal | None, list[Address]]):
    """The caller's addresses, principal one first."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: Principal | None) -> list[Address]:
        principal = AccessPolicy.require(input_data, Capability.SHOP)
        rows = await self._store.select(
            Table.ADDRESSES,
            Query.where(
                Filter.eq("user_id", principal.user_id),
                order_by=(OrderBy("is_principal", descending=True),),
            ),
        )
        return [Address.from_row(r) for r in rows]
