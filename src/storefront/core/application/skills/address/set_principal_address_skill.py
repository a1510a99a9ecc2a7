from dataclasses import dataclass

from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.address import Address
from storefront.core.domain.identity import Principal


@dataclass(frozen=True)
class SetPrincipalAddressInput:
    principal: Principal | None
    address_id: str


class SetPrincipalAddressSkill(BaseSkill[SetPrincipalAddressInput, Address]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: SetPrincipalAddressInput) -> Address:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        owned = (Filter.eq("id", input_data.address_id), Filter.eq("user_id", principal.user_id))
        if not await self._store.select(Table.ADDRESSES, Query.where(*owned, limit=1)):
            raise NotFoundError("Address not found.", context={"address_id": input_data.address_id})

        await self._store.update(
            Table.ADDRESSES,
            (Filter.eq("user_id", principal.user_id), Filter.neq("id", input_data.address_id)),
            {"is_principal": False},
        )
        rows = await self._store.update(Table.ADDRESSES, owned, {"is_principal": True})
        return Address.from_row(rows[0])
