import structlog

from storefront.core.application.exceptions import ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.seller.contracts import SaveStoreSettingsInput
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.store import Store
from storefront.core.exceptions import UniqueViolationError

logger = structlog.get_logger()


class SaveStoreSettingsSkill(BaseSkill[SaveStoreSettingsInput, Store]):
    """Creates or updates the calling vendor's store (one per seller)."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: SaveStoreSettingsInput) -> Store:
        principal = AccessPolicy.require(input_data.principal, Capability.SELL)
        name = input_data.name.strip()
        if not name:
            raise ValidationError("Store name is required.")
        fields = {"name": name, "description": input_data.description.strip(), "logo_url": input_data.logo_url}
        by_seller = (Filter.eq("seller_id", principal.user_id),)

        if await self._store.select(Table.STORES, Query.where(*by_seller, limit=1)):
            rows = await self._store.update(Table.STORES, by_seller, fields)
            return Store.from_row(rows[0])
        try:
            row = await self._store.insert(Table.STORES, {"seller_id": principal.user_id, **fields})
        except UniqueViolationError:
            # created by a concurrent request between the read and the insert
            rows = await self._store.update(Table.STORES, by_seller, fields)
            return Store.from_row(rows[0])
        logger.info("Store created", store_id=row["id"], seller_id=principal.user_id)
        return Store.from_row(row)
