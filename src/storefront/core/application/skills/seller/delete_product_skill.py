import structlog

from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Table
from storefront.core.application.skills.seller import product_rules
from storefront.core.application.skills.seller.contracts import DeleteProductInput
from storefront.core.application.skills.skill import BaseSkill

logger = structlog.get_logger()


class DeleteProductSkill(BaseSkill[DeleteProductInput, None]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: DeleteProductInput) -> None:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        product = await product_rules.load_product(self._store, input_data.product_id)
        AccessPolicy.ensure_owner(principal, product.seller_id, "product")
        await self._store.delete(Table.PRODUCTS, (Filter.eq("id", product.id),))
        logger.info("Product deleted", product_id=product.id, seller_id=product.seller_id)
