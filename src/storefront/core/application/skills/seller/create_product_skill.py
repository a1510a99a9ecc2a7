import structlog

from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Table
from storefront.core.application.skills.seller import product_rules
from storefront.core.application.skills.seller.contracts import CreateProductInput
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Product
from storefront.core.domain.shared import to_money, utc_now

logger = structlog.get_logger()


class CreateProductSkill(BaseSkill[CreateProductInput, Product]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: CreateProductInput) -> Product:
        principal = AccessPolicy.require(input_data.principal, Capability.SELL)
        title = product_rules.check_title(input_data.title)
        price = product_rules.check_price(to_money(input_data.price))
        stock = product_rules.check_stock(input_data.stock)
        await product_rules.check_category(self._store, input_data.category_id)

        row = await self._store.insert(
            Table.PRODUCTS,
            {
                "title": title,
                "description": input_data.description.strip(),
                "price": price,
                "stock": stock,
                "state": input_data.state.value,
                "seller_id": principal.user_id,
                "category_id": input_data.category_id,
                "image_url": input_data.image_url,
                "created_at": utc_now().isoformat(),
                "rating_sum": 0,
                "rating_count": 0,
            },
        )
        logger.info("Product created", product_id=row["id"], seller_id=principal.user_id)
        return Product.from_row(row)
