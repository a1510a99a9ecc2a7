from typing import Any

import structlog

from storefront.core.application.exceptions import NotFoundError, ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Table
from storefront.core.application.skills.seller import product_rules
from storefront.core.application.skills.seller.contracts import UpdateProductInput
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Product
from storefront.core.domain.shared import to_money

logger = structlog.get_logger()


class UpdateProductSkill(BaseSkill[UpdateProductInput, Product]):
    """Applies a partial patch to a product owned by the caller (or any product, for admins)."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: UpdateProductInput) -> Product:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        product = await product_rules.load_product(self._store, input_data.product_id)
        AccessPolicy.ensure_owner(principal, product.seller_id, "product")

        patch = await self._build_patch(input_data)
        if not patch:
            raise ValidationError("Nothing to update.", context={"product_id": product.id})

        rows = await self._store.update(Table.PRODUCTS, (Filter.eq("id", product.id),), patch)
        if not rows:
            raise NotFoundError("Product not found.", context={"product_id": product.id})
        logger.info("Product updated", product_id=product.id, fields=sorted(patch))
        return Product.from_row(rows[0])

    async def _build_patch(self, data: UpdateProductInput) -> dict[str, Any]:
        patch: dict[str, Any] = {}
        if data.title is not None:
            patch["title"] = product_rules.check_title(data.title)
        if data.description is not None:
            patch["description"] = data.description.strip()
        if data.price is not None:
            patch["price"] = product_rules.check_price(to_money(data.price))
        if data.stock is not None:
            patch["stock"] = product_rules.check_stock(data.stock)
        if data.category_id is not None:
            await product_rules.check_category(self._store, data.category_id)
            patch["category_id"] = data.category_id
        if data.image_url is not None:
            patch["image_url"] = data.image_url
        if data.state is not None:
            patch["state"] = data.state.value
        return patch
