import structlog

from storefront.core.application.exceptions import InsufficientStockError, ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, RowKey, Table
from storefront.core.application.skills.cart.cart_contracts import CartItemInput
from storefront.core.application.skills.cart.product_lookup import load_purchasable_product
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.cart import CartLine

logger = structlog.get_logger()


class AddToCartSkill(BaseSkill[CartItemInput, CartLine]):
    """Additive add-to-cart: repeated adds of the same product grow one line.

    The increment is a single atomic upsert keyed on (user, product), so a
    double click can never leave two rows for the same product.
    """

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: CartItemInput) -> CartLine:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        if input_data.quantity < 1:
            raise ValidationError("Quantity must be at least 1.")
        product = await load_purchasable_product(self._store, input_data.product_id, input_data.quantity)

        row = await self._store.upsert_increment(
            Table.CART_LINES,
            RowKey({"user_id": principal.user_id, "product_id": product.id}),
            "quantity",
            input_data.quantity,
        )
        line = CartLine.from_row(row)
        if line.quantity > product.stock:
            await self._store.increment(
                Table.CART_LINES, (Filter.eq("id", line.id),), {"quantity": -input_data.quantity}, floor=1
            )
            raise InsufficientStockError(
                f"Only {product.stock} units of '{product.title}' are available.",
                context={"product_id": product.id, "stock": product.stock, "in_cart": line.quantity - input_data.quantity},
            )
        logger.info("Cart line upserted", user_id=principal.user_id, product_id=product.id, quantity=line.quantity)
        return line
