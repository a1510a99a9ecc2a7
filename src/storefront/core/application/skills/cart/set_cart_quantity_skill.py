from storefront.core.application.exceptions import NotFoundError, ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Table
from storefront.core.application.skills.cart.cart_contracts import CartItemInput
from storefront.core.application.skills.cart.product_lookup import load_purchasable_product
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.cart import CartLine


class SetCartQuantitySkill(BaseSkill[CartItemInput, CartLine | None]):
    """Replace a line's quantity; zero removes the line and returns ``None``."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: CartItemInput) -> CartLine | None:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        if input_data.quantity < 0:
            raise ValidationError("Quantity cannot be negative.")
        key = (Filter.eq("user_id", principal.user_id), Filter.eq("product_id", input_data.product_id))

        if input_data.quantity == 0:
            await self._store.delete(Table.CART_LINES, key)
            return None

        await load_purchasable_product(self._store, input_data.product_id, input_data.quantity)
        rows = await self._store.update(Table.CART_LINES, key, {"quantity": input_data.quantity})
        if not rows:
            raise NotFoundError("Product is not in the cart.", context={"product_id": input_data.product_id})
        return CartLine.from_row(rows[0])
