from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Table
from storefront.core.application.skills.cart.cart_contracts import CartItemInput
from storefront.core.application.skills.skill import BaseSkill


class RemoveFromCartSkill(BaseSkill[CartItemInput, None]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: CartItemInput) -> None:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        deleted = await self._store.delete(
            Table.CART_LINES,
            (Filter.eq("user_id", principal.user_id), Filter.eq("product_id", input_data.product_id)),
        )
        if deleted == 0:
            raise NotFoundError("Product is not in the cart.", context={"product_id": input_data.product_id})
