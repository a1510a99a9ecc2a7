from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.skills.cart.cart_loader import CartLoader
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.cart import CartSummary
from storefront.core.domain.identity import Principal


class ViewCartSkill(BaseSkill[Principal | None, CartSummary]):
    def __init__(self, loader: CartLoader) -> None:
        self._loader = loader

    async def execute(self, input_data: Principal | None) -> CartSummary:
        principal = AccessPolicy.require(input_data, Capability.SHOP)
        return await self._loader.load(principal.user_id)
