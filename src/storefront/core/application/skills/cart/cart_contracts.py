from dataclasses import dataclass

from storefront.core.domain.identity import Principal


@dataclass(frozen=True)
class CartItemInput:
    principal: Principal | None
    product_id: str
    quantity: int = 1
