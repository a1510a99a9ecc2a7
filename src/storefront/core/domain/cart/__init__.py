from storefront.core.domain.cart.cart_pricing import DEFAULT_TAX_RATE, PricingRules, price_cart
from storefront.core.domain.cart.entities import CartLine
from storefront.core.domain.cart.value_objects import CartSummary, PricedLine

__all__ = [
    "DEFAULT_TAX_RATE",
    "CartLine",
    "CartSummary",
    "PricedLine",
    "PricingRules",
    "price_cart",
]
