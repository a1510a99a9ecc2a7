from storefront.core.domain.cart.value_objects.cart_summary import CartSummary, PricedLine

__all__ = ["CartSummary", "PricedLine"]
