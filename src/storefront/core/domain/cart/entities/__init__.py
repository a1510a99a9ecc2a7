from storefront.core.domain.cart.entities.cart_line import CartLine

__all__ = ["CartLine"]
