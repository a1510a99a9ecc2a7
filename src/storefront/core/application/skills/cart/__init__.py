from storefront.core.application.skills.cart.add_to_cart_skill import AddToCartSkill
from storefront.core.application.skills.cart.cart_contracts import CartItemInput
from storefront.core.application.skills.cart.cart_loader import CartLoader
from storefront.core.application.skills.cart.remove_from_cart_skill import RemoveFromCartSkill
from storefront.core.application.skills.cart.set_cart_quantity_skill import SetCartQuantitySkill
from storefront.core.application.skills.cart.view_cart_skill import ViewCartSkill

__all__ = [
    "AddToCartSkill",
    "CartItemInput",
    "CartLoader",
    "RemoveFromCartSkill",
    "SetCartQuantitySkill",
    "ViewCartSkill",
]
