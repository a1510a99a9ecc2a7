from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.domain.cart.entities.cart_line import CartLine
from storefront.core.domain.catalog.entities.product import Product
from storefront.core.domain.shared import ZERO, to_money


@dataclass(frozen=True)
class PricedLine:
    line: CartLine
    product: Product

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def line_total(self) -> Decimal:
        return to_money(self.product.price * self.line.quantity)


@dataclass(frozen=True)
class CartSummary:
    lines: list[PricedLine] = field(default_factory=list)
    unavailable: list[CartLine] = field(default_factory=list)
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    shipping: Decimal = ZERO
    total: Decimal = ZERO

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(p.line.quantity for p in self.lines)
