"""Cart totals: subtotal, tax, shipping and grand total over live product prices."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain.cart.entities.cart_line import CartLine
from storefront.core.domain.cart.value_objects.cart_summary import CartSummary, PricedLine
from storefront.core.domain.catalog.entities.product import Product
from storefront.core.domain.shared import ZERO, to_money

DEFAULT_TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class PricingRules:
    tax_rate: Decimal = DEFAULT_TAX_RATE
    flat_shipping: Decimal = ZERO


def price_cart(
    lines: Iterable[tuple[CartLine, Product | None]],
    rules: PricingRules = PricingRules(),
) -> CartSummary:
    """Price cart lines against the products they currently point at.

    A line whose product no longer resolves is left out of every sum and
    returned in ``unavailable``. Shipping is only charged on a non-empty cart.
    """
    priced: list[PricedLine] = []
    unavailable: list[CartLine] = []
    for line, product in lines:
        if product is None:
            unavailable.append(line)
            continue
        priced.append(PricedLine(line=line, product=product))

    subtotal = to_money(sum((p.product.price * p.line.quantity for p in priced), ZERO))
    tax = to_money(subtotal * rules.tax_rate)
    shipping = to_money(rules.flat_shipping) if priced else ZERO
    return CartSummary(
        lines=priced,
        unavailable=unavailable,
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=to_money(subtotal + tax + shipping),
    )
