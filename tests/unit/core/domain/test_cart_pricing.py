from decimal import Decimal

from storefront.core.domain.cart import CartLine, PricingRules, price_cart
from storefront.core.domain.catalog import Product, ProductState


def _product(product_id: str, price: str, stock: int = 10) -> Product:
    return Product(
        id=product_id,
        title=product_id,
        description="",
        price=Decimal(price),
        stock=stock,
        state=ProductState.ACTIVE,
        seller_id="seller-1",
        category_id=None,
    )


def _line(product_id: str, quantity: int) -> CartLine:
    return CartLine(id=f"line-{product_id}", user_id="user-1", product_id=product_id, quantity=quantity)


class TestPriceCart:
    def test_two_units_at_fifty_thousand(self):
        summary = price_cart([(_line("p1", 2), _product("p1", "50000"))])

        assert summary.subtotal == Decimal("100000.00")
        assert summary.tax == Decimal("10000.00")
        assert summary.shipping == Decimal("0.00")
        assert summary.total == Decimal("110000.00")

    def test_subtotal_sums_every_line(self):
        summary = price_cart(
            [
                (_line("p1", 3), _product("p1", "19990")),
                (_line("p2", 1), _product("p2", "45500.50")),
            ]
        )

        assert summary.subtotal == Decimal("105470.50")
        assert summary.total == summary.subtotal + summary.tax
        assert summary.item_count == 4

    def test_missing_product_is_reported_not_priced(self):
        gone = _line("p-gone", 4)
        summary = price_cart([(_line("p1", 1), _product("p1", "1000")), (gone, None)])

        assert summary.unavailable == [gone]
        assert summary.subtotal == Decimal("1000.00")
        assert [p.product.id for p in summary.lines] == ["p1"]

    def test_flat_shipping_and_custom_rate(self):
        rules = PricingRules(tax_rate=Decimal("0.19"), flat_shipping=Decimal("12000"))
        summary = price_cart([(_line("p1", 1), _product("p1", "100000"))], rules)

        assert summary.tax == Decimal("19000.00")
        assert summary.shipping == Decimal("12000.00")
        assert summary.total == Decimal("131000.00")

    def test_empty_cart_has_no_shipping(self):
        summary = price_cart([], PricingRules(flat_shipping=Decimal("12000")))

        assert summary.is_empty
        assert summary.total == Decimal("0.00")

    def test_tax_rounds_half_up_to_cents(self):
        summary = price_cart([(_line("p1", 1), _product("p1", "0.05"))])

        assert summary.tax == Decimal("0.01")
