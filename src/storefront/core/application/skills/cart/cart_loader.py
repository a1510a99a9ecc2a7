from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.domain.cart import CartLine, CartSummary, PricingRules, price_cart
from storefront.core.domain.catalog import Product


class CartLoader:
    """Reads a user's cart lines with their live products and prices them."""

    def __init__(self, data_store: DataStorePort, rules: PricingRules) -> None:
        self._store = data_store
        self._rules = rules

    async def load(self, user_id: str) -> CartSummary:
        line_rows = await self._store.select(Table.CART_LINES, Query.where(Filter.eq("user_id", user_id)))
        lines = [CartLine.from_row(r) for r in line_rows]
        products = await self._products_by_id({line.product_id for line in lines})
        return price_cart(((line, products.get(line.product_id)) for line in lines), self._rules)

    async def _products_by_id(self, product_ids: set[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        rows = await self._store.select(Table.PRODUCTS, Query.where(Filter.is_in("id", sorted(product_ids))))
        return {str(r["id"]): Product.from_row(r) for r in rows}
