from storefront.core.application.exceptions import InsufficientStockError, NotFoundError, ValidationError
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.domain.catalog import Product


async def load_purchasable_product(store: DataStorePort, product_id: str, quantity: int) -> Product:
    """Fetch a product that can be put in a cart in ``quantity`` units."""
    rows = await store.select(Table.PRODUCTS, Query.where(Filter.eq("id", product_id), limit=1))
    if not rows:
        raise NotFoundError("Product not found.", context={"product_id": product_id})
    product = Product.from_row(rows[0])
    if not product.is_active:
        raise ValidationError("This product is not available for sale.", context={"product_id": product_id})
    if quantity > product.stock:
        raise InsufficientStockError(
            f"Only {product.stock} units of '{product.title}' are available.",
            context={"product_id": product_id, "stock": product.stock, "requested": quantity},
        )
    return product
