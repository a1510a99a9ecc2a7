from decimal import Decimal

from storefront.core.application.exceptions import NotFoundError, ValidationError
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.domain.catalog import Product


def check_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationError("Product title is required.")
    return title


def check_price(price: Decimal) -> Decimal:
    if price <= 0:
        raise ValidationError("Price must be greater than zero.", context={"price": str(price)})
    return price


def check_stock(stock: int) -> int:
    if stock < 0:
        raise ValidationError("Stock cannot be negative.", context={"stock": stock})
    return stock


async def check_category(store: DataStorePort, category_id: str | None) -> None:
    if category_id is None:
        return
    rows = await store.select(Table.CATEGORIES, Query.where(Filter.eq("id", category_id), limit=1))
    if not rows:
        raise ValidationError("Category does not exist.", context={"category_id": category_id})


async def load_product(store: DataStorePort, product_id: str) -> Product:
    rows = await store.select(Table.PRODUCTS, Query.where(Filter.eq("id", product_id), limit=1))
    if not rows:
        raise NotFoundError("Product not found.", context={"product_id": product_id})
    return Product.from_row(rows[0])
