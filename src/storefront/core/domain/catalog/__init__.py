from storefront.core.domain.catalog.entities import Category, Product
from storefront.core.domain.catalog.value_objects import (
    CatalogQuery,
    CatalogSort,
    PriceBand,
    ProductState,
)

__all__ = [
    "CatalogQuery",
    "CatalogSort",
    "Category",
    "PriceBand",
    "Product",
    "ProductState",
]
