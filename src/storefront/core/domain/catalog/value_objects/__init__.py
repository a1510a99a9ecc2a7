from storefront.core.domain.catalog.value_objects.catalog_query import CatalogQuery
from storefront.core.domain.catalog.value_objects.catalog_sort import CatalogSort
from storefront.core.domain.catalog.value_objects.price_band import PriceBand
from storefront.core.domain.catalog.value_objects.product_state import ProductState

__all__ = ["CatalogQuery", "CatalogSort", "PriceBand", "ProductState"]
