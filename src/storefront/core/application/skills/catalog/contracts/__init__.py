from storefront.core.application.skills.catalog.contracts.catalog_contracts import (
    CatalogEntry,
    ProductDetail,
    ReviewView,
    StorePage,
)

__all__ = ["CatalogEntry", "ProductDetail", "ReviewView", "StorePage"]
