from storefront.core.domain.catalog.entities.category import Category
from storefront.core.domain.catalog.entities.product import Product

__all__ = ["Category", "Product"]
