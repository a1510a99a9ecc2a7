from storefront.core.application.skills.catalog.catalog_enricher import CatalogEnricher
from storefront.core.application.skills.catalog.create_category_skill import (
    CreateCategoryInput,
    CreateCategorySkill,
)
from storefront.core.application.skills.catalog.get_product_detail_skill import GetProductDetailSkill
from storefront.core.application.skills.catalog.get_store_page_skill import GetStorePageSkill
from storefront.core.application.skills.catalog.list_categories_skill import ListCategoriesSkill
from storefront.core.application.skills.catalog.search_catalog_skill import SearchCatalogSkill

__all__ = [
    "CatalogEnricher",
    "CreateCategoryInput",
    "CreateCategorySkill",
    "GetProductDetailSkill",
    "GetStorePageSkill",
    "ListCategoriesSkill",
    "SearchCatalogSkill",
]
