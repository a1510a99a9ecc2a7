"""Read models returned by the catalog skills."""

from dataclasses import dataclass, field
from datetime import datetime

from storefront.core.domain.catalog import Category, Product
from storefront.core.domain.review import RatingSummary
from storefront.core.domain.store import Store


@dataclass(frozen=True)
class CatalogEntry:
    product: Product
    seller_name: str | None
    rating: RatingSummary


@dataclass(frozen=True)
class ReviewView:
    id: str
    rating: int
    comment: str
    reviewer_name: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class ProductDetail:
    product: Product
    category: Category | None
    seller_name: str | None
    rating: RatingSummary
    reviews: list[ReviewView] = field(default_factory=list)


@dataclass(frozen=True)
class StorePage:
    store: Store
    seller_name: str | None
    products: list[CatalogEntry] = field(default_factory=list)
