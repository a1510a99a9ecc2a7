from dataclasses import dataclass

from storefront.core.domain.catalog.value_objects.catalog_sort import CatalogSort
from storefront.core.domain.catalog.value_objects.price_band import PriceBand


@dataclass(frozen=True)
class CatalogQuery:
    category_id: str | None = None
    price_band: PriceBand | None = None
    text: str | None = None
    sort: CatalogSort = CatalogSort.NEWEST
    include_inactive: bool = False
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.text is not None:
            object.__setattr__(self, "text", self.text.strip() or None)
        if self.limit is not None and self.limit <= 0:
            raise ValueError("limit must be positive")
