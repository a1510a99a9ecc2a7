from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from storefront.core.domain.catalog.value_objects.product_state import ProductState
from storefront.core.domain.review.rating_summary import RatingSummary
from storefront.core.domain.shared import parse_datetime, to_money


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    description: str
    price: Decimal
    stock: int
    state: ProductState
    seller_id: str
    category_id: str | None
    image_url: str | None = None
    created_at: datetime | None = None
    rating_sum: int = 0
    rating_count: int = 0

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Product":
        created = row.get("created_at")
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            description=row.get("description") or "",
            price=to_money(row.get("price")),
            stock=int(row.get("stock") or 0),
            state=ProductState(row.get("state") or ProductState.ACTIVE),
            seller_id=str(row["seller_id"]),
            category_id=row.get("category_id"),
            image_url=row.get("image_url"),
            created_at=parse_datetime(created) if created else None,
            rating_sum=int(row.get("rating_sum") or 0),
            rating_count=int(row.get("rating_count") or 0),
        )

    @property
    def is_active(self) -> bool:
        return self.state == ProductState.ACTIVE

    @property
    def cached_rating(self) -> RatingSummary:
        return RatingSummary(count=self.rating_count, total=self.rating_sum)
