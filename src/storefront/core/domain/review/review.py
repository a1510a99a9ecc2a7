from dataclasses import dataclass
from datetime import datetime
from typing import Any

from storefront.core.domain.shared import parse_datetime

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    id: str
    product_id: str
    user_id: str
    rating: int
    comment: str
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Review":
        created = row.get("created_at")
        return cls(
            id=str(row["id"]),
            product_id=str(row["product_id"]),
            user_id=str(row["user_id"]),
            rating=int(row["rating"]),
            comment=row.get("comment") or "",
            created_at=parse_datetime(created) if created else None,
        )
