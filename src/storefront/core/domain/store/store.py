from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Store:
    """A vendor's public storefront page."""

    id: str
    seller_id: str
    name: str
    description: str = ""
    logo_url: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Store":
        return cls(
            id=str(row["id"]),
            seller_id=str(row["seller_id"]),
            name=row.get("name") or "",
            description=row.get("description") or "",
            logo_url=row.get("logo_url"),
        )
