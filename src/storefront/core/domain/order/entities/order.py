from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from storefront.core.domain.order.value_objects.order_status import OrderStatus
from storefront.core.domain.shared import parse_datetime, to_money


@dataclass(frozen=True)
class Order:
    id: str
    user_id: str
    address_id: str | None
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    status: OrderStatus
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Order":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            address_id=row.get("address_id"),
            subtotal=to_money(row.get("subtotal")),
            tax=to_money(row.get("tax")),
            shipping=to_money(row.get("shipping")),
            total=to_money(row.get("total")),
            status=OrderStatus(row["status"]),
            created_at=parse_datetime(row["created_at"]),
        )
