from dataclasses import dataclass
from datetime import datetime
from typing import Any

from storefront.core.domain.returns.return_reason import ReturnReason, ReturnStatus
from storefront.core.domain.shared import parse_datetime


@dataclass(frozen=True)
class ReturnRequest:
    id: str
    order_id: str
    product_id: str
    quantity: int
    reason_code: ReturnReason
    reason: str
    comments: str
    status: ReturnStatus
    requested_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ReturnRequest":
        return cls(
            id=str(row["id"]),
            order_id=str(row["order_id"]),
            product_id=str(row["product_id"]),
            quantity=int(row["quantity"]),
            reason_code=ReturnReason(row["reason_code"]),
            reason=row.get("reason") or "",
            comments=row.get("comments") or "",
            status=ReturnStatus(row.get("status") or ReturnStatus.PENDING),
            requested_at=parse_datetime(row["requested_at"]),
        )
