from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from storefront.core.domain.shared import to_money


@dataclass(frozen=True)
class OrderLine:
    """One product/quantity/price entry of an order; the price is the purchase-time snapshot."""

    id: str
    order_id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "OrderLine":
        unit_price = to_money(row["unit_price"])
        quantity = int(row["quantity"])
        line_total = row.get("line_total")
        return cls(
            id=str(row["id"]),
            order_id=str(row["order_id"]),
            product_id=str(row["product_id"]),
            quantity=quantity,
            unit_price=unit_price,
            line_total=to_money(line_total) if line_total is not None else to_money(unit_price * quantity),
        )
