from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CartLine:
    id: str
    user_id: str
    product_id: str
    quantity: int

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CartLine":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            product_id=str(row["product_id"]),
            quantity=int(row["quantity"]),
        )
