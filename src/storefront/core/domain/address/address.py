from dataclasses import dataclass
from typing import Any

DEFAULT_COUNTRY = "Colombia"


@dataclass(frozen=True)
class Address:
    id: str
    user_id: str
    full_name: str
    phone: str
    street: str
    city: str
    department: str = ""
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY
    delivery_instructions: str = ""
    reference: str = ""
    alias: str = ""
    is_principal: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Address":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            full_name=row.get("full_name") or "",
            phone=row.get("phone") or "",
            street=row.get("street") or "",
            city=row.get("city") or "",
            department=row.get("department") or "",
            postal_code=row.get("postal_code") or "",
            country=row.get("country") or DEFAULT_COUNTRY,
            delivery_instructions=row.get("delivery_instructions") or "",
            reference=row.get("reference") or "",
            alias=row.get("alias") or "",
            is_principal=bool(row.get("is_principal")),
        )
