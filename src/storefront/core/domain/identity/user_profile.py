from dataclasses import dataclass
from typing import Any

from storefront.core.domain.identity.role import Role


@dataclass(frozen=True)
class UserProfile:
    id: str
    name: str
    email: str
    role: Role

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserProfile":
        email = row.get("email") or ""
        return cls(
            id=str(row["id"]),
            name=row.get("name") or email.split("@")[0],
            email=email,
            role=Role.parse(row.get("role")),
        )
