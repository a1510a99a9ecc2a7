from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str = ""

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Category":
        return cls(id=str(row["id"]), name=row["name"], description=row.get("description") or "")
