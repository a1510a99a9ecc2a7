from enum import StrEnum


class Role(StrEnum):
    ADMIN = "admin"
    VENDOR = "vendor"
    CUSTOMER = "customer"

    @classmethod
    def parse(cls, raw: str | None) -> "Role":
        """Map a stored profile role to the closed set; unknown values degrade to CUSTOMER."""
        if not raw:
            return cls.CUSTOMER
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.CUSTOMER
