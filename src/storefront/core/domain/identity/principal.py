from dataclasses import dataclass

from storefront.core.domain.identity.role import Role


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, resolved once per request."""

    user_id: str
    email: str
    role: Role = Role.CUSTOMER
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.email.split("@")[0]
