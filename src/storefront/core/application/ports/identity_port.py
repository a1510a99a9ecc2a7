from abc import ABC, abstractmethod

from storefront.core.domain.identity import Principal


class IdentityPort(ABC):
    @abstractmethod
    async def resolve(self, token: str) -> Principal | None:
        """Return the principal behind a bearer token, or ``None`` if it is not valid."""
        pass
