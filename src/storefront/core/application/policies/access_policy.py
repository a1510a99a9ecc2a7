from enum import StrEnum

from storefront.core.application.exceptions import AuthenticationError, AuthorizationError
from storefront.core.domain.identity import Principal, Role


class Capability(StrEnum):
    SHOP = "shop"
    SELL = "sell"
    ADMINISTER = "administer"


def capabilities_of(role: Role) -> frozenset[Capability]:
    match role:
        case Role.ADMIN:
            return frozenset({Capability.SHOP, Capability.ADMINISTER})
        case Role.VENDOR:
            return frozenset({Capability.SHOP, Capability.SELL})
        case Role.CUSTOMER:
            return frozenset({Capability.SHOP})


class AccessPolicy:
    """Single place where roles are turned into allow/deny decisions."""

    @staticmethod
    def require(principal: Principal | None, capability: Capability) -> Principal:
        if principal is None:
            raise AuthenticationError("Authentication required.")
        if capability not in capabilities_of(principal.role):
            raise AuthorizationError(
                f"Role '{principal.role.value}' cannot {capability.value}.",
                context={"user_id": principal.user_id, "capability": capability.value},
            )
        return principal

    @staticmethod
    def ensure_owner(principal: Principal, owner_id: str, resource: str) -> None:
        """Owners and admins pass; everyone else is rejected."""
        if principal.user_id == owner_id:
            return
        if Capability.ADMINISTER in capabilities_of(principal.role):
            return
        raise AuthorizationError(
            f"You do not have permission to modify this {resource}.",
            context={"user_id": principal.user_id, "resource": resource},
        )
