from storefront.core.domain.identity.principal import Principal
from storefront.core.domain.identity.role import Role
from storefront.core.domain.identity.user_profile import UserProfile

__all__ = ["Principal", "Role", "UserProfile"]
