from storefront.infrastructure.drivers.identity.gotrue_identity import GoTrueIdentity
from storefront.infrastructure.drivers.identity.static_token_identity import StaticTokenIdentity

__all__ = ["GoTrueIdentity", "StaticTokenIdentity"]
