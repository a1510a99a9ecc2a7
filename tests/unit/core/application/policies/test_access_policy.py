import pytest

from storefront.core.application.exceptions import AuthenticationError, AuthorizationError
from storefront.core.application.policies import AccessPolicy, Capability, capabilities_of
from storefront.core.domain.identity import Role


class TestCapabilities:
    def test_every_role_can_shop(self):
        for role in Role:
            assert Capability.SHOP in capabilities_of(role)

    def test_only_vendor_sells(self):
        assert [r for r in Role if Capability.SELL in capabilities_of(r)] == [Role.VENDOR]

    def test_only_admin_administers(self):
        assert [r for r in Role if Capability.ADMINISTER in capabilities_of(r)] == [Role.ADMIN]


class TestAccessPolicy:
    def test_anonymous_is_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            AccessPolicy.require(None, Capability.SHOP)

    def test_customer_cannot_sell(self, customer):
        with pytest.raises(AuthorizationError):
            AccessPolicy.require(customer, Capability.SELL)

    def test_require_returns_principal(self, vendor):
        assert AccessPolicy.require(vendor, Capability.SELL) is vendor

    def test_owner_and_admin_pass_ownership(self, vendor, admin):
        AccessPolicy.ensure_owner(vendor, vendor.user_id, "product")
        AccessPolicy.ensure_owner(admin, vendor.user_id, "product")

    def test_other_vendor_fails_ownership(self, other_vendor, vendor):
        with pytest.raises(AuthorizationError):
            AccessPolicy.ensure_owner(other_vendor, vendor.user_id, "product")
