from storefront.core.domain.address.address import DEFAULT_COUNTRY, Address

__all__ = ["DEFAULT_COUNTRY", "Address"]
