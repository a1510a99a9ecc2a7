from storefront.core.domain.store.store import Store

__all__ = ["Store"]
