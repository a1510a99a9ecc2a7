from storefront.core.domain.returns.return_reason import ReturnReason, ReturnStatus
from storefront.core.domain.returns.return_request import ReturnRequest

__all__ = ["ReturnReason", "ReturnRequest", "ReturnStatus"]
