from storefront.core.application.exceptions.storefront_exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    PartialWriteError,
    StorageFailureError,
    StorefrontError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "InsufficientStockError",
    "NotFoundError",
    "PartialWriteError",
    "StorageFailureError",
    "StorefrontError",
    "ValidationError",
]
