"""Storefront exception hierarchy.

Every skill and workflow raises from this tree so the HTTP layer can map
failures to status codes without string-matching. Two families matter to
callers:

* input/permission problems (not found, validation, authorization,
  conflict) are raised before any mutation, so nothing happened;
* storage problems, where ``PartialWriteError`` means a multi-step write
  could neither confirm completion nor roll back.
"""

from typing import Any


class StorefrontError(Exception):
    """Base exception for all application-layer errors."""

    code = "storefront_error"

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}


class NotFoundError(StorefrontError):
    """A referenced entity (order, product, store, address) does not exist."""

    code = "not_found"


class ValidationError(StorefrontError):
    """A required field is missing or invalid; raised before any write."""

    code = "validation_error"


class InsufficientStockError(ValidationError):
    code = "insufficient_stock"


class AuthenticationError(StorefrontError):
    code = "unauthenticated"


class AuthorizationError(StorefrontError):
    """The principal lacks the role or ownership the operation requires."""

    code = "forbidden"


class ConflictError(StorefrontError):
    """The write would duplicate a row protected by a uniqueness rule."""

    code = "conflict"


class StorageFailureError(StorefrontError):
    """The data service failed and retries were exhausted; nothing was written."""

    code = "storage_unavailable"


class PartialWriteError(StorefrontError):
    """A multi-step write failed partway and could not be rolled back cleanly."""

    code = "partial_write"
