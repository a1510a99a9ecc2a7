from storefront.core.exceptions.configuration_error import ConfigurationError
from storefront.core.exceptions.data_store_error import (
    DataStoreError,
    StorageUnavailableError,
    UniqueViolationError,
)

__all__ = [
    "ConfigurationError",
    "DataStoreError",
    "StorageUnavailableError",
    "UniqueViolationError",
]
