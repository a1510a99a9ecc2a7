from storefront.core.application.ports.data_store_port import DataStorePort, Row
from storefront.core.application.ports.identity_port import IdentityPort
from storefront.core.application.ports.query import Filter, FilterOp, OrderBy, Query, RowKey
from storefront.core.application.ports.tables import Table

__all__ = [
    "DataStorePort",
    "Filter",
    "FilterOp",
    "IdentityPort",
    "OrderBy",
    "Query",
    "Row",
    "RowKey",
    "Table",
]
