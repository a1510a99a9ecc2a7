from storefront.core.domain.order.entities import Order, OrderLine
from storefront.core.domain.order.value_objects import (
    DEFAULT_RETURN_WINDOW_DAYS,
    OrderStatus,
    ReturnWindow,
)

__all__ = ["DEFAULT_RETURN_WINDOW_DAYS", "Order", "OrderLine", "OrderStatus", "ReturnWindow"]
