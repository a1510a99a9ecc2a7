from storefront.core.domain.order.value_objects.order_status import OrderStatus
from storefront.core.domain.order.value_objects.return_window import (
    DEFAULT_RETURN_WINDOW_DAYS,
    ReturnWindow,
)

__all__ = ["DEFAULT_RETURN_WINDOW_DAYS", "OrderStatus", "ReturnWindow"]
