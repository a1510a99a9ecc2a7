from storefront.core.domain.order.entities.order import Order
from storefront.core.domain.order.entities.order_line import OrderLine

__all__ = ["Order", "OrderLine"]
