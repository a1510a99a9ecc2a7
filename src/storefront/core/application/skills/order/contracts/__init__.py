from storefront.core.application.skills.order.contracts.order_contracts import (
    GetOrderInput,
    OrderDetail,
    OrderLineView,
    TransitionOrderStatusInput,
)

__all__ = ["GetOrderInput", "OrderDetail", "OrderLineView", "TransitionOrderStatusInput"]
