from storefront.core.application.skills.order.contracts import (
    GetOrderInput,
    OrderDetail,
    OrderLineView,
    TransitionOrderStatusInput,
)
from storefront.core.application.skills.order.get_order_skill import GetOrderSkill
from storefront.core.application.skills.order.list_orders_skill import ListOrdersSkill
from storefront.core.application.skills.order.transition_order_status_skill import TransitionOrderStatusSkill

__all__ = [
    "GetOrderInput",
    "GetOrderSkill",
    "ListOrdersSkill",
    "OrderDetail",
    "OrderLineView",
    "TransitionOrderStatusInput",
    "TransitionOrderStatusSkill",
]
