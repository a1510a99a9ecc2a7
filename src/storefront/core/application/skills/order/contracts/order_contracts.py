from dataclasses import dataclass
from datetime import datetime

from storefront.core.domain.address import Address
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import Order, OrderLine, OrderStatus


@dataclass(frozen=True)
class OrderLineView:
    line: OrderLine
    product_title: str | None


@dataclass(frozen=True)
class OrderDetail:
    """Receipt view of one order."""

    order: Order
    lines: list[OrderLineView]
    address: Address | None
    return_deadline: datetime
    returnable: bool


@dataclass(frozen=True)
class GetOrderInput:
    principal: Principal | None
    order_id: str


@dataclass(frozen=True)
class TransitionOrderStatusInput:
    principal: Principal | None
    order_id: str
    new_status: OrderStatus
