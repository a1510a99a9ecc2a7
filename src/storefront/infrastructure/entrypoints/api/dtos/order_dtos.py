from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from storefront.core.domain.order import OrderStatus
from storefront.infrastructure.entrypoints.api.dtos.address_dtos import AddressDTO


class PlaceOrderDTO(BaseModel):
    address_id: str


class OrderDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    address_id: str | None = None
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    created_at: datetime


class OrderLineDTO(BaseModel):
    product_id: str
    product_title: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class PlacedOrderDTO(BaseModel):
    order: OrderDTO
    lines: list[OrderLineDTO]
    cart_cleared: bool


class OrderDetailDTO(BaseModel):
    order: OrderDTO
    lines: list[OrderLineDTO]
    address: AddressDTO | None = None
    return_deadline: datetime
    returnable: bool


class TransitionStatusDTO(BaseModel):
    status: OrderStatus


class ReturnRequestInDTO(BaseModel):
    product_id: str
    reason_code: str
    reason: str
    comments: str = ""


class ReturnRequestDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    product_id: str
    quantity: int
    reason_code: str
    reason: str
    comments: str
    status: str
    requested_at: datetime
