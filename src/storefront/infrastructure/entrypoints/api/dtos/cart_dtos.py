from decimal import Decimal

from pydantic import BaseModel, Field


class AddCartItemDTO(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class SetCartQuantityDTO(BaseModel):
    quantity: int = Field(ge=0)


class CartLineDTO(BaseModel):
    product_id: str
    title: str
    image_url: str | None = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class CartDTO(BaseModel):
    lines: list[CartLineDTO] = []
    unavailable_product_ids: list[str] = []
    item_count: int = 0
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
