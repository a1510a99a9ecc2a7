from decimal import Decimal

from pydantic import BaseModel, Field

from storefront.core.domain.catalog import ProductState
from storefront.infrastructure.entrypoints.api.dtos.order_dtos import OrderDTO, OrderLineDTO


class CreateProductDTO(BaseModel):
    title: str
    description: str = ""
    price: Decimal
    stock: int = Field(default=0)
    category_id: str | None = None
    image_url: str | None = None
    state: ProductState = ProductState.ACTIVE


class UpdateProductDTO(BaseModel):
    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category_id: str | None = None
    image_url: str | None = None
    state: ProductState | None = None


class StoreSettingsDTO(BaseModel):
    name: str
    description: str = ""
    logo_url: str | None = None


class SellerDashboardDTO(BaseModel):
    seller_id: str
    product_count: int
    order_count: int
    revenue: Decimal
    review_count: int
    average_rating: float | None = None


class SellerOrderDTO(BaseModel):
    order: OrderDTO
    buyer_name: str | None = None
    buyer_email: str | None = None
    lines: list[OrderLineDTO]
