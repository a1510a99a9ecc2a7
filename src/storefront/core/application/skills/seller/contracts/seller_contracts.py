from dataclasses import dataclass, field
from decimal import Decimal

from storefront.core.application.skills.order.contracts import OrderLineView
from storefront.core.domain.catalog import ProductState
from storefront.core.domain.identity import Principal
from storefront.core.domain.order import Order


@dataclass(frozen=True)
class CreateProductInput:
    principal: Principal | None
    title: str
    price: Decimal
    stock: int
    category_id: str | None = None
    description: str = ""
    image_url: str | None = None
    state: ProductState = ProductState.ACTIVE


@dataclass(frozen=True)
class UpdateProductInput:
    """Partial patch; ``None`` leaves a field untouched."""

    principal: Principal | None
    product_id: str
    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category_id: str | None = None
    image_url: str | None = None
    state: ProductState | None = None


@dataclass(frozen=True)
class DeleteProductInput:
    principal: Principal | None
    product_id: str


@dataclass(frozen=True)
class SaveStoreSettingsInput:
    principal: Principal | None
    name: str
    description: str = ""
    logo_url: str | None = None


@dataclass(frozen=True)
class SellerDashboardInput:
    principal: Principal | None
    seller_id: str | None = None


@dataclass(frozen=True)
class SellerDashboard:
    seller_id: str
    product_count: int = 0
    order_count: int = 0
    revenue: Decimal = Decimal("0.00")
    review_count: int = 0
    average_rating: float | None = None


@dataclass(frozen=True)
class SellerOrderView:
    """An order as seen by one seller: only the lines for that seller's products."""

    order: Order
    buyer_name: str | None
    buyer_email: str | None
    lines: list[OrderLineView] = field(default_factory=list)
