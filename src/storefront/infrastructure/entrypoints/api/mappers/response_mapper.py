"""Domain objects and skill read models -> response DTOs."""

from storefront.core.application.skills.catalog.contracts import CatalogEntry, ProductDetail, StorePage
from storefront.core.application.skills.order.contracts import OrderDetail, OrderLineView
from storefront.core.application.skills.seller.contracts import SellerDashboard, SellerOrderView
from storefront.core.application.workflows.checkout import PlacedOrder
from storefront.core.domain.cart import CartSummary
from storefront.core.domain.catalog import Product
from storefront.core.domain.order import OrderLine
from storefront.core.domain.review import RatingSummary
from storefront.infrastructure.entrypoints.api.dtos.address_dtos import AddressDTO
from storefront.infrastructure.entrypoints.api.dtos.cart_dtos import CartDTO, CartLineDTO
from storefront.infrastructure.entrypoints.api.dtos.catalog_dtos import (
    CatalogEntryDTO,
    CategoryDTO,
    ProductDetailDTO,
    ProductDTO,
    RatingDTO,
    ReviewDTO,
    StoreDTO,
    StorePageDTO,
)
from storefront.infrastructure.entrypoints.api.dtos.order_dtos import (
    OrderDetailDTO,
    OrderDTO,
    OrderLineDTO,
    PlacedOrderDTO,
)
from storefront.infrastructure.entrypoints.api.dtos.seller_dtos import SellerDashboardDTO, SellerOrderDTO


def rating_dto(rating: RatingSummary) -> RatingDTO:
    return RatingDTO(average=rating.average, count=rating.count)


def product_dto(product: Product) -> ProductDTO:
    return ProductDTO.model_validate(product)


def catalog_entry_dto(entry: CatalogEntry) -> CatalogEntryDTO:
    return CatalogEntryDTO(
        **product_dto(entry.product).model_dump(),
        seller_name=entry.seller_name,
        rating=rating_dto(entry.rating),
    )


def product_detail_dto(detail: ProductDetail) -> ProductDetailDTO:
    return ProductDetailDTO(
        product=product_dto(detail.product),
        category=CategoryDTO.model_validate(detail.category) if detail.category else None,
        seller_name=detail.seller_name,
        rating=rating_dto(detail.rating),
        reviews=[ReviewDTO.model_validate(r) for r in detail.reviews],
    )


def store_page_dto(page: StorePage) -> StorePageDTO:
    return StorePageDTO(
        store=StoreDTO.model_validate(page.store),
        seller_name=page.seller_name,
        products=[catalog_entry_dto(e) for e in page.products],
    )


def cart_dto(summary: CartSummary) -> CartDTO:
    return CartDTO(
        lines=[
            CartLineDTO(
                product_id=p.product.id,
                title=p.product.title,
                image_url=p.product.image_url,
                quantity=p.line.quantity,
                unit_price=p.unit_price,
                line_total=p.line_total,
            )
            for p in summary.lines
        ],
        unavailable_product_ids=[line.product_id for line in summary.unavailable],
        item_count=summary.item_count,
        subtotal=summary.subtotal,
        tax=summary.tax,
        shipping=summary.shipping,
        total=summary.total,
    )


def order_line_dto(line: OrderLine, title: str | None = None) -> OrderLineDTO:
    return OrderLineDTO(
        product_id=line.product_id,
        product_title=title,
        quantity=line.quantity,
        unit_price=line.unit_price,
        line_total=line.line_total,
    )


def _line_views(views: list[OrderLineView]) -> list[OrderLineDTO]:
    return [order_line_dto(v.line, v.product_title) for v in views]


def placed_order_dto(placed: PlacedOrder) -> PlacedOrderDTO:
    return PlacedOrderDTO(
        order=OrderDTO.model_validate(placed.order),
        lines=[order_line_dto(line) for line in placed.lines],
        cart_cleared=placed.cart_cleared,
    )


def order_detail_dto(detail: OrderDetail) -> OrderDetailDTO:
    return OrderDetailDTO(
        order=OrderDTO.model_validate(detail.order),
        lines=_line_views(detail.lines),
        address=AddressDTO.model_validate(detail.address) if detail.address else None,
        return_deadline=detail.return_deadline,
        returnable=detail.returnable,
    )


def seller_dashboard_dto(dashboard: SellerDashboard) -> SellerDashboardDTO:
    return SellerDashboardDTO(
        seller_id=dashboard.seller_id,
        product_count=dashboard.product_count,
        order_count=dashboard.order_count,
        revenue=dashboard.revenue,
        review_count=dashboard.review_count,
        average_rating=dashboard.average_rating,
    )


def seller_order_dto(view: SellerOrderView) -> SellerOrderDTO:
    return SellerOrderDTO(
        order=OrderDTO.model_validate(view.order),
        buyer_name=view.buyer_name,
        buyer_email=view.buyer_email,
        lines=_line_views(view.lines),
    )
