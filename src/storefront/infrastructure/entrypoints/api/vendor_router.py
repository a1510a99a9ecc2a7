from fastapi import APIRouter, Depends

from storefront.core.application.skills.seller import SaveStoreSettingsInput, SellerDashboardInput
from storefront.core.domain.identity import Principal
from storefront.infrastructure.entrypoints.api.dtos.catalog_dtos import ProductDTO, StoreDTO, StorePageDTO
from storefront.infrastructure.entrypoints.api.dtos.seller_dtos import (
    SellerDashboardDTO,
    SellerOrderDTO,
    StoreSettingsDTO,
)
from storefront.infrastructure.entrypoints.api.mappers import response_mapper
from storefront.infrastructure.entrypoints.api.security import current_principal, get_container
from storefront.infrastructure.resolution.container import StorefrontContainer

router = APIRouter(tags=["vendor"])


@router.get("/stores/{store_id}", response_model=StorePageDTO)
async def store_page(store_id: str, container: StorefrontContainer = Depends(get_container)):
    return response_mapper.store_page_dto(await container.store_page.execute(store_id))


@router.put("/vendor/store", response_model=StoreDTO)
async def save_store_settings(
    body: StoreSettingsDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    store = await container.save_store_settings.execute(SaveStoreSettingsInput(principal=principal, **body.model_dump()))
    return StoreDTO.model_validate(store)


@router.get("/vendor/products", response_model=list[ProductDTO])
async def vendor_products(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    return [response_mapper.product_dto(p) for p in await container.list_seller_products.execute(principal)]


@router.get("/vendor/orders", response_model=list[SellerOrderDTO])
async def vendor_orders(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    return [response_mapper.seller_order_dto(v) for v in await container.list_seller_orders.execute(principal)]


@router.get("/vendor/dashboard", response_model=SellerDashboardDTO)
async def vendor_dashboard(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    dashboard = await container.seller_dashboard.execute(SellerDashboardInput(principal=principal))
    return response_mapper.seller_dashboard_dto(dashboard)


@router.get("/admin/sellers/{seller_id}/dashboard", response_model=SellerDashboardDTO)
async def admin_seller_dashboard(
    seller_id: str,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    dashboard = await container.seller_dashboard.execute(SellerDashboardInput(principal=principal, seller_id=seller_id))
    return response_mapper.seller_dashboard_dto(dashboard)
