from fastapi import APIRouter, Depends, status

from storefront.core.application.skills.cart import CartItemInput
from storefront.core.domain.identity import Principal
from storefront.infrastructure.entrypoints.api.dtos.cart_dtos import AddCartItemDTO, CartDTO, SetCartQuantityDTO
from storefront.infrastructure.entrypoints.api.mappers import response_mapper
from storefront.infrastructure.entrypoints.api.security import current_principal, get_container
from storefront.infrastructure.resolution.container import StorefrontContainer

router = APIRouter(prefix="/cart", tags=["cart"])


async def _cart(container: StorefrontContainer, principal: Principal | None) -> CartDTO:
    return response_mapper.cart_dto(await container.view_cart.execute(principal))


@router.get("", response_model=CartDTO)
async def view_cart(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    return await _cart(container, principal)


@router.post("/items", response_model=CartDTO, status_code=status.HTTP_201_CREATED)
async def add_item(
    body: AddCartItemDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    await container.add_to_cart.execute(
        CartItemInput(principal=principal, product_id=body.product_id, quantity=body.quantity)
    )
    return await _cart(container, principal)


@router.put("/items/{product_id}", response_model=CartDTO)
async def set_quantity(
    product_id: str,
    body: SetCartQuantityDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    await container.set_cart_quantity.execute(
        CartItemInput(principal=principal, product_id=product_id, quantity=body.quantity)
    )
    return await _cart(container, principal)


@router.delete("/items/{product_id}", response_model=CartDTO)
async def remove_item(
    product_id: str,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    await container.remove_from_cart.execute(CartItemInput(principal=principal, product_id=product_id))
    return await _cart(container, principal)
