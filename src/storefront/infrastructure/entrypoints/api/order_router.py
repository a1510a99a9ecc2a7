from fastapi import APIRouter, Depends, status

from storefront.core.application.skills.order import GetOrderInput, TransitionOrderStatusInput
from storefront.core.application.workflows.checkout import PlaceOrderInput
from storefront.core.application.workflows.returns import RequestReturnInput
from storefront.core.domain.identity import Principal
from storefront.infrastructure.entrypoints.api.dtos.order_dtos import (
    OrderDetailDTO,
    OrderDTO,
    PlacedOrderDTO,
    PlaceOrderDTO,
    ReturnRequestDTO,
    ReturnRequestInDTO,
    TransitionStatusDTO,
)
from storefront.infrastructure.entrypoints.api.mappers import response_mapper
from storefront.infrastructure.entrypoints.api.security import current_principal, get_container
from storefront.infrastructure.resolution.container import StorefrontContainer

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderDTO])
async def list_orders(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    return [OrderDTO.model_validate(o) for o in await container.list_orders.execute(principal)]


@router.post("", response_model=PlacedOrderDTO, status_code=status.HTTP_201_CREATED)
async def place_order(
    body: PlaceOrderDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    placed = await container.place_order.execute(PlaceOrderInput(principal=principal, address_id=body.address_id))
    return response_mapper.placed_order_dto(placed)


@router.get("/{order_id}", response_model=OrderDetailDTO)
async def get_order(
    order_id: str,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    detail = await container.get_order.execute(GetOrderInput(principal=principal, order_id=order_id))
    return response_mapper.order_detail_dto(detail)


@router.patch("/{order_id}/status", response_model=OrderDTO)
async def transition_status(
    order_id: str,
    body: TransitionStatusDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    order = await container.transition_order_status.execute(
        TransitionOrderStatusInput(principal=principal, order_id=order_id, new_status=body.status)
    )
    return OrderDTO.model_validate(order)


@router.post("/{order_id}/returns", response_model=ReturnRequestDTO, status_code=status.HTTP_201_CREATED)
async def request_return(
    order_id: str,
    body: ReturnRequestInDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    request = await container.request_return.execute(
        RequestReturnInput(principal=principal, order_id=order_id, **body.model_dump())
    )
    return ReturnRequestDTO.model_validate(request)
