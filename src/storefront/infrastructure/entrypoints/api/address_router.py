from fastapi import APIRouter, Depends, status

from storefront.core.application.skills.address import SaveAddressInput, SetPrincipalAddressInput
from storefront.core.domain.identity import Principal
from storefront.infrastructure.entrypoints.api.dtos.address_dtos import AddressDTO, AddressInDTO
from storefront.infrastructure.entrypoints.api.security import current_principal, get_container
from storefront.infrastructure.resolution.container import StorefrontContainer

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("", response_model=list[AddressDTO])
async def list_addresses(
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    return [AddressDTO.model_validate(a) for a in await container.list_addresses.execute(principal)]


@router.post("", response_model=AddressDTO, status_code=status.HTTP_201_CREATED)
async def save_address(
    body: AddressInDTO,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    address = await container.save_address.execute(SaveAddressInput(principal=principal, **body.model_dump()))
    return AddressDTO.model_validate(address)


@router.put("/{address_id}/principal", response_model=AddressDTO)
async def set_principal(
    address_id: str,
    principal: Principal | None = Depends(current_principal),
    container: StorefrontContainer = Depends(get_container),
):
    address = await container.set_principal_address.execute(
        SetPrincipalAddressInput(principal=principal, address_id=address_id)
    )
    return AddressDTO.model_validate(address)
