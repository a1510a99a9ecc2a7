from dataclasses import dataclass

import structlog

from storefront.core.application.exceptions import ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.address import DEFAULT_COUNTRY, Address
from storefront.core.domain.identity import Principal

logger = structlog.get_logger()

_REQUIRED_FIELDS = ("full_name", "phone", "street", "city")


@dataclass(frozen=True)
class SaveAddressInput:
    principal: Principal | None
    full_name: str
    phone: str
    street: str
    city: str
    department: str = ""
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY
    delivery_instructions: str = ""
    reference: str = ""
    alias: str = ""
    is_principal: bool = False


class SaveAddressSkill(BaseSkill[SaveAddressInput, Address]):
    """Stores a shipping address; the caller's first address becomes the principal one."""

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: SaveAddressInput) -> Address:
        principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
        missing = [name for name in _REQUIRED_FIELDS if not getattr(input_data, name).strip()]
        if missing:
            raise ValidationError(
                f"Missing required address fields: {', '.join(missing)}.", context={"missing": missing}
            )

        existing = await self._store.select(
            Table.ADDRESSES, Query.where(Filter.eq("user_id", principal.user_id), limit=1)
        )
        make_principal = input_data.is_principal or not existing
        if make_principal and existing:
            await self._store.update(
                Table.ADDRESSES,
                (Filter.eq("user_id", principal.user_id), Filter.eq("is_principal", True)),
                {"is_principal": False},
            )

        row = await self._store.insert(
            Table.ADDRESSES,
            {
                "user_id": principal.user_id,
                "full_name": input_data.full_name.strip(),
                "phone": input_data.phone.strip(),
                "street": input_data.street.strip(),
                "city": input_data.city.strip(),
                "department": input_data.department.strip(),
                "postal_code": input_data.postal_code.strip(),
                "country": input_data.country.strip() or DEFAULT_COUNTRY,
                "delivery_instructions": input_data.delivery_instructions.strip(),
                "reference": input_data.reference.strip(),
                "alias": input_data.alias.strip(),
                "is_principal": make_principal,
            },
        )
        logger.info("Address saved", address_id=row["id"], is_principal=make_principal)
        return Address.from_row(row)
