from storefront.core.application.skills.address.list_addresses_skill import ListAddressesSkill
from storefront.core.application.skills.address.save_address_skill import SaveAddressInput, SaveAddressSkill
from storefront.core.application.skills.address.set_principal_address_skill import (
    SetPrincipalAddressInput,
    SetPrincipalAddressSkill,
)

__all__ = [
    "ListAddressesSkill",
    "SaveAddressInput",
    "SaveAddressSkill",
    "SetPrincipalAddressInput",
    "SetPrincipalAddressSkill",
]
