from pydantic import BaseModel, ConfigDict, Field


class AddressInDTO(BaseModel):
    full_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    department: str = ""
    postal_code: str = ""
    country: str = "Colombia"
    delivery_instructions: str = ""
    reference: str = ""
    alias: str = ""
    is_principal: bool = False


class AddressDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    phone: str
    street: str
    city: str
    department: str
    postal_code: str
    country: str
    delivery_instructions: str
    reference: str
    alias: str
    is_principal: bool
