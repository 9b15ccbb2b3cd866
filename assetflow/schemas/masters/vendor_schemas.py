from pydantic import EmailStr, Field, field_validator
from datetime import datetime

from assetflow.schemas.base_schemas import CamelModel


class VendorBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    contact_number: str = ""
    address: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("contact_number", "address", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class VendorCreate(VendorBase):
    pass


class VendorUpdate(VendorBase):
    pass


class VendorOut(VendorBase):
    id: int
    created_at: datetime
