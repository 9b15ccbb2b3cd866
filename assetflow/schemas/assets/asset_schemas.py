from pydantic import Field, EmailStr, field_validator, model_validator
from typing import List, Optional, Dict
from decimal import Decimal
from datetime import datetime, date

from assetflow.models.enums.asset_type import AssetType
from assetflow.schemas.base_schemas import CamelModel

ACADEMIC_YEAR_PATTERN = r"^\d{4}-\d{2}$"

_TEXT_FIELDS = (
    "vendor_name",
    "vendor_address",
    "contact_number",
    "bill_no",
)


# =====================================================
# ITEM PAYLOADS
# =====================================================

class AssetItemIn(CamelModel):
    item_name: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    price_per_item: Decimal = Field(ge=0)
    # computed server-side, ignored if provided
    total_amount: Optional[Decimal] = None

    vendor_name: str = ""
    vendor_address: str = ""
    contact_number: str = ""
    email: Optional[EmailStr] = None

    bill_no: str = ""
    bill_date: Optional[date] = None
    bill_file_url: Optional[str] = None

    @field_validator("item_name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("email", "bill_file_url", mode="before")
    @classmethod
    def _empty_to_none(cls, value):
        return None if value == "" else value


# =====================================================
# ASSET CREATE / UPDATE
# =====================================================

class AssetCreate(CamelModel):
    type: AssetType
    department_id: int
    subcategory: str = ""
    academic_year: str = Field(pattern=ACADEMIC_YEAR_PATTERN)
    items: List[AssetItemIn] = Field(min_length=1)
    # computed server-side
    grand_total: Optional[Decimal] = None

    @field_validator("subcategory", mode="before")
    @classmethod
    def _strip_subcategory(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class AssetUpdate(CamelModel):
    type: Optional[AssetType] = None
    department_id: Optional[int] = None
    subcategory: Optional[str] = None
    academic_year: Optional[str] = Field(default=None, pattern=ACADEMIC_YEAR_PATTERN)
    items: Optional[List[AssetItemIn]] = Field(default=None, min_length=1)
    grand_total: Optional[Decimal] = None

    @model_validator(mode="after")
    def _require_one_field(self):
        if not (self.model_fields_set - {"grand_total"}):
            raise ValueError("At least one field must be provided")
        return self


# =====================================================
# RESPONSES
# =====================================================

class OfficerOut(CamelModel):
    id: str
    name: str


class AssetItemOut(CamelModel):
    item_index: int
    item_name: str
    quantity: int
    price_per_item: float
    total_amount: float

    vendor_name: str
    vendor_address: str
    contact_number: str
    email: str

    bill_no: str
    bill_date: Optional[date]
    bill_file_url: Optional[str]
    bill_file_id: Optional[int]
    bill_file_name: Optional[str]


class AssetOut(CamelModel):
    id: int
    type: AssetType
    department_id: int
    subcategory: str
    academic_year: str
    officer: OfficerOut
    items: List[AssetItemOut]
    grand_total: float

    created_at: datetime
    updated_at: Optional[datetime]


class AssetCreatedOut(CamelModel):
    success: bool = True
    message: str
    id: int


class AssetTypeSummary(CamelModel):
    count: int
    total_value: float


class AssetSummaryOut(CamelModel):
    success: bool = True
    total_assets: int
    total_value: float
    by_type: Dict[str, AssetTypeSummary]
