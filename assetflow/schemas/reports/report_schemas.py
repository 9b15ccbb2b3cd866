from pydantic import Field
from typing import List, Optional, Union
from datetime import date

from assetflow.models.enums.asset_type import AssetType
from assetflow.schemas.base_schemas import CamelModel


class ReportRowOut(CamelModel):
    asset_id: int
    item_index: int
    type: AssetType
    department_id: int
    academic_year: str
    item_name: str
    vendor_name: str
    quantity: int
    price_per_item: float
    total_amount: float
    bill_no: str
    bill_date: Optional[date]


class ReportGroupOut(CamelModel):
    group: str
    group_key: Optional[Union[int, str]]
    count: int
    subtotal: float
    percentage: float
    rows: List[ReportRowOut] = Field(default_factory=list)


class ReportOut(CamelModel):
    success: bool = True
    group_by: str
    data: List[ReportGroupOut]
    grand_total: float
