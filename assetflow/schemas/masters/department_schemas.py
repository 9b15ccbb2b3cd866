from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from assetflow.models.enums.department_type import DepartmentType
from assetflow.schemas.base_schemas import CamelModel


class DepartmentBase(CamelModel):
    name: str = Field(min_length=2, max_length=200)
    type: DepartmentType

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(DepartmentBase):
    pass


class DepartmentOut(DepartmentBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime]
