from sqlalchemy import Column, Integer, String, Enum
from assetflow.core.db import Base
from assetflow.models.base.mixins import TimestampMixin
from assetflow.models.enums.department_type import DepartmentType


class Department(Base, TimestampMixin):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, unique=True, index=True)
    type = Column(Enum(DepartmentType), nullable=False)

    def __repr__(self):
        return f"<Department id={self.id} name={self.name} type={self.type}>"
