from sqlalchemy import Column, Integer, String, Text
from assetflow.core.db import Base
from assetflow.models.base.mixins import CreatedAtMixin


class Vendor(Base, CreatedAtMixin):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    # stored lowercased
    email = Column(String(255), nullable=False, unique=True, index=True)
    contact_number = Column(String(30), nullable=False, default="")
    address = Column(Text, nullable=False, default="")

    def __repr__(self):
        return f"<Vendor id={self.id} name={self.name} email={self.email}>"
