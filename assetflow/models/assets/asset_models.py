from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    Numeric,
    Enum,
    Date,
    Index,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from assetflow.core.db import Base
from assetflow.models.base.mixins import TimestampMixin
from assetflow.models.enums.asset_type import AssetType


class Asset(Base, TimestampMixin):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True)
    type = Column(Enum(AssetType), nullable=False, index=True)
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)
    subcategory = Column(String(255), nullable=False, default="")
    academic_year = Column(String(7), nullable=False, index=True)

    # snapshot of the submitting user, not a live reference
    officer_id = Column(String(64), nullable=False, default="")
    officer_name = Column(String(255), nullable=False, default="")

    grand_total = Column(Numeric(14, 2), nullable=False, default=Decimal("0.00"))

    items = relationship(
        "AssetItem",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="AssetItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_asset_type_department", "type", "department_id"),
        CheckConstraint("grand_total >= 0", name="ck_asset_grand_total_non_negative"),
    )

    def __repr__(self):
        return f"<Asset id={self.id} type={self.type} grand_total={self.grand_total}>"


class AssetItem(Base):
    __tablename__ = "asset_items"

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    item_name = Column(String(255), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    # unrounded; only totals are quantized
    price_per_item = Column(Numeric(14, 4), nullable=False)
    total_amount = Column(Numeric(14, 2), nullable=False)

    vendor_name = Column(String(255), nullable=False, default="", index=True)
    vendor_address = Column(Text, nullable=False, default="")
    contact_number = Column(String(30), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")

    bill_no = Column(String(100), nullable=False, default="")
    bill_date = Column(Date, nullable=True)

    bill_file_url = Column(String(1024), nullable=True)
    bill_file_id = Column(Integer, ForeignKey("uploads.id", ondelete="SET NULL"), nullable=True)
    bill_file_name = Column(String(255), nullable=True)

    asset = relationship("Asset", back_populates="items")

    __table_args__ = (
        UniqueConstraint("asset_id", "position", name="uq_asset_item_position"),
        CheckConstraint("quantity > 0", name="ck_asset_item_quantity_positive"),
        CheckConstraint("price_per_item >= 0", name="ck_asset_item_price_non_negative"),
        CheckConstraint("total_amount >= 0", name="ck_asset_item_total_non_negative"),
    )

    def __repr__(self):
        return f"<AssetItem id={self.id} asset_id={self.asset_id} position={self.position}>"
