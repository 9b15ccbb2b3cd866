from sqlalchemy import Column, Integer, String, LargeBinary, ForeignKey, UniqueConstraint
from sqlalchemy.orm import deferred
from assetflow.core.db import Base
from assetflow.models.base.mixins import TimestampMixin


class Upload(Base, TimestampMixin):
    __tablename__ = "uploads"

    id = Column(Integer, primary_key=True)
    filename = Column(String(255), nullable=False)
    content_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    data = deferred(Column(LargeBinary, nullable=False))

    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    item_index = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("asset_id", "item_index", name="uq_upload_asset_item"),
    )

    def __repr__(self):
        return f"<Upload id={self.id} asset_id={self.asset_id} item_index={self.item_index}>"
