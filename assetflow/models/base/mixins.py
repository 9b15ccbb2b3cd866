from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class CreatedAtMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    # also set explicitly by services that rewrite child rows
    updated_at = Column(
        DateTime(timezone=True),
        onupdate=func.now(),
    )
