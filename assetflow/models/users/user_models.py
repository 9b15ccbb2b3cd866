from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from assetflow.core.db import Base
from assetflow.models.base.mixins import TimestampMixin
from assetflow.models.enums.user_role import UserRole


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.officer)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True))

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
