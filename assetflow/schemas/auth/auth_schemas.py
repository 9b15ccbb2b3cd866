from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime

from assetflow.models.enums.user_role import UserRole
from assetflow.schemas.base_schemas import CamelModel


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = UserRole.officer

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserOut


class MeResponse(BaseModel):
    success: bool = True
    user: UserOut
