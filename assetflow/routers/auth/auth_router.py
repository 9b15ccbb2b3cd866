from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.core.db import get_db
from assetflow.schemas.auth.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    AuthResponse,
    MeResponse,
    UserOut,
)
from assetflow.services.auth.auth_service import register_user, login_user
from assetflow.utils.get_user import get_current_user
from assetflow.utils.logger import get_logger

logger = get_logger("auth.router")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201, response_model=AuthResponse)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Register attempt", extra={"email": payload.email})

    result = await register_user(db, payload)
    return {"success": True, **result}


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Login attempt", extra={"email": payload.email})

    result = await login_user(db, payload.email, payload.password)
    return {"success": True, **result}


@router.get("/me", response_model=MeResponse)
async def me(current_user=Depends(get_current_user)):
    return {"success": True, "user": UserOut.model_validate(current_user)}
