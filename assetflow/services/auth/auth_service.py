from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.models.users.user_models import User
from assetflow.schemas.auth.auth_schemas import RegisterRequest, UserOut
from assetflow.core.security import hash_password, verify_password, create_access_token
from assetflow.core.exceptions import AuthError, ConflictError, ForbiddenError
from assetflow.constants.error_codes import ErrorCode
from assetflow.utils.logger import get_logger

logger = get_logger("auth.service")


def _issue_token(user: User) -> str:
    return create_access_token(subject=str(user.id), role=user.role.value)


# =====================================================
# REGISTER
# =====================================================
async def register_user(db: AsyncSession, payload: RegisterRequest):
    email = payload.email.lower()
    logger.info("Registering user", extra={"email": email})

    exists = await db.scalar(select(User.id).where(User.email == email))
    if exists:
        raise ConflictError(
            "User already exists with this email",
            ErrorCode.USER_EXISTS,
        )

    user = User(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id})

    return {
        "token": _issue_token(user),
        "user": UserOut.model_validate(user),
    }


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, email: str, password: str):
    email = email.lower()
    logger.info("Authenticating user", extra={"email": email})

    result = await db.execute(
        select(User).where(User.email == email)
    )
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"email": email})
        raise AuthError(
            "Invalid email or password",
            ErrorCode.INVALID_CREDENTIALS,
        )

    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"email": email})
        raise ForbiddenError("User account is inactive")

    user.last_login = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(user)

    logger.info("Login successful", extra={"user_id": user.id})

    return {
        "token": _issue_token(user),
        "user": UserOut.model_validate(user),
    }
