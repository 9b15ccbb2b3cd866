from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from assetflow.core.db import get_db
from assetflow.core.exceptions import AuthError, ForbiddenError
from assetflow.core.security import decode_access_token, token_user_id
from assetflow.models.users.user_models import User
from assetflow.utils.logger import get_logger

logger = get_logger("auth.guard")


def _bearer_token(authorization: Optional[str]) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        logger.warning("Missing bearer token")
        raise AuthError("Not authorized to access this route")
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    claims = decode_access_token(_bearer_token(authorization))
    user_id = token_user_id(claims)

    user = await db.get(User, user_id)

    if not user:
        logger.warning("Token user not found", extra={"user_id": user_id})
        raise AuthError("No user found with this token")

    if not user.is_active:
        logger.warning("Inactive user access blocked", extra={"user_id": user.id})
        raise ForbiddenError("User account is inactive")

    request.state.user = user
    return user
