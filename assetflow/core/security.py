# assetflow/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext
from jose import jwt, JWTError, ExpiredSignatureError

from assetflow.core.config import (
    JWT_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from assetflow.core.exceptions import AuthError

TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(
    subject: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Signed bearer token carrying the user id (``sub``) and role."""
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    return jwt.encode(
        {
            "sub": subject,
            "role": role,
            "type": TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + lifetime,
        },
        JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    try:
        claims = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError:
        raise AuthError("Not authorized to access this route")

    if claims.get("type") != TOKEN_TYPE:
        raise AuthError("Invalid token type")

    return claims


def token_user_id(claims: dict) -> int:
    try:
        return int(claims.get("sub"))
    except (TypeError, ValueError):
        raise AuthError("Invalid token subject")
