import asyncio
import os

from sqlalchemy import select

from assetflow.core.db import AsyncSessionLocal, dispose_engine
from assetflow.core.logging import setup_logging
from assetflow.core.security import hash_password
from assetflow.models.enums.user_role import UserRole
from assetflow.models.users.user_models import User
from assetflow.utils.logger import get_logger

logger = get_logger("scripts.create_admin")


async def create_admin():
    email = os.getenv("ADMIN_EMAIL", "admin@assetflow.org").lower()
    name = os.getenv("ADMIN_NAME", "Administrator")
    password = os.getenv("ADMIN_PASSWORD", "admin123")

    async with AsyncSessionLocal() as session:
        user = await session.scalar(select(User).where(User.email == email))

        if user:
            # existing account is promoted, password left alone
            user.role = UserRole.admin
            user.is_active = True
            logger.info("Existing user promoted to admin", extra={"email": email})
        else:
            session.add(
                User(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=UserRole.admin,
                    is_active=True,
                )
            )
            logger.info("Admin user created", extra={"email": email})

        await session.commit()

    await dispose_engine()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(create_admin())
