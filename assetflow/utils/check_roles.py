from fastapi import Depends

from assetflow.core.exceptions import ForbiddenError
from assetflow.models.enums.user_role import UserRole
from assetflow.models.users.user_models import User
from assetflow.utils.get_user import get_current_user
from assetflow.utils.logger import get_logger

logger = get_logger("auth.roles")


def require_role(roles: list[str]):
    allowed = {UserRole(r) for r in roles}

    async def role_checker(user: User = Depends(get_current_user)):
        if user.role not in allowed:
            logger.warning(
                "Role not permitted",
                extra={"user_id": user.id, "role": user.role.value},
            )
            raise ForbiddenError("User role not authorized to access this route")
        return user

    return role_checker
