"""
Default administrator bootstrap.
"""
import logging
from typing import Optional

from users_svc.config import Settings
from users_svc.database.repository import UserRepository
from users_svc.models.user import User, UserRole
from users_svc.schemas.user import CreateAdminRequest

logger = logging.getLogger(__name__)


async def seed_admin(users: UserRepository, settings: Settings) -> Optional[User]:
    """
    Create the default administrator when no administrator exists.

    Nothing is created while ``ADMIN_PASSWORD`` is unset.

    Returns:
        The created administrator, or None if one already existed or no
        password is configured
    """
    existing = await users.find_one({"role": UserRole.ADMIN.value})
    if existing is not None:
        logger.info("At least one administrator exists, skipping seed")
        return None

    if not settings.admin_password:
        logger.warning("No administrator exists and ADMIN_PASSWORD is not set, skipping seed")
        return None

    logger.info("No administrator found, creating default administrator")
    admin = await users.create(
        CreateAdminRequest(
            name=settings.admin_name,
            email=settings.admin_email,
            password=settings.admin_password,
        )
    )
    logger.info("Default administrator %s created", admin.id)
    return admin
