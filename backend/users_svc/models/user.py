"""
User model for the users collection.
"""
from enum import Enum

from pydantic import Field

from users_svc.models.base import Entity


class UserRole(str, Enum):
    """User role levels."""
    USER = "UserApp"
    ADMIN = "Admin"


class User(Entity):
    """
    User document model for the MongoDB ``User`` collection.
    """
    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address, unique by lookup")
    hashed_password: str = Field(default="", description="Fixed-length password digest")
    role: UserRole = Field(default=UserRole.USER, description="Role assigned to user")

    @property
    def role_name(self) -> str:
        return UserRole(self.role).value

    @property
    def is_admin(self) -> bool:
        return UserRole(self.role) is UserRole.ADMIN
