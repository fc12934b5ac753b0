"""
Role-based access control dependencies.
"""
from typing import Callable

from fastapi import Depends, HTTPException, status

from users_svc.dependencies.auth import get_current_user
from users_svc.models.user import User, UserRole


def require_roles(*allowed_roles: UserRole) -> Callable:
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/admin-only")
        async def admin_route(user: User = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    async def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if UserRole(current_user.role) not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return role_checker


def require_admin() -> Callable:
    """Shortcut dependency for admin-only routes."""
    return require_roles(UserRole.ADMIN)
