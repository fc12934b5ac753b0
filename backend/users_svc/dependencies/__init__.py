"""
Dependencies for dependency injection in routes.
"""
from users_svc.dependencies.auth import CurrentUser, get_current_user
from users_svc.dependencies.roles import require_admin, require_roles
from users_svc.dependencies.services import (
    get_auth_service,
    get_event_repository,
    get_user_repository,
    get_user_service,
)

__all__ = [
    "CurrentUser",
    "get_current_user",
    "require_admin",
    "require_roles",
    "get_auth_service",
    "get_event_repository",
    "get_user_repository",
    "get_user_service",
]
