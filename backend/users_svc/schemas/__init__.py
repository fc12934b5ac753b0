"""
Schemas package - request/response payloads and their capability roles.
"""
from users_svc.schemas.auth import (
    AuthenticationToken,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)
from users_svc.schemas.base import Creatable, Filterable, Projectable, Updatable
from users_svc.schemas.response import ResponseModel
from users_svc.schemas.user import (
    CreateAdminRequest,
    CreateUserRequest,
    FilterUserRequest,
    UpdateUserRequest,
    UserSummary,
)

__all__ = [
    # Auth
    "AuthenticationToken",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    # Roles
    "Creatable",
    "Filterable",
    "Projectable",
    "Updatable",
    # Envelope
    "ResponseModel",
    # User
    "CreateAdminRequest",
    "CreateUserRequest",
    "FilterUserRequest",
    "UpdateUserRequest",
    "UserSummary",
]
