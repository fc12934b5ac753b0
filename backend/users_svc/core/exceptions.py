"""
Error taxonomy for the users service.

Each error carries the HTTP status the outer layer reports it with, so
orchestrators can turn an error into a response without knowing about HTTP.
"""
from typing import TYPE_CHECKING, Optional

from fastapi import status

if TYPE_CHECKING:
    from users_svc.core.validation import ValidationResult


class UsersServiceError(Exception):
    """Base class for all service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(UsersServiceError):
    """Malformed or missing input, with every violated rule."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, result: "ValidationResult"):
        self.result = result
        super().__init__(str(result))

    @property
    def errors(self) -> list[str]:
        return list(self.result.errors)


class ConflictError(UsersServiceError):
    """Business key already in use (duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(UsersServiceError):
    """Credentials did not match or token is invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(UsersServiceError):
    """Entity absent."""

    status_code = status.HTTP_404_NOT_FOUND


class ConfigurationError(UsersServiceError):
    """A required setting could not be resolved from any source."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PersistenceError(UsersServiceError):
    """The document store is unreachable or rejected the operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
