"""
Result envelope returned by the orchestrators.
"""
from typing import Generic, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel, Field

from users_svc.core.exceptions import UsersServiceError, ValidationError

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    """Outcome of a service call with the status the HTTP layer should use."""

    has_error: bool = False
    status_code: int = status.HTTP_200_OK
    message: Optional[str] = None
    data: Optional[T] = None
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: T) -> "ResponseModel[T]":
        return cls(status_code=status.HTTP_200_OK, data=data)

    @classmethod
    def created(cls, data: T) -> "ResponseModel[T]":
        return cls(status_code=status.HTTP_201_CREATED, data=data)

    @classmethod
    def failure(cls, error: UsersServiceError) -> "ResponseModel[T]":
        errors = error.errors if isinstance(error, ValidationError) else [error.message]
        return cls(
            has_error=True,
            status_code=error.status_code,
            message=error.message,
            errors=errors,
        )
