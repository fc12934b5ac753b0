"""
Authentication request/response schemas.
"""
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, Field

from users_svc.core.validation import ValidationResult, validate_login
from users_svc.models.user import UserRole
from users_svc.schemas.user import CreateUserRequest, UserSummary


class LoginRequest(BaseModel):
    """Login request body."""
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")

    def validate_payload(self) -> ValidationResult:
        return validate_login(self.email, self.password)


class RegisterRequest(CreateUserRequest):
    """Self-registration body; always creates a standard user."""

    default_role: ClassVar[UserRole] = UserRole.USER


class AuthenticationToken(BaseModel):
    """Issued credential with the public summary of its user."""
    token: str = Field(..., description="Signed JWT")
    expires_on: Optional[datetime] = Field(None, description="Expiry (UTC)")
    user_info: Optional[UserSummary] = Field(None, description="Authenticated user")


class RegisterResponse(BaseModel):
    """Registration response."""
    user_id: str = Field(..., description="Created user ID")
