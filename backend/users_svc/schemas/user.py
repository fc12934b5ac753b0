"""
User request/response schemas.
"""
from typing import Any, ClassVar, Optional

from bson import ObjectId
from pydantic import Field

from users_svc.core.security import hash_password
from users_svc.core.validation import ValidationResult, validate_registration
from users_svc.models.user import User, UserRole
from users_svc.schemas.base import Creatable, Filterable, Projectable, Updatable

REDACTED = "***"


class UserSummary(Projectable):
    """Public user information (excludes password and role)."""
    id: Optional[str] = Field(None, description="User ID")
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Email address")

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, name=user.name, email=user.email)


class CreateUserRequest(Creatable):
    """Administrative user creation body; creates a standard user."""
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(None, description="Password (min 8 chars, letters, digits, symbols)")

    default_role: ClassVar[UserRole] = UserRole.USER

    def validate_payload(self) -> ValidationResult:
        return validate_registration(self.name, self.email, self.password)

    def to_entity(self) -> User:
        return User(
            name=self.name or "",
            email=self.email or "",
            hashed_password=hash_password(self.password or ""),
            role=self.default_role,
        )


class CreateAdminRequest(CreateUserRequest):
    """Administrative creation of another administrator."""

    default_role: ClassVar[UserRole] = UserRole.ADMIN


class UpdateUserRequest(Updatable):
    """Partial user update; omitted or empty fields are left untouched."""
    name: Optional[str] = Field(None, description="New display name")
    email: Optional[str] = Field(None, description="New email address")
    password: Optional[str] = Field(None, description="New password")

    def _present(self) -> dict[str, str]:
        fields = {"name": self.name, "email": self.email, "password": self.password}
        return {key: value for key, value in fields.items() if value}

    def update_definition(self) -> dict[str, Any]:
        changes = self._present()
        if not changes:
            return {}
        if "password" in changes:
            changes["hashed_password"] = hash_password(changes.pop("password"))
        return {"$set": changes}

    def changes(self) -> dict[str, str]:
        """Fields this update sets, with the password value masked."""
        present = self._present()
        if "password" in present:
            present["password"] = REDACTED
        return present


class FilterUserRequest(Filterable):
    """User search; set fields are combined with AND, none set matches all."""
    id: Optional[str] = Field(None, description="User ID")
    name: Optional[str] = Field(None, description="Exact display name")
    email: Optional[str] = Field(None, description="Exact email address")

    def filter_expression(self) -> dict[str, Any]:
        expression: dict[str, Any] = {}
        if self.id:
            # An id that is not an ObjectId matches nothing
            expression["_id"] = ObjectId(self.id) if ObjectId.is_valid(self.id) else self.id
        if self.name:
            expression["name"] = self.name
        if self.email:
            expression["email"] = self.email
        return expression
