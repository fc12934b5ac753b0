"""
Input validation rules for registration, login and user creation payloads.

Rules accumulate: every violated rule adds one message and checking continues,
so a result lists all problems in the payload at once.
"""
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Invalid email format"
PASSWORD_REQUIRED = "Password is required"
PASSWORD_WEAK = (
    "Weak password: must be at least 8 characters long and include letters, "
    "numbers and symbols."
)

MIN_PASSWORD_LENGTH = 8


class ValidationResult(BaseModel):
    """Outcome of validating a payload."""

    errors: list[str] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return len(self.errors) > 0

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def __str__(self) -> str:
        return "The following errors occurred: " + "\n".join(self.errors)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: str) -> bool:
    """Check that an address is RFC-shaped; deliverability is not checked."""
    if email != email.strip():
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_secure_password(password: str) -> bool:
    """At least 8 characters with a letter, a digit and a symbol."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False

    has_letter = any(ch.isalpha() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    has_symbol = any(not ch.isalnum() for ch in password)

    return has_letter and has_digit and has_symbol


def _check_email(result: ValidationResult, email: Optional[str]) -> None:
    if is_blank(email):
        result.add_error(EMAIL_REQUIRED)
    elif not is_valid_email(email):
        result.add_error(EMAIL_INVALID)


def validate_login(email: Optional[str], password: Optional[str]) -> ValidationResult:
    result = ValidationResult()

    _check_email(result, email)

    if is_blank(password):
        result.add_error(PASSWORD_REQUIRED)

    return result


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> ValidationResult:
    """
    Validate a registration or user-creation payload.

    Args:
        name: Display name
        email: Email address
        password: Plain password

    Returns:
        ValidationResult listing one message per violated rule
    """
    result = ValidationResult()

    if is_blank(name):
        result.add_error(NAME_REQUIRED)

    _check_email(result, email)

    if is_blank(password):
        result.add_error(PASSWORD_REQUIRED)
    elif not is_secure_password(password):
        result.add_error(PASSWORD_WEAK)

    return result
