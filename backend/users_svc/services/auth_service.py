"""
Authentication service for registration and login.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import status
from fastapi.concurrency import run_in_threadpool

from users_svc.core.exceptions import AuthenticationError, ConflictError, ValidationError
from users_svc.core.secrets import SecretResolver
from users_svc.core.security import create_access_token, verify_password
from users_svc.database.repository import UserRepository
from users_svc.models.user import User
from users_svc.schemas.auth import AuthenticationToken, LoginRequest, RegisterRequest
from users_svc.schemas.response import ResponseModel
from users_svc.schemas.user import UserSummary

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"
# Same message whether or not the email exists
INVALID_LOGIN = "Invalid login"
NOT_AUTHENTICATED = "User could not be authenticated, please check your credentials."


class AuthenticationService:
    """Service for authentication operations."""

    def __init__(self, users: UserRepository, secret_resolver: SecretResolver):
        """Initialize with the user repository and the secret resolver."""
        self.users = users
        self.secret_resolver = secret_resolver

    async def register(self, request: RegisterRequest) -> ResponseModel[str]:
        """
        Register a new standard user.

        Args:
            request: Registration request with name, email and password

        Returns:
            ResponseModel with the created user ID, or a 400 failure on
            validation errors or an email that is already registered
        """
        validation = request.validate_payload()
        if validation.has_error:
            return ResponseModel[str].failure(ValidationError(validation))

        # Check-then-insert is not atomic; concurrent registrations may both pass
        existing = await self.users.get_by_email(request.email)
        if existing is not None:
            logger.info("Registration rejected: email already registered")
            return ResponseModel[str].failure(ConflictError(EMAIL_TAKEN))

        user = await self.users.create(request)
        logger.info("User %s registered", user.id)
        return ResponseModel[str].ok(user.id)

    async def login(self, request: LoginRequest) -> ResponseModel[AuthenticationToken]:
        """
        Authenticate a user and issue a token.

        Args:
            request: Login request with email and password

        Returns:
            ResponseModel with the token; 400 for invalid input or unknown
            email, 401 for a wrong password

        Raises:
            ConfigurationError: If the signing secrets cannot be resolved
        """
        validation = request.validate_payload()
        if validation.has_error:
            return ResponseModel[AuthenticationToken].failure(ValidationError(validation))

        user = await self.users.get_by_email(request.email)
        if user is None:
            return ResponseModel[AuthenticationToken].failure(
                AuthenticationError(INVALID_LOGIN, status_code=status.HTTP_400_BAD_REQUEST)
            )

        if not verify_password(request.password, user.hashed_password):
            logger.warning("Failed login for user %s", user.id)
            return ResponseModel[AuthenticationToken].failure(AuthenticationError(NOT_AUTHENTICATED))

        # Secret lookups may hit the parameter store
        token = await run_in_threadpool(self.issue_token, user)
        return ResponseModel[AuthenticationToken].ok(token)

    def issue_token(self, user: User, now: Optional[datetime] = None) -> AuthenticationToken:
        """Sign a token for a user with the resolved secrets."""
        secrets = self.secret_resolver.resolve()
        token, expires_on = create_access_token(user, secrets, now=now)
        return AuthenticationToken(
            token=token,
            expires_on=expires_on,
            user_info=UserSummary.from_user(user),
        )
