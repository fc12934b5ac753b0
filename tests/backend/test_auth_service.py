"""
Tests for AuthenticationService (registration and login).
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest


class TestRegister:
    """Tests for AuthenticationService.register."""

    @pytest.mark.asyncio
    async def test_register_creates_standard_user(self, auth_service, user_repository, test_user_data):
        from users_svc.core.security import hash_password
        from users_svc.schemas.auth import RegisterRequest

        result = await auth_service.register(RegisterRequest(**test_user_data))

        assert result.has_error is False
        assert result.status_code == 200
        stored = await user_repository.get_by_email("alice@x.com")
        assert stored.id == result.data
        assert stored.role == "UserApp"
        assert stored.hashed_password == hash_password("Secret@123")

    @pytest.mark.asyncio
    async def test_register_invalid_payload_lists_every_error(self, auth_service):
        from users_svc.core.validation import EMAIL_INVALID, PASSWORD_WEAK
        from users_svc.schemas.auth import RegisterRequest

        result = await auth_service.register(
            RegisterRequest(name="Alice", email="nope", password="short")
        )

        assert result.status_code == 400
        assert result.errors == [EMAIL_INVALID, PASSWORD_WEAK]

    @pytest.mark.asyncio
    async def test_duplicate_email_never_reaches_insert(self, auth_service, test_user_data):
        from users_svc.database.repository import UserRepository
        from users_svc.schemas.auth import RegisterRequest
        from users_svc.services.auth_service import EMAIL_TAKEN

        await auth_service.register(RegisterRequest(**test_user_data))

        with patch.object(UserRepository, "create", new_callable=AsyncMock) as mock_create:
            result = await auth_service.register(RegisterRequest(**test_user_data))

        mock_create.assert_not_called()
        assert result.status_code == 400
        assert result.message == EMAIL_TAKEN

    @pytest.mark.asyncio
    async def test_register_cannot_choose_admin_role(self, auth_service, user_repository, test_user_data):
        from users_svc.schemas.auth import RegisterRequest

        await auth_service.register(RegisterRequest(**test_user_data, role="Admin"))

        stored = await user_repository.get_by_email("alice@x.com")
        assert stored.is_admin is False


class TestLogin:
    """Tests for AuthenticationService.login."""

    @pytest.mark.asyncio
    async def test_login_returns_token_for_user(self, auth_service, jwt_secrets, test_user_data):
        from users_svc.core.security import decode_token
        from users_svc.schemas.auth import LoginRequest, RegisterRequest

        registered = await auth_service.register(RegisterRequest(**test_user_data))

        result = await auth_service.login(LoginRequest(email="alice@x.com", password="Secret@123"))

        assert result.has_error is False
        token = result.data
        assert token.user_info.id == registered.data
        assert token.user_info.name == "Alice"
        assert token.user_info.email == "alice@x.com"
        claims = decode_token(token.token, jwt_secrets)
        assert claims["sub"] == registered.data
        assert claims["exp"] - claims["iat"] == 8 * 3600

    @pytest.mark.asyncio
    async def test_token_expiry_is_eight_hours_after_issuance(self, auth_service, user_repository, test_user_data):
        from users_svc.schemas.auth import RegisterRequest

        await auth_service.register(RegisterRequest(**test_user_data))
        user = await user_repository.get_by_email("alice@x.com")
        now = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

        token = auth_service.issue_token(user, now=now)

        assert token.expires_on == now + timedelta(hours=8)

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, auth_service, test_user_data):
        from users_svc.schemas.auth import LoginRequest, RegisterRequest
        from users_svc.services.auth_service import NOT_AUTHENTICATED

        await auth_service.register(RegisterRequest(**test_user_data))

        result = await auth_service.login(LoginRequest(email="alice@x.com", password="Wrong@123"))

        assert result.has_error is True
        assert result.status_code == 401
        assert result.message == NOT_AUTHENTICATED
        assert result.data is None

    @pytest.mark.asyncio
    async def test_unknown_email_is_400(self, auth_service):
        from users_svc.schemas.auth import LoginRequest
        from users_svc.services.auth_service import INVALID_LOGIN

        result = await auth_service.login(LoginRequest(email="ghost@x.com", password="Secret@123"))

        assert result.status_code == 400
        assert result.message == INVALID_LOGIN

    @pytest.mark.asyncio
    async def test_invalid_payload_is_400(self, auth_service):
        from users_svc.core.validation import EMAIL_REQUIRED, PASSWORD_REQUIRED
        from users_svc.schemas.auth import LoginRequest

        result = await auth_service.login(LoginRequest())

        assert result.status_code == 400
        assert result.errors == [EMAIL_REQUIRED, PASSWORD_REQUIRED]

    @pytest.mark.asyncio
    async def test_missing_secrets_raise_configuration_error(
        self, user_repository, fake_parameter_store, test_user_data
    ):
        from users_svc.config import Settings
        from users_svc.core.exceptions import ConfigurationError
        from users_svc.core.secrets import SecretResolver
        from users_svc.schemas.auth import LoginRequest, RegisterRequest
        from users_svc.services.auth_service import AuthenticationService

        resolver = SecretResolver(
            Settings(jwt_key=None, jwt_issuer=None, jwt_audience=None, ssm_fallback_enabled=False),
            parameter_store=fake_parameter_store({}),
        )
        service = AuthenticationService(user_repository, resolver)
        await service.register(RegisterRequest(**test_user_data))

        with pytest.raises(ConfigurationError):
            await service.login(LoginRequest(email="alice@x.com", password="Secret@123"))

    @pytest.mark.asyncio
    async def test_token_is_issued_off_the_event_loop(self, auth_service, test_user_data):
        """Secret lookups behind token issuance run in a worker thread."""
        from fastapi.concurrency import run_in_threadpool

        from users_svc.schemas.auth import LoginRequest, RegisterRequest

        await auth_service.register(RegisterRequest(**test_user_data))

        with patch(
            "users_svc.services.auth_service.run_in_threadpool",
            new_callable=AsyncMock,
            side_effect=run_in_threadpool,
        ) as mock_threadpool:
            result = await auth_service.login(LoginRequest(email="alice@x.com", password="Secret@123"))

        assert result.has_error is False
        mock_threadpool.assert_awaited_once()
        assert mock_threadpool.await_args.args[0] == auth_service.issue_token
