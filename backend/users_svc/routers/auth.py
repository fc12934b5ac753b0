"""
Authentication router for registration and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from users_svc.dependencies.services import get_auth_service
from users_svc.schemas.auth import (
    AuthenticationToken,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)
from users_svc.services.auth_service import AuthenticationService

router = APIRouter(prefix="/api/authentication", tags=["Authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **name**: Display name
    - **email**: Valid email address (must not be registered yet)
    - **password**: At least 8 characters with letters, numbers and symbols
    """
    result = await auth_service.register(body)
    if result.has_error:
        raise HTTPException(status_code=result.status_code, detail=result.message)
    return RegisterResponse(user_id=result.data)


@router.post(
    "/login",
    response_model=AuthenticationToken,
    summary="Login and get access token",
)
async def login(
    body: LoginRequest,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """
    Authenticate with email and password to receive a JWT token.

    The token goes in the ``Authorization: Bearer`` header of protected endpoints
    and is valid for 8 hours.
    """
    result = await auth_service.login(body)
    if result.status_code == status.HTTP_401_UNAUTHORIZED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if result.has_error:
        raise HTTPException(status_code=result.status_code, detail=result.message)
    return result.data
