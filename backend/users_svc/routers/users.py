"""
Users router for user administration.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from users_svc.core.exceptions import NotFoundError
from users_svc.dependencies.auth import CurrentUser
from users_svc.dependencies.roles import require_admin
from users_svc.dependencies.services import get_user_service
from users_svc.schemas.user import (
    CreateAdminRequest,
    CreateUserRequest,
    FilterUserRequest,
    UpdateUserRequest,
    UserSummary,
)
from users_svc.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])

UserId = Annotated[str, Path(pattern="^[0-9a-fA-F]{24}$", description="User ID")]
Service = Annotated[UserService, Depends(get_user_service)]

admin_only = [Depends(require_admin())]


async def get_existing_user(user_id: str, user_service: UserService) -> UserSummary:
    user = await user_service.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get(
    "",
    response_model=list[UserSummary],
    dependencies=admin_only,
    summary="List users",
)
async def list_users(user_service: Service):
    """List all users. Administrators only."""
    return await user_service.get_all()


@router.get(
    "/search",
    response_model=list[UserSummary],
    dependencies=admin_only,
    summary="Search users",
)
async def find_users(
    user_service: Service,
    user_id: Annotated[Optional[str], Query(alias="id", description="User ID")] = None,
    name: Annotated[Optional[str], Query(description="Exact display name")] = None,
    email: Annotated[Optional[str], Query(description="Exact email address")] = None,
):
    """Find users matching every given field. Administrators only."""
    return await user_service.find_users(FilterUserRequest(id=user_id, name=name, email=email))


@router.get(
    "/admin",
    response_model=UserSummary,
    dependencies=admin_only,
    summary="Get an administrator",
)
async def get_admin(user_service: Service):
    """Return an administrator account. Administrators only."""
    admin = await user_service.get_admin()
    if admin is None:
        raise NotFoundError("Administrator not found")
    return UserSummary.from_user(admin)


@router.get(
    "/{user_id}",
    response_model=UserSummary,
    summary="Get user",
)
async def get_user(user_id: UserId, current_user: CurrentUser, user_service: Service):
    """Get a user by ID."""
    return await get_existing_user(user_id, user_service)


@router.post(
    "",
    response_model=UserSummary,
    status_code=status.HTTP_201_CREATED,
    dependencies=admin_only,
    summary="Create user",
)
async def create_user(body: CreateUserRequest, user_service: Service):
    """Create a standard user. Administrators only."""
    result = await user_service.create(body)
    if result.has_error:
        raise HTTPException(status_code=result.status_code, detail=result.message)
    return result.data


@router.post(
    "/admin",
    response_model=UserSummary,
    status_code=status.HTTP_201_CREATED,
    dependencies=admin_only,
    summary="Create administrator",
)
async def create_admin(body: CreateAdminRequest, user_service: Service):
    """Create an administrator. Administrators only."""
    result = await user_service.create_admin(body)
    if result.has_error:
        raise HTTPException(status_code=result.status_code, detail=result.message)
    return result.data


@router.put(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=admin_only,
    summary="Update user",
)
async def update_user(user_id: UserId, body: UpdateUserRequest, user_service: Service):
    """Update name, email or password; omitted fields are kept. Administrators only."""
    await get_existing_user(user_id, user_service)
    await user_service.update(user_id, body)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=admin_only,
    summary="Delete user",
)
async def delete_user(user_id: UserId, user_service: Service):
    """Delete a user. Administrators only."""
    await get_existing_user(user_id, user_service)
    await user_service.delete(user_id)
