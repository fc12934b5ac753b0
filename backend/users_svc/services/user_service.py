"""
User service for user administration with an audit event per operation.
"""
import logging
from typing import Optional, Union

from users_svc.core.exceptions import ValidationError
from users_svc.database.event_store import EventRepository
from users_svc.database.repository import UserRepository
from users_svc.models.domain_event import DomainEvent
from users_svc.models.user import User, UserRole
from users_svc.schemas.response import ResponseModel
from users_svc.schemas.user import (
    CreateAdminRequest,
    CreateUserRequest,
    FilterUserRequest,
    UpdateUserRequest,
    UserSummary,
)
from users_svc.services.audit import AuditTrail, audited

logger = logging.getLogger(__name__)


# ==================== Event describers ====================

def users_listed(result: list[UserSummary]) -> DomainEvent:
    return DomainEvent.create(None, "UsersListed", {"count": len(result or [])})


def user_fetched(result: Optional[UserSummary], user_id: str) -> DomainEvent:
    found = result is not None
    return DomainEvent.create(
        user_id,
        "UserFetched" if found else "UserNotFound",
        {"user_id": str(user_id), "found": found},
    )


def users_filtered(result: list[UserSummary], filter_dto: FilterUserRequest) -> DomainEvent:
    return DomainEvent.create(
        None,
        "UserFilterQueried",
        {"filter": filter_dto, "count": len(result or [])},
    )


def user_created(result: ResponseModel[UserSummary], dto: CreateUserRequest) -> DomainEvent:
    if result.has_error:
        return DomainEvent.create(
            None,
            "UserCreateValidationFailed",
            {"errors": result.errors, "input_type": type(dto).__name__},
        )
    created = result.data
    return DomainEvent.create(
        created.id,
        "UserCreated",
        {"user_id": created.id, "name": created.name, "email": created.email},
    )


def user_updated(result: None, user_id: str, dto: UpdateUserRequest) -> DomainEvent:
    return DomainEvent.create(
        user_id,
        "UserUpdated",
        {"user_id": str(user_id), "changes": dto.changes()},
    )


def user_deleted(result: None, user_id: str) -> DomainEvent:
    return DomainEvent.create(user_id, "UserDeleted", {"user_id": str(user_id)})


def admin_fetched(result: Optional[User]) -> DomainEvent:
    found = result is not None
    return DomainEvent.create(
        result.id if found else None,
        "AdminFetched" if found else "AdminNotFound",
        {"found": found, "admin_id": result.id if found else None},
    )


class UserService:
    """Service for user CRUD operations."""

    def __init__(self, users: UserRepository, events: EventRepository):
        """Initialize with the user repository and the event log."""
        self.users = users
        self.audit = AuditTrail(events)

    # ==================== Queries ====================

    @audited(users_listed)
    async def get_all(self) -> list[UserSummary]:
        """List every user (store order)."""
        return await self.users.get_all(UserSummary)

    @audited(user_fetched)
    async def get_by_id(self, user_id: str) -> Optional[UserSummary]:
        """Get a user summary by ID, or None."""
        return await self.users.get_by_id(user_id, UserSummary)

    @audited(users_filtered)
    async def find_users(self, filter_dto: FilterUserRequest) -> list[UserSummary]:
        return await self.users.find(filter_dto, UserSummary)

    @audited(admin_fetched)
    async def get_admin(self) -> Optional[User]:
        """Get the first administrator found."""
        return await self.users.find_one({"role": UserRole.ADMIN.value})

    # ==================== Commands ====================

    @audited(user_created)
    async def create(self, dto: CreateUserRequest) -> ResponseModel[UserSummary]:
        """Create a standard user after validation."""
        return await self._create(dto)

    @audited(user_created)
    async def create_admin(self, dto: CreateAdminRequest) -> ResponseModel[UserSummary]:
        """Create an administrator after validation."""
        return await self._create(dto)

    @audited(user_updated)
    async def update(self, user_id: str, dto: UpdateUserRequest) -> None:
        """Apply a partial update to a user."""
        await self.users.update(user_id, dto)

    @audited(user_deleted)
    async def delete(self, user_id: str) -> None:
        """Delete a user; unknown ids are a no-op."""
        await self.users.delete(user_id)

    async def _create(
        self, dto: Union[CreateUserRequest, CreateAdminRequest]
    ) -> ResponseModel[UserSummary]:
        validation = dto.validate_payload()
        if validation.has_error:
            return ResponseModel[UserSummary].failure(ValidationError(validation))

        entity = await self.users.create(dto)
        created = await self.users.get_by_id(entity.id, UserSummary)
        if created is None:
            # Removed between insert and read-back
            created = UserSummary.from_user(entity)

        logger.info("User %s created with role %s", entity.id, entity.role_name)
        return ResponseModel[UserSummary].created(created)
