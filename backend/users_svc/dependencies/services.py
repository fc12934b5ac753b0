"""
Service and repository providers for dependency injection in routes.
"""
from fastapi import Depends

from users_svc.core.secrets import SecretResolver, get_secret_resolver
from users_svc.database.connections import get_database
from users_svc.database.event_store import EventRepository
from users_svc.database.repository import UserRepository
from users_svc.services.auth_service import AuthenticationService
from users_svc.services.user_service import UserService


async def get_user_repository() -> UserRepository:
    """Dependency to get UserRepository instance."""
    db = await get_database()
    return UserRepository(db)


async def get_event_repository() -> EventRepository:
    """Dependency to get EventRepository instance."""
    db = await get_database()
    return EventRepository(db)


async def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    events: EventRepository = Depends(get_event_repository),
) -> UserService:
    """Dependency to get UserService instance."""
    return UserService(users, events)


async def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    resolver: SecretResolver = Depends(get_secret_resolver),
) -> AuthenticationService:
    """Dependency to get AuthenticationService instance."""
    return AuthenticationService(users, resolver)
