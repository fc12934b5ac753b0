"""
Authentication dependencies for route protection.
"""
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from users_svc.core.secrets import SecretResolver, get_secret_resolver
from users_svc.core.security import decode_token
from users_svc.database.repository import UserRepository, to_object_id
from users_svc.dependencies.services import get_user_repository
from users_svc.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    resolver: Annotated[SecretResolver, Depends(get_secret_resolver)],
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.

    Token is passed in the header: ``Authorization: Bearer xxx``

    Raises:
        HTTPException 401: If token is missing, invalid or expired
        HTTPException 401: If user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    secrets = await run_in_threadpool(resolver.resolve)

    try:
        payload = decode_token(credentials.credentials, secrets)
    except JWTError:
        raise credentials_exception

    user_id = to_object_id(payload.get("sub"))
    if user_id is None:
        raise credentials_exception

    user = await users.find_one({"_id": user_id})
    if user is None:
        raise credentials_exception

    return user


# Type alias for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
