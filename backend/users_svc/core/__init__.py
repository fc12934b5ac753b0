"""
Core utilities - security, secrets, validation and errors.
"""
from users_svc.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    UsersServiceError,
    ValidationError,
)
from users_svc.core.secrets import JwtSecrets, SecretResolver, get_secret_resolver
from users_svc.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ConflictError",
    "NotFoundError",
    "PersistenceError",
    "UsersServiceError",
    "ValidationError",
    "JwtSecrets",
    "SecretResolver",
    "get_secret_resolver",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
