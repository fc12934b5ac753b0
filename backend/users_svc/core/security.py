"""
Security utilities for password hashing and JWT token management.
"""
import hmac
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Optional

from jose import jwt
from passlib.context import CryptContext

from users_svc.config import get_settings
from users_svc.core.secrets import JwtSecrets

if TYPE_CHECKING:
    from users_svc.models.user import User

# Unsalted SHA-256 so identical passwords always give identical digests;
# stored digests are the first 60 hex characters.
pwd_context = CryptContext(schemes=["hex_sha256"], deprecated="auto")

DIGEST_LENGTH = 60

ROLE_CLAIM_URI = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password into a fixed-length digest.

    Args:
        plain_password: The plain text password to hash

    Returns:
        60-character lowercase hex digest
    """
    return pwd_context.hash(plain_password)[:DIGEST_LENGTH]


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plain password against a stored digest.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The digest to compare against

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    return hmac.compare_digest(
        hash_password(plain_password).encode(),
        hashed_password.encode(),
    )


def build_claims(user: "User") -> dict[str, Any]:
    """Identity claims, with id and role under both canonical and short names."""
    user_id = str(user.id)
    role = user.role_name
    return {
        "UserId": user_id,
        "userId": user_id,
        "sub": user_id,
        "name": user.name or "",
        "email": user.email or "",
        ROLE_CLAIM_URI: role,
        "role": role,
    }


def create_access_token(
    user: "User",
    secrets: JwtSecrets,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> tuple[str, datetime]:
    """
    Create a signed JWT access token for a user.

    Args:
        user: Stored user the token is issued for
        secrets: Signing key, issuer and audience
        expires_delta: Optional custom lifetime (defaults to configured hours)
        now: Issuance instant, defaults to the current UTC time

    Returns:
        Tuple of encoded token and its expiry
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_expire_hours)

    issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    expires_on = issued_at + expires_delta

    payload = build_claims(user)
    payload.update({
        "iss": secrets.issuer,
        "aud": secrets.audience,
        "iat": issued_at,
        "nbf": issued_at,
        "exp": expires_on,
    })

    token = jwt.encode(payload, secrets.key, algorithm=settings.jwt_algorithm)
    return token, expires_on


def decode_token(token: str, secrets: JwtSecrets) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Signature, expiry, issuer and audience are all checked.

    Raises:
        JWTError: If token is invalid or expired
    """
    settings = get_settings()

    return jwt.decode(
        token,
        secrets.key,
        algorithms=[settings.jwt_algorithm],
        audience=secrets.audience,
        issuer=secrets.issuer,
    )
