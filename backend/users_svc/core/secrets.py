"""
Secret resolution for the JWT signing key, issuer and audience.

Each value is looked up independently through a chain of sources and the
first non-blank answer wins:

1. the remote parameter store, when remote secrets are enabled
   (non-development environments, or ``USE_SSM=true``)
2. local configuration (environment variables / ``.env``)
3. the remote parameter store again, as a last resort

A parameter that is missing or cannot be read for lack of permissions counts
as absent. Beyond those two, an unrecognized client (invalid AWS credentials),
missing credentials and a missing region also count as absent, so a host with
no AWS access falls through to local configuration. Throttling and any other
parameter store failure propagate. Only a value that no source can provide is
an error.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import ClientError, NoCredentialsError, NoRegionError

from users_svc.config import Settings, get_settings
from users_svc.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# SSM error codes that mean "no value available to us"
ABSENT_ERROR_CODES = {
    "ParameterNotFound",
    "ParameterVersionNotFound",
    "AccessDeniedException",
    "UnrecognizedClientException",
}
DENIED_HTTP_STATUSES = {401, 403}


@dataclass(frozen=True)
class JwtSecrets:
    """Signing material stamped into every issued token."""

    key: str
    issuer: str
    audience: str


@dataclass(frozen=True)
class SecretField:
    """One independently resolved value."""

    name: str
    setting: str
    parameter_path: str
    decrypt: bool = False


class ParameterStore:
    """Thin wrapper over the AWS SSM parameter store."""

    def __init__(self, client: Any = None, region_name: Optional[str] = None):
        self._client = client
        self._region_name = region_name

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("ssm", region_name=self._region_name)
        return self._client

    def get(self, name: str, decrypt: bool = False) -> Optional[str]:
        """
        Fetch a parameter value.

        Args:
            name: Parameter path, e.g. ``/fcg/JWT_SECRET``
            decrypt: Request decryption of SecureString parameters

        Returns:
            The value, or None if it is missing or access is denied

        Raises:
            ClientError: For any other parameter store failure
        """
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=decrypt)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            http_status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if code in ABSENT_ERROR_CODES or http_status in DENIED_HTTP_STATUSES:
                logger.debug("Parameter %s unavailable (%s)", name, code or http_status)
                return None
            raise
        except (NoCredentialsError, NoRegionError) as e:
            logger.warning("Parameter store not reachable for %s: %s", name, e)
            return None

        return response.get("Parameter", {}).get("Value")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class SecretResolver:
    """Resolves secrets through the prioritized source chain."""

    def __init__(self, settings: Settings, parameter_store: Optional[ParameterStore] = None):
        self.settings = settings
        self.parameter_store = parameter_store or ParameterStore(region_name=settings.aws_region)
        self._jwt_secrets: Optional[JwtSecrets] = None

        self.jwt_key = SecretField("key", "jwt_key", settings.ssm_jwt_secret_path, decrypt=True)
        self.jwt_issuer = SecretField("issuer", "jwt_issuer", settings.ssm_jwt_issuer_path)
        self.jwt_audience = SecretField("audience", "jwt_audience", settings.ssm_jwt_audience_path)
        self.mongo_uri = SecretField("mongo_uri", "mongo_uri", settings.ssm_mongo_uri_path, decrypt=True)

    # ==================== Sources ====================

    def from_parameter_store(self, field: SecretField) -> Optional[str]:
        return self.parameter_store.get(field.parameter_path, decrypt=field.decrypt)

    def from_local(self, field: SecretField) -> Optional[str]:
        return getattr(self.settings, field.setting, None)

    def providers(self) -> list[Callable[[SecretField], Optional[str]]]:
        """Sources in priority order for the current environment."""
        chain = []
        if self.settings.remote_secrets_enabled:
            chain.append(self.from_parameter_store)
        chain.append(self.from_local)
        if self.settings.ssm_fallback_enabled and not self.settings.remote_secrets_enabled:
            chain.append(self.from_parameter_store)
        return chain

    # ==================== Resolution ====================

    def resolve_field(self, field: SecretField) -> Optional[str]:
        """First non-blank value for a field, or None."""
        for provider in self.providers():
            value = provider(field)
            if not _is_blank(value):
                return value
        logger.warning("No source provided a value for %s", field.name)
        return None

    def resolve(self) -> JwtSecrets:
        """
        Resolve signing key, issuer and audience.

        Raises:
            ConfigurationError: If any of the three cannot be determined
        """
        if self._jwt_secrets is not None:
            return self._jwt_secrets

        fields = (self.jwt_key, self.jwt_issuer, self.jwt_audience)
        values = {field.name: self.resolve_field(field) for field in fields}

        missing = [f for f in fields if values[f.name] is None]
        if missing:
            details = ", ".join(f"{f.parameter_path} or {f.setting.upper()}" for f in missing)
            raise ConfigurationError(f"JWT settings not found ({details})")

        self._jwt_secrets = JwtSecrets(**values)
        return self._jwt_secrets

    def resolve_mongo_uri(self) -> str:
        """
        Resolve the MongoDB connection string.

        Raises:
            ConfigurationError: If no source provides it
        """
        value = self.resolve_field(self.mongo_uri)
        if value is None:
            raise ConfigurationError(
                f"MongoDB connection string not found ({self.mongo_uri.parameter_path} or MONGO_URI)"
            )
        return value


@lru_cache
def get_secret_resolver() -> SecretResolver:
    """Get cached resolver bound to the application settings."""
    return SecretResolver(get_settings())
