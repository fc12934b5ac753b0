"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = "Development"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Remote parameter store (AWS SSM)
    use_ssm: Optional[bool] = None
    ssm_fallback_enabled: bool = True
    aws_region: Optional[str] = None
    ssm_jwt_secret_path: str = "/fcg/JWT_SECRET"
    ssm_jwt_issuer_path: str = "/fcg/JWT_ISS"
    ssm_jwt_audience_path: str = "/fcg/JWT_AUD"
    ssm_mongo_uri_path: str = "/fcg/MONGODB_URI"

    # MongoDB
    mongo_uri: Optional[str] = None
    mongo_db_name: str = "users"

    # JWT Configuration (local entries)
    jwt_key: Optional[str] = None
    jwt_issuer: Optional[str] = None
    jwt_audience: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 8

    # Default administrator created on first startup
    admin_name: str = "admin"
    admin_email: str = "admin@fcg.com"
    admin_password: Optional[str] = None

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def remote_secrets_enabled(self) -> bool:
        """Whether the parameter store is queried before local entries."""
        if self.use_ssm is not None:
            return self.use_ssm
        return not self.is_development


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
