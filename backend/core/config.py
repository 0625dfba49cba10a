"""
Configuration management for the suggestion box service.

Settings are read from environment variables (or a local ``.env`` file) so
that secrets never live in the source tree.
"""

from functools import lru_cache
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database Configuration
    database_url: str = "sqlite:///./suggestion_box.db"
    log_sql_queries: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    auto_create_tables: bool = True

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_issuer: str = "suggestion-box-api"
    jwt_audience: str = "suggestion-box-admin"
    jwt_leeway_seconds: int = 30

    # HTTP
    cors_origins: str = "http://localhost:3000"
    public_origin: str = "http://localhost:3000"

    # Suggestion boxes
    default_box_color: str = "#3B82F6"

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_jwt_secret(self):
        """Ensure JWT secret is not using default in production."""
        if self.is_production and self.jwt_secret_key == DEV_JWT_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value in production"
            )
        return self

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported LOG_LEVEL: {v}")
        return level

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse CORS origins from the comma separated setting."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()


def validate_production_config(current: Settings = settings) -> None:
    """Validate configuration for production deployment."""
    if not current.is_production:
        return

    security_issues = []

    if current.jwt_secret_key == DEV_JWT_SECRET:
        security_issues.append("JWT_SECRET_KEY is using default value")

    if current.debug:
        security_issues.append("DEBUG is enabled in production")

    if current.is_sqlite:
        security_issues.append("DATABASE_URL points at a SQLite file")

    if security_issues:
        raise ValueError(
            f"Production security issues detected: {', '.join(security_issues)}"
        )


# Validate on import if in production
if settings.is_production:
    validate_production_config()
