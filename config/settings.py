"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class PostgresSettings(BaseSettings):
    """PostgreSQL connection settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PG_", extra="ignore")

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    database: str = "rental"
    pool_min: int = 2
    pool_max: int = 10

    # Upper bound for a single statement, in seconds
    command_timeout: float = 10.0
    # Upper bound for waiting on a flat row lock, in milliseconds
    lock_timeout_ms: int = 5000


class AuthSettings(BaseSettings):
    """JWT settings for the role gate."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="AUTH_", extra="ignore")

    jwt_secret: str = "change_me_in_production_rental_jwt_secret"
    token_ttl_seconds: int = 86400  # 24 hours


class NotifierSettings(BaseSettings):
    """SMTP settings for subscriber notifications."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SMTP_", extra="ignore")

    host: str = ""  # empty = log notifications instead of sending
    port: int = 587
    user: str = ""
    password: str = ""
    sender: str = "noreply@rental.local"
    use_tls: bool = True
    timeout: float = 10.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    postgres: PostgresSettings = PostgresSettings()
    auth: AuthSettings = AuthSettings()
    notifier: NotifierSettings = NotifierSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
