"""
Configuration.

Values come from environment variables (or .env), grouped by prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorsConfig(BaseSettings):
    """Error response configuration."""

    model_config = SettingsConfigDict(env_prefix="ERRORS_", env_file=".env", extra="ignore")

    # Response header carrying HttpError.code; empty disables it
    error_code_header: str = "X-Error-Code"
    include_trace_id: bool = True
    # 4xx errors are logged at INFO when set, DEBUG otherwise
    log_client_errors: bool = False


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = "INFO"
    # "console" or "json"
    format: str = "console"


class AppConfig(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    name: str = "httperror"
    debug: bool = False


class Settings:
    """Aggregate of all configuration groups."""

    def __init__(self) -> None:
        self.errors = ErrorsConfig()
        self.logging = LoggingConfig()
        self.app = AppConfig()


@lru_cache
def get_settings() -> Settings:
    """Settings singleton (cached)."""
    return Settings()
