"""Application configuration and settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    # Application
    app_name: str = "Instance Command API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # HTTP
    cors_origins: list[str] = ["*"]

    # Include the traceback in 500 responses (meant for test automation setups)
    include_error_stack: bool = True

    # Names of in-memory instances to register at startup
    bootstrap_instances: list[str] = []


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
