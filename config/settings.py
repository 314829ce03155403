"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # APIFY (SCRAPE SERVICE)
    # ===================
    apify_token: Optional[str] = Field(
        None,
        description="Apify API token"
    )
    apify_task_id: Optional[str] = Field(
        None,
        description="Apify actor task ID for the cruise itinerary scraper"
    )
    apify_base_url: str = Field(
        default="https://api.apify.com/v2",
        description="Apify API base URL"
    )
    apify_wait_for_finish_seconds: int = Field(
        default=120,
        ge=1,
        le=300,
        description="Seconds Apify blocks a task run before returning"
    )
    apify_http_timeout_seconds: float = Field(
        default=150.0,
        ge=1,
        le=600,
        description="HTTP client timeout (must exceed the wait ceiling)"
    )

    # ===================
    # DEBUG LOG
    # ===================
    recent_events_capacity: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Number of webhook events kept for /debug/webhooks"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=3000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def apify_configured(self) -> bool:
        """Check if Apify credentials are present."""
        return bool(self.apify_token and self.apify_task_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
