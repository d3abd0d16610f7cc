"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Supabase credentials are optional here so a missing value surfaces
    as a ConfigurationError at call time instead of a crash on import.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key"
    )
    supabase_service_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("supabase_service_key", "supabase_service_role_key"),
        description="Supabase service role key (holiday sync upserts)"
    )

    # ===================
    # HOLIDAY SYNC
    # ===================
    holiday_api_url: str = Field(
        default="https://nolaborables.com.ar/api/v2/feriados",
        description="Base URL of the public holiday API (year is appended)"
    )
    holiday_api_timeout: int = Field(
        default=15,
        ge=1,
        le=120,
        description="Seconds to wait for the holiday API"
    )
    cron_secret: Optional[str] = Field(
        None,
        description="Bearer token required by the sync endpoint (open if unset)"
    )

    # ===================
    # DASHBOARD
    # ===================
    delay_tolerance_days: float = Field(
        default=0.5,
        ge=0,
        le=30,
        description="Delay above this many days marks production as behind"
    )
    dashboard_view: str = Field(
        default="v_dashboard_main",
        description="Pre-aggregated view feeding the dashboard"
    )

    # ===================
    # SESSION
    # ===================
    session_cookie_name: str = Field(
        default="sb_access_token",
        description="Cookie holding the Supabase access token"
    )
    session_max_age: int = Field(
        default=3600,
        ge=60,
        description="Session cookie lifetime in seconds"
    )
    cookie_secure: bool = Field(
        default=False,
        description="Send session cookie over HTTPS only"
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
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed by CORS"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if the public Supabase client can be built."""
        return bool(self.supabase_url and self.supabase_key)

    @property
    def admin_configured(self) -> bool:
        """Check if the service-role Supabase client can be built."""
        return bool(self.supabase_url and self.supabase_service_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
