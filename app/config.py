# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.USER_STORE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, so a missing Supabase
# credential stops the process before the first request is served.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Storage Backend
    # -------------------------------------------------------------------------
    # "memory" keeps users in a process-local list (lost on restart).
    # "supabase" uses the hosted users table.

    USER_STORE: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Which backend stores users"
    )

    USERS_TABLE: str = Field(
        default="users",
        min_length=1,
        description="Name of the users table in Supabase"
    )

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Required when USER_STORE=supabase (checked in _require_supabase_credentials)

    SUPABASE_URL: str = Field(
        default="",
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        default="",
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        default="",
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "preview", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    ENABLE_LOGGING: bool = Field(
        default=True,
        description="Emit INFO-level application logs (WARNING and above otherwise)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    APP_URL: str = Field(
        default="http://localhost:8000",
        description="Public base URL of this API (used by scripts and the HTTP client)"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat VAR= as unset so defaults and required checks still apply
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        """Fail fast when the Supabase backend is selected without credentials."""
        if self.USER_STORE == "supabase":
            missing = [
                name
                for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_KEY")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"Environment variable(s) {', '.join(missing)} required when USER_STORE=supabase"
                )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def log_level(self) -> str:
        """Root log level derived from DEBUG and ENABLE_LOGGING."""
        if self.DEBUG:
            return "DEBUG"
        return "INFO" if self.ENABLE_LOGGING else "WARNING"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
