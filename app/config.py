# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.FRONTEGG_API_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Per-application catalog variables (APP_<TYPE>_APPID, APP_<TYPE>_URL, ...)
# have dynamic names and are read by core/services/catalog_service.py instead.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
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
    # Frontegg Vendor Credentials
    # -------------------------------------------------------------------------
    # Optional at startup: the vendor-token endpoint reports a 500 when they
    # are missing instead of refusing to boot.

    FRONTEGG_CLIENT_ID: str = Field(
        default="",
        description="Frontegg vendor client ID (Admin Portal > API tokens)"
    )

    FRONTEGG_SECRET: str = Field(
        default="",
        description="Frontegg vendor API secret"
    )

    FRONTEGG_API_URL: str = Field(
        default="https://api.frontegg.com",
        description="Frontegg vendor API base URL (use https://api.us.frontegg.com for US region)"
    )

    FRONTEGG_TENANT_ASSIGNMENTS_PATH: str = Field(
        default="/applications/resources/applications/tenant-assignments/v1",
        description="Path of the tenant-to-application assignments endpoint"
    )

    FRONTEGG_USER_APPS_PATH: str = Field(
        default="/applications/resources/applications/user-apps/v1/{user_id}",
        description="Path of the user-to-application endpoint ({user_id} is substituted)"
    )

    # -------------------------------------------------------------------------
    # Frontegg Hosted Login
    # -------------------------------------------------------------------------

    FRONTEGG_BASE_URL: str = Field(
        default="https://app-example.frontegg.com",
        description="Frontegg workspace domain serving hosted login and JWKS"
    )

    FRONTEGG_APP_CLIENT_ID: str = Field(
        default="",
        description="Client ID of the Frontegg application used for hosted login"
    )

    FRONTEGG_APP_SECRET: str = Field(
        default="",
        description="Optional client secret for the hosted-login code exchange"
    )

    JWKS_CACHE_TTL: int = Field(
        default=3600,
        ge=0,
        description="Seconds to cache Frontegg JWKS signing keys"
    )

    # -------------------------------------------------------------------------
    # Vendor Token / Upstream Calls
    # -------------------------------------------------------------------------

    VENDOR_TOKEN_DEFAULT_TTL_SECONDS: int = Field(
        default=23 * 60 * 60,
        ge=1,
        description="Vendor token lifetime used when Frontegg omits expiresIn"
    )

    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for calls to the Frontegg API"
    )

    # -------------------------------------------------------------------------
    # Application Catalog
    # -------------------------------------------------------------------------

    APP_TYPES: str = Field(
        default="TRAVEL,FINTECH,BIOPHARMA,LOGISTICS",
        description="Application types to read from APP_<TYPE>_* variables (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
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

    # -------------------------------------------------------------------------
    # Security / Sessions
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing the session cookie"
    )

    SESSION_COOKIE_NAME: str = Field(
        default="fe_session",
        pattern=r"^fe_session",
        description="Session cookie name (must start with fe_session)"
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
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        # APP_<TYPE>_* catalog variables live in the same .env file
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def app_types_list(self) -> list[str]:
        """
        Parse APP_TYPES into upper-cased type names.

        Example: "travel, fintech" -> ["TRAVEL", "FINTECH"]
        """
        return [t.strip().upper() for t in self.APP_TYPES.split(",") if t.strip()]

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def frontegg_credentials_configured(self) -> bool:
        """True when both vendor credentials are set."""
        return bool(self.FRONTEGG_CLIENT_ID and self.FRONTEGG_SECRET)

    @property
    def jwks_url(self) -> str:
        return f"{self.FRONTEGG_BASE_URL.rstrip('/')}/.well-known/jwks.json"

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
