# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   app = create_app(settings)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are built once at process start and handed to create_app() and
# serve(); no other module reads the environment.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables.

    Only PORT is expected to change between deployments; everything else
    has a default matching the public API contract.
    """

    # -------------------------------------------------------------------------
    # Listening Socket
    # -------------------------------------------------------------------------

    PORT: int = Field(
        default=3000,
        ge=0,
        le=65535,
        description="Port for the API server"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to (all interfaces)"
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
        description="Enable debug logging"
    )

    # -------------------------------------------------------------------------
    # CORS Policy
    # -------------------------------------------------------------------------
    # Comma-separated strings that get parsed into lists

    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    CORS_METHODS: str = Field(
        default="GET,POST,PUT,DELETE,OPTIONS",
        description="Allowed CORS methods (comma-separated)"
    )

    CORS_HEADERS: str = Field(
        default="Content-Type,Authorization",
        description="Allowed CORS request headers (comma-separated)"
    )

    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=False,
        description="Whether credentialed cross-origin requests are allowed"
    )

    # -------------------------------------------------------------------------
    # Body Decoding
    # -------------------------------------------------------------------------

    BODY_LIMIT_BYTES: int = Field(
        default=100 * 1024,
        ge=1,
        description="Maximum JSON/form body size in bytes"
    )

    URLENCODED_PARAMETER_LIMIT: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of fields in a form body"
    )

    URLENCODED_DEPTH: int = Field(
        default=5,
        ge=0,
        description="Maximum bracket nesting depth for form field names"
    )

    # -------------------------------------------------------------------------
    # Route Groups
    # -------------------------------------------------------------------------
    # Import paths of the form "package.module:attribute"

    AUTH_ROUTES: str = Field(
        default="app.routers.auth:router",
        description="Handler mounted at /api/auth"
    )

    BUS_ROUTES: str = Field(
        default="app.routers.buses:router",
        description="Handler mounted at /api/buses"
    )

    BOOKING_ROUTES: str = Field(
        default="app.routers.bookings:router",
        description="Handler mounted at /api/bookings"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "https://a.com, https://b.com" -> ["https://a.com", "https://b.com"]
        """
        return _split_csv(self.CORS_ORIGINS)

    @property
    def cors_methods_list(self) -> list[str]:
        return [method.upper() for method in _split_csv(self.CORS_METHODS)]

    @property
    def cors_headers_list(self) -> list[str]:
        return _split_csv(self.CORS_HEADERS)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once
    per process.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
