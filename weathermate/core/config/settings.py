#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
recommendation core. Credentials and provider endpoints are read from the
environment (or a `.env` file) and validated once at startup.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Providers whose credentials are missing are skipped, not failed
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LyzrSettings(BaseSettings):
    """
    Primary provider (Lyzr agent platform) configuration.

    STAGE-0.1: Primary provider configuration
    """

    LYZR_API_KEY: str | None = Field(default=None, description="Lyzr API key (x-api-key header)")
    LYZR_BASE_URL: str = Field(
        default="https://agent-prod.studio.lyzr.ai",
        description="Lyzr agent API server"
    )
    LYZR_USER_ID: str = Field(default="weathermate_user", description="User id sent with chat messages")
    LYZR_AGENT_NAME: str = Field(default="WeatherAgent", description="Name of the created agent")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class GeminiSettings(BaseSettings):
    """
    Secondary provider (Google Gemini REST API) configuration.

    STAGE-0.2: Secondary provider configuration

    The Gemini key is also handed to Lyzr as the environment's LLM credential.
    """

    GEMINI_API_KEY: str | None = Field(default=None, description="Gemini API key / bearer token")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini base URL"
    )
    GEMINI_MODEL: str = Field(default="gemini-pro", description="Model used for generateContent")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """General application settings."""

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="WeatherMate", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from weathermate.core.config.settings import get_settings

        settings = get_settings()
        lyzr_key = settings.lyzr.LYZR_API_KEY
        model = settings.gemini.GEMINI_MODEL
    """

    # Primary provider
    LYZR_API_KEY: str | None = Field(default=None, description="Lyzr API key (x-api-key header)")
    LYZR_BASE_URL: str = Field(
        default="https://agent-prod.studio.lyzr.ai",
        description="Lyzr agent API server"
    )
    LYZR_USER_ID: str = Field(default="weathermate_user", description="User id sent with chat messages")
    LYZR_AGENT_NAME: str = Field(default="WeatherAgent", description="Name of the created agent")

    # Secondary provider
    GEMINI_API_KEY: str | None = Field(default=None, description="Gemini API key / bearer token")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini base URL"
    )
    GEMINI_MODEL: str = Field(default="gemini-pro", description="Model used for generateContent")

    # None leaves every remote call without a client-side timeout
    PROVIDER_TIMEOUT: float | None = Field(
        default=None,
        description="Per-request timeout in seconds for provider calls"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="WeatherMate", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("PROVIDER_TIMEOUT")
    @classmethod
    def validate_provider_timeout(cls, v):
        """Timeouts must be positive when given."""
        if v is not None and v <= 0:
            raise ValueError("PROVIDER_TIMEOUT must be positive")
        return v

    @field_validator("LYZR_BASE_URL", "GEMINI_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Endpoint paths are appended to base URLs verbatim."""
        return v.rstrip("/")

    # Grouped views
    @property
    def lyzr(self) -> 'LyzrSettings':
        """Get primary provider settings."""
        return LyzrSettings(
            LYZR_API_KEY=self.LYZR_API_KEY,
            LYZR_BASE_URL=self.LYZR_BASE_URL,
            LYZR_USER_ID=self.LYZR_USER_ID,
            LYZR_AGENT_NAME=self.LYZR_AGENT_NAME
        )

    @property
    def gemini(self) -> 'GeminiSettings':
        """Get secondary provider settings."""
        return GeminiSettings(
            GEMINI_API_KEY=self.GEMINI_API_KEY,
            GEMINI_BASE_URL=self.GEMINI_BASE_URL,
            GEMINI_MODEL=self.GEMINI_MODEL
        )

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT
        )

    @property
    def app(self) -> 'ApplicationSettings':
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Cached settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the cached settings instance.

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Settings loaded on first access
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
