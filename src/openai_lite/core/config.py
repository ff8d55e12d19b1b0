"""
Configuration management for openai-lite.

This module handles library configuration using Pydantic Settings
for environment variable management and validation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


DEFAULT_BASE_URL = "https://api.openai.com/v1/"


class OpenAIConfig(BaseSettings):
    """OpenAI API connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_KEY", "OPENAI_API_KEY"),
        description="API key sent as a bearer token",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API base URL",
    )
    timeout: float = Field(
        default=60.0,
        description="HTTP timeout in seconds",
        gt=0,
        le=600,
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Normalize the base URL so relative endpoint paths join under it."""
        v = v.strip()
        if not v:
            return DEFAULT_BASE_URL
        return v if v.endswith("/") else v + "/"


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    level: str = Field(
        default="WARNING",
        description="Logging level"
    )
    format: str = Field(
        default="text",
        description="Log format (json or text)"
    )
    file_path: Optional[str] = Field(
        default=None,
        description="Log file path (optional)"
    )
    max_file_size: int = Field(
        default=10485760,  # 10MB
        description="Maximum log file size in bytes",
        ge=1048576,  # 1MB
        le=104857600  # 100MB
    )
    backup_count: int = Field(
        default=5,
        description="Number of backup log files",
        ge=1,
        le=20
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {"json", "text"}
        if v.lower() not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return v.lower()


class Settings(BaseSettings):
    """Top-level library settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="openai-lite",
        description="Name reported in the User-Agent header"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Version reported in the User-Agent header"
    )

    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Global settings instance, built on first use
settings: Optional[Settings] = None


def load_settings() -> Settings:
    """
    Read settings from the environment and ``.env``.

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid openai-lite configuration: {e.error_count()} invalid value(s)",
            error_code="invalid_configuration",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e


def get_settings() -> Settings:
    """Get library settings."""
    global settings
    if settings is None:
        settings = load_settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = None
    settings = load_settings()
    return settings
