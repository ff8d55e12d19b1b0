"""
API credentials for openai-lite.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_BASE_URL, load_settings
from .exceptions import ConfigurationError


class Credentials(BaseModel):
    """
    API key and base URL used to reach an OpenAI-compatible endpoint.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(..., description="Bearer token", min_length=1, repr=False)
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL")

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return DEFAULT_BASE_URL
        return v if v.endswith("/") else v + "/"

    @classmethod
    def from_env(cls) -> Credentials:
        """
        Read credentials from ``OPENAI_KEY`` (or ``OPENAI_API_KEY``) and
        ``OPENAI_BASE_URL``, including values from a ``.env`` file. The
        environment is read on every call.

        Raises:
            ConfigurationError: If no API key is configured or a value is invalid.
        """
        config = load_settings().openai
        if not config.key:
            raise ConfigurationError(
                "No API key configured; set OPENAI_KEY or pass credentials",
                error_code="missing_api_key",
            )
        return cls(api_key=config.key, base_url=config.base_url)

    @property
    def authorization(self) -> str:
        return f"Bearer {self.api_key}"


def resolve_credentials(credentials: Optional[Credentials]) -> Credentials:
    """Return ``credentials`` or fall back to the environment."""
    return credentials if credentials is not None else Credentials.from_env()
