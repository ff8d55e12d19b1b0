"""
Core modules for openai-lite.

This package contains the core infrastructure components including
configuration, credentials, exceptions and logging.
"""

from __future__ import annotations

from .config import Settings, get_settings, load_settings, reload_settings
from .credentials import Credentials, resolve_credentials
from .exceptions import (
    OpenAILiteError,
    APIError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    RateLimitError,
    APIConnectionError,
    APITimeoutError,
    ResponseDecodeError,
    ConfigurationError,
    BuilderError,
    DeltaMergeError,
    api_error_for_status,
    get_error_message,
)
from .logging import (
    get_logger,
    setup_logging,
    log_api_call,
    log_error,
    LoggerMixin,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
    # Credentials
    "Credentials",
    "resolve_credentials",
    # Exceptions
    "OpenAILiteError",
    "APIError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
    "APIConnectionError",
    "APITimeoutError",
    "ResponseDecodeError",
    "ConfigurationError",
    "BuilderError",
    "DeltaMergeError",
    "api_error_for_status",
    "get_error_message",
    # Logging
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_error",
    "LoggerMixin",
]
