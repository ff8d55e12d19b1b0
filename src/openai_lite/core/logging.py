"""
Logging configuration for openai-lite.

This module sets up structured logging using structlog with support for
both JSON and human-readable formats. The processor chain is bound to
each library logger with ``structlog.wrap_logger`` and output goes to the
``openai_lite`` stdlib logger, so the global structlog configuration stays
with the host application.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import FilteringBoundLogger

from .config import LoggingConfig, get_settings


SENSITIVE_KEYS = {
    "authorization", "api_key", "key", "token", "secret", "password",
    "openai_key", "openai_api_key", "credentials",
}

_processors: list[Any] = []
_wrapper_class: Optional[type] = None


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Setup library logging configuration.

    Args:
        config: Logging configuration. If None, uses settings from environment.
    """
    global _wrapper_class
    if config is None:
        config = get_settings().logging

    level = getattr(logging, config.level)
    stdlib_logger = logging.getLogger("openai_lite")
    stdlib_logger.setLevel(level)
    stdlib_logger.handlers = _get_handlers(config)
    stdlib_logger.propagate = False

    # Updated in place so loggers handed out earlier pick up the new chain
    _processors[:] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _filter_sensitive_data,
        structlog.processors.JSONRenderer() if config.format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    ]
    _wrapper_class = structlog.make_filtering_bound_logger(level)


def _get_handlers(config: LoggingConfig) -> list[logging.Handler]:
    """Get logging handlers based on configuration."""
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers.append(console_handler)

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    return handlers


def _filter_sensitive_data(
    logger: FilteringBoundLogger,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Filter sensitive data from log entries."""

    def _filter(data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: "[REDACTED]" if str(key).lower() in SENSITIVE_KEYS
                else _filter(value)
                for key, value in data.items()
            }
        if isinstance(data, list):
            return [_filter(item) for item in data]
        if isinstance(data, str) and data.startswith("Bearer "):
            return "[REDACTED]"
        return data

    return _filter(event_dict)


def get_logger(name: str = "openai_lite") -> FilteringBoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Configured structlog logger instance.
    """
    if _wrapper_class is None:
        setup_logging()
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors,
        wrapper_class=_wrapper_class,
    )


def log_api_call(
    logger: FilteringBoundLogger,
    endpoint: str,
    method: str,
    status_code: int,
    duration_ms: float,
    request_size: Optional[int] = None,
    response_size: Optional[int] = None
) -> None:
    """Log a completed call to the OpenAI API."""
    logger.info(
        "API call",
        endpoint=endpoint,
        method=method,
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
        request_size=request_size,
        response_size=response_size
    )


def log_error(
    logger: FilteringBoundLogger,
    error: Exception,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """Log errors with context."""
    logger.error(
        "Error occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        **(context or {})
    )


class LoggerMixin:
    """Mixin class to add logging capabilities to other classes."""

    @property
    def logger(self) -> FilteringBoundLogger:
        """Get logger instance for this class."""
        return get_logger(self.__class__.__module__ + "." + self.__class__.__name__)
