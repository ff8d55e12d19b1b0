"""
Custom exceptions for openai-lite.

Every error raised by the library derives from ``OpenAILiteError`` and can be
rendered back into the OpenAI error envelope with ``to_dict()``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class OpenAILiteError(Exception):
    """Base exception for all openai-lite errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "openai_lite_error",
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        error_dict = {
            "message": self.message,
            "type": self.error_type,
        }

        if self.error_code:
            error_dict["code"] = self.error_code

        if self.details:
            error_dict.update(self.details)

        return {"error": error_dict}


class APIError(OpenAILiteError):
    """The API answered with an error envelope or a non-2xx status."""

    def __init__(
        self,
        message: str = "OpenAI API error",
        error_type: str = "api_error",
        error_code: Optional[str] = None,
        param: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_type=error_type,
            error_code=error_code,
            status_code=status_code,
            details=details
        )
        self.param = param

    def to_dict(self) -> Dict[str, Any]:
        error_dict = super().to_dict()
        if self.param:
            error_dict["error"]["param"] = self.param
        return error_dict


class AuthenticationError(APIError):
    """Invalid or missing API key (HTTP 401)."""


class PermissionDeniedError(APIError):
    """The key is not allowed to use the resource (HTTP 403)."""


class NotFoundError(APIError):
    """Unknown model, file or endpoint (HTTP 404)."""


class RateLimitError(APIError):
    """Rate limit or quota exceeded (HTTP 429)."""


class APIConnectionError(OpenAILiteError):
    """The request never produced a response."""

    def __init__(
        self,
        message: str = "Connection error",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_type="connection_error",
            details=details
        )


class APITimeoutError(APIConnectionError):
    """The request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_type = "timeout_error"
        self.error_code = "timeout"


class ResponseDecodeError(OpenAILiteError):
    """A response body or stream event was not the expected JSON."""

    def __init__(
        self,
        message: str = "Malformed response body",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_type="decode_error",
            status_code=status_code,
            details=details
        )


class ConfigurationError(OpenAILiteError):
    """Configuration related errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_type="configuration_error",
            error_code=error_code,
            details=details
        )


class BuilderError(OpenAILiteError):
    """A request builder could not produce a valid request."""

    def __init__(
        self,
        message: str = "Invalid request",
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_type="invalid_request_error",
            error_code="invalid_parameters",
            details=details
        )


class DeltaMergeError(OpenAILiteError):
    """Two streamed chat completion deltas cannot be merged."""

    def __init__(self, error_code: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=get_error_message(error_code),
            error_type="delta_merge_error",
            error_code=error_code,
            details=details
        )


# Status codes with a dedicated exception class
STATUS_ERRORS = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    429: RateLimitError,
}


ERROR_CODES = {
    # Client-side errors
    "missing_api_key": "No API key configured; set OPENAI_KEY or pass credentials",
    "invalid_configuration": "Invalid openai-lite configuration",
    "invalid_parameters": "One or more parameters are invalid",
    "timeout": "Request timed out",

    # Stream merging
    "different_completion_ids": "Different completion IDs",
    "different_completion_choice_indices": "Different completion choice indices",
}


def get_error_message(error_code: str) -> str:
    """Get human-readable error message for error code."""
    return ERROR_CODES.get(error_code, "An unknown error occurred")


def api_error_for_status(
    status_code: Optional[int],
    message: str,
    error_type: str = "api_error",
    error_code: Optional[str] = None,
    param: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> APIError:
    """Build the ``APIError`` subclass matching an HTTP status."""
    error_cls = STATUS_ERRORS.get(status_code or 0, APIError)
    return error_cls(
        message=message,
        error_type=error_type,
        error_code=error_code,
        param=param,
        status_code=status_code,
        details=details,
    )
