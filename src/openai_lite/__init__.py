"""
openai-lite - an unofficial async client library for the OpenAI API.

This package exposes OpenAI's REST and server-sent event endpoints as typed
Pydantic models and thin async services over httpx.
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"
__description__ = "An unofficial async client library for the OpenAI API"

from .core import (
    Credentials,
    get_settings,
    get_logger,
    OpenAILiteError,
    APIError,
    APIConnectionError,
    APITimeoutError,
    AuthenticationError,
    BuilderError,
    ConfigurationError,
    DeltaMergeError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ResponseDecodeError,
)
from .models import (
    ChatCompletion,
    ChatCompletionDelta,
    ChatCompletionMessage,
    ChatCompletionResponseFormat,
    ChatCompletionTool,
    Completion,
    Embedding,
    Embeddings,
    ToolChoice,
)
from .services import OpenAIClient, ChatCompletionBuilder, CompletionBuilder, collect_stream

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Credentials",
    "get_settings",
    "get_logger",
    # Errors
    "OpenAILiteError",
    "APIError",
    "APIConnectionError",
    "APITimeoutError",
    "AuthenticationError",
    "BuilderError",
    "ConfigurationError",
    "DeltaMergeError",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
    "ResponseDecodeError",
    # Models
    "ChatCompletion",
    "ChatCompletionDelta",
    "ChatCompletionMessage",
    "ChatCompletionResponseFormat",
    "ChatCompletionTool",
    "Completion",
    "Embedding",
    "Embeddings",
    "ToolChoice",
    # Client
    "OpenAIClient",
    "ChatCompletionBuilder",
    "CompletionBuilder",
    "collect_stream",
]
