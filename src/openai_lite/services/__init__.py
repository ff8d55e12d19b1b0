"""
Service modules for openai-lite.

This package contains one service per endpoint family, the ``OpenAIClient``
facade tying them together, and the fluent request builders.
"""

from __future__ import annotations

from .base import BaseService
from .chat import ChatService, collect_stream
from .completions import CompletionService
from .embeddings import EmbeddingService
from .files import FileService
from .models import ModelService
from .moderations import ModerationService
from .client import OpenAIClient
from .builders import ChatCompletionBuilder, CompletionBuilder, RequestBuilder

__all__ = [
    "BaseService",
    # Endpoint services
    "ChatService",
    "collect_stream",
    "CompletionService",
    "EmbeddingService",
    "FileService",
    "ModelService",
    "ModerationService",
    # Facade
    "OpenAIClient",
    # Builders
    "ChatCompletionBuilder",
    "CompletionBuilder",
    "RequestBuilder",
]
