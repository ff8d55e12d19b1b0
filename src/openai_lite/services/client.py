"""
OpenAI API client facade.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..core import Credentials, LoggerMixin, resolve_credentials
from ..utils.http_client import HTTPClient
from .chat import ChatService
from .completions import CompletionService
from .embeddings import EmbeddingService
from .files import FileService
from .models import ModelService
from .moderations import ModerationService


class OpenAIClient(LoggerMixin):
    """
    Entry point to every endpoint, sharing one HTTP connection pool.

    Usage::

        async with OpenAIClient() as client:
            completion = await client.chat.create(request)
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = resolve_credentials(credentials)
        self.http = HTTPClient(self.credentials, timeout=timeout, transport=transport)

        self.chat = ChatService(self.http)
        self.completions = CompletionService(self.http)
        self.embeddings = EmbeddingService(self.http)
        self.files = FileService(self.http)
        self.models = ModelService(self.http)
        self.moderations = ModerationService(self.http)

    async def __aenter__(self) -> OpenAIClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http.close()
