"""
Legacy text completions service.
"""

from __future__ import annotations

from ..models import Completion, CompletionRequest
from .base import BaseService


class CompletionService(BaseService):
    """Service for the ``completions`` endpoint."""

    endpoint = "completions"

    async def create(self, request: CompletionRequest) -> Completion:
        payload = request.to_payload()
        payload.pop("stream", None)
        body = await self.http.post(self.endpoint, json=payload)
        return self.parse(Completion, body)
