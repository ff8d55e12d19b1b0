"""
Embeddings service.
"""

from __future__ import annotations

from typing import List

from ..core import ResponseDecodeError
from ..models import Embedding, Embeddings, EmbeddingsRequest
from .base import BaseService


class EmbeddingService(BaseService):
    """Service for the ``embeddings`` endpoint."""

    endpoint = "embeddings"

    async def create(self, model: str, input: List[str], user: str = "") -> Embeddings:
        """
        Create embedding vectors representing the input texts.

        Args:
            model: ID of the model to use
            input: Texts to embed; each must not exceed the model's token limit
            user: End-user identifier for abuse monitoring

        Returns:
            One embedding per input, in input order
        """
        request = EmbeddingsRequest(model=model, input=list(input), user=user)
        body = await self.http.post(self.endpoint, json=request.to_payload())
        embeddings = self.parse(Embeddings, body)
        embeddings.data.sort(key=lambda embedding: embedding.index)
        return embeddings

    async def create_one(self, model: str, input: str, user: str = "") -> Embedding:
        """Create the embedding vector of a single text."""
        embeddings = await self.create(model, [input], user)
        if not embeddings.data:
            raise ResponseDecodeError("Embeddings response contained no data")
        return embeddings.data[0]
