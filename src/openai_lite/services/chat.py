"""
Chat completions service.
"""

from __future__ import annotations

from contextlib import aclosing
from typing import AsyncGenerator, AsyncIterator, Optional

from ..core import ResponseDecodeError
from ..models import ChatCompletion, ChatCompletionDelta, ChatCompletionRequest
from .base import BaseService


class ChatService(BaseService):
    """Service for the ``chat/completions`` endpoint."""

    endpoint = "chat/completions"

    async def create(self, request: ChatCompletionRequest) -> ChatCompletion:
        """
        Create a chat completion.

        The request is always sent without streaming; use ``create_stream``
        for incremental results.
        """
        payload = request.to_payload()
        payload.pop("stream", None)
        self.logger.debug("Creating chat completion", model=request.model, messages=len(request.messages))
        body = await self.http.post(self.endpoint, json=payload)
        return self.parse(ChatCompletion, body)

    async def create_stream(self, request: ChatCompletionRequest) -> AsyncIterator[ChatCompletionDelta]:
        """
        Create a chat completion streamed as server-sent events.

        Yields:
            One ``ChatCompletionDelta`` per event, in arrival order.
        """
        payload = request.to_payload()
        payload["stream"] = True
        self.logger.debug("Streaming chat completion", model=request.model, messages=len(request.messages))
        async with aclosing(self.http.stream_events("POST", self.endpoint, json=payload)) as events:
            async for event in events:
                yield self.parse(ChatCompletionDelta, event)


async def collect_stream(stream: AsyncGenerator[ChatCompletionDelta, None]) -> ChatCompletion:
    """
    Merge every delta of ``stream`` into one completion.

    Raises:
        ResponseDecodeError: If the stream produced no delta
        DeltaMergeError: If the deltas belong to different completions
    """
    merged: Optional[ChatCompletionDelta] = None
    async with aclosing(stream) as deltas:
        async for delta in deltas:
            if merged is None:
                merged = delta.model_copy(deep=True)
            else:
                merged.merge(delta)
    if merged is None:
        raise ResponseDecodeError("Chat completion stream ended without any delta")
    return merged.to_completion()
