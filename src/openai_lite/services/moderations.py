"""
Moderations service.
"""

from __future__ import annotations

from typing import List, Optional, Union

from ..models import Moderation, ModerationRequest
from .base import BaseService


class ModerationService(BaseService):
    """Service for the ``moderations`` endpoint."""

    endpoint = "moderations"

    async def create(self, input: Union[str, List[str]], model: Optional[str] = None) -> Moderation:
        request = ModerationRequest(input=input, model=model)
        body = await self.http.post(self.endpoint, json=request.to_payload())
        moderation = self.parse(Moderation, body)
        flagged = sum(1 for result in moderation.results if result.flagged)
        if flagged:
            self.logger.info("Moderation flagged input", flagged=flagged, total=len(moderation.results))
        return moderation
