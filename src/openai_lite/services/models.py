"""
Model listing service.
"""

from __future__ import annotations

from ..models import Model, ModelList
from .base import BaseService


class ModelService(BaseService):
    """Service for the ``models`` endpoints."""

    endpoint = "models"

    async def list(self) -> ModelList:
        body = await self.http.get(self.endpoint)
        models = self.parse(ModelList, body)
        self.logger.debug("Listed models", count=len(models.data))
        return models

    async def retrieve(self, model_id: str) -> Model:
        body = await self.http.get(f"{self.endpoint}/{model_id}")
        return self.parse(Model, body)
