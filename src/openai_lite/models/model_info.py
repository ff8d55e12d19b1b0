"""
Model listing models.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from .common import WireModel


class Model(WireModel):
    """
    Information about a single model.
    """

    id: str = Field(..., description="Model identifier", min_length=1)
    object: str = Field("model", description="Object type")
    created: int = Field(0, description="Unix timestamp of model creation")
    owned_by: str = Field("openai", description="Organization that owns the model")


class ModelList(WireModel):
    """
    Response model for the models list API.
    """

    object: str = Field("list", description="Object type")
    data: List[Model] = Field(default_factory=list, description="List of available models")
