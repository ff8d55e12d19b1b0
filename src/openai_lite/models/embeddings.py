"""
Embedding models.

An embedding is a vector representation of a given input that can be
easily consumed by machine learning models and algorithms.
"""

from __future__ import annotations

import math
from typing import List, Union

from pydantic import Field, field_validator

from .common import RequestModel, WireModel


class EmbeddingsRequest(RequestModel):
    """
    Request model for the embeddings API.
    """

    omit_empty_strings = frozenset({"user"})

    model: str = Field(..., description="ID of the model to use", min_length=1)
    input: Union[str, List[str], List[int], List[List[int]]] = Field(
        ..., description="Text or tokens to embed"
    )
    user: str = Field("", description="End-user identifier for abuse monitoring")

    @field_validator("input")
    @classmethod
    def validate_input(cls, v):
        if isinstance(v, list) and not v:
            raise ValueError("input must not be empty")
        return v


class EmbeddingsUsage(WireModel):
    prompt_tokens: int = Field(0, ge=0)
    total_tokens: int = Field(0, ge=0)


class Embedding(WireModel):
    """
    A single embedding vector.
    """

    vec: List[float] = Field(..., alias="embedding", description="The embedding vector")
    index: int = Field(0, description="Position of the input this embedding belongs to")

    def magnitude(self) -> float:
        """Euclidean norm of the vector."""
        return math.sqrt(sum(x * x for x in self.vec))

    def distance(self, other: Embedding) -> float:
        """
        Cosine distance to ``other``: 0 for parallel, 1 for orthogonal vectors.

        NaN when either vector has zero magnitude.
        """
        dot_product = sum(x * y for x, y in zip(self.vec, other.vec))
        product_of_magnitudes = self.magnitude() * other.magnitude()
        if product_of_magnitudes == 0:
            return math.nan
        return 1.0 - dot_product / product_of_magnitudes


class Embeddings(WireModel):
    """
    Response model for the embeddings API.
    """

    object: str = "list"
    data: List[Embedding] = Field(..., description="One embedding per input")
    model: str = Field(..., description="Model used")
    usage: EmbeddingsUsage = Field(default_factory=EmbeddingsUsage)

    def distances(self) -> List[float]:
        """Distance between each consecutive pair of embeddings."""
        return [
            current.distance(previous)
            for previous, current in zip(self.data, self.data[1:])
        ]
