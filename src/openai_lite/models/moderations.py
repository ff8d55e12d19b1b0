"""
Moderation models.

Classifies whether text violates OpenAI's usage policies.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import Field

from .common import RequestModel, WireModel


class ModerationRequest(RequestModel):
    input: Union[str, List[str]] = Field(..., description="Text to classify")
    model: Optional[str] = Field(None, description="Moderation model to use")


class ModerationResult(WireModel):
    """
    Classification of one input.
    """

    flagged: bool = Field(..., description="Whether any category was flagged")
    categories: Dict[str, bool] = Field(default_factory=dict)
    category_scores: Dict[str, float] = Field(default_factory=dict)

    def flagged_categories(self) -> List[str]:
        return [name for name, flagged in self.categories.items() if flagged]


class Moderation(WireModel):
    id: str
    model: str
    results: List[ModerationResult] = Field(default_factory=list)
