"""
Legacy text completion models.

Given a prompt, the model returns one or more predicted completions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from ..core import Credentials
from .common import RequestModel, Usage, WireModel

if TYPE_CHECKING:
    from ..services.builders import CompletionBuilder


class CompletionRequest(RequestModel):
    """
    Request model for the text completions API.
    """

    omit_empty_strings = frozenset({"user", "prompt", "suffix"})

    model: str = Field(..., description="Model identifier", min_length=1)
    prompt: Union[str, List[str]] = Field("", description="Text prompt(s) to complete")
    suffix: Optional[str] = Field(None, description="Suffix that comes after the completion")
    max_tokens: Optional[int] = Field(None, description="Maximum number of tokens to generate", gt=0)
    temperature: Optional[float] = Field(None, description="Sampling temperature", ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, description="Nucleus sampling parameter", ge=0.0, le=1.0)
    n: Optional[int] = Field(None, description="Number of completions to generate", ge=1, le=128)
    stream: Optional[bool] = Field(None, description="Whether to stream the response")
    logprobs: Optional[int] = Field(
        None, description="Number of log probabilities to return", ge=0, le=5
    )
    echo: Optional[bool] = Field(None, description="Whether to echo the prompt in the response")
    stop: List[str] = Field(default_factory=list, description="Stop sequences", max_length=4)
    presence_penalty: Optional[float] = Field(None, description="Presence penalty", ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(
        None, description="Frequency penalty", ge=-2.0, le=2.0
    )
    best_of: Optional[int] = Field(
        None, description="Number of completions to generate server-side", ge=1, le=20
    )
    logit_bias: Optional[Dict[str, float]] = Field(None, description="Logit bias adjustments")
    user: str = Field("", description="End-user identifier for abuse monitoring")
    credentials: Optional[Credentials] = Field(None, exclude=True)

    @field_validator("stop", mode="before")
    @classmethod
    def validate_stop(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class CompletionChoice(WireModel):
    """
    Individual choice in a text completion.
    """

    text: str = Field(..., description="The completion text")
    index: int = Field(..., description="Index of this choice", ge=0)
    logprobs: Optional[Dict[str, Any]] = Field(None, description="Log probabilities for tokens")
    finish_reason: Optional[str] = Field(None, description="Why the completion finished")


class Completion(WireModel):
    """
    Response model for the text completions API.
    """

    id: str = Field(..., description="Unique identifier for the completion")
    object: str = Field("text_completion", description="Object type")
    created: int = Field(..., description="Unix timestamp of creation")
    model: str = Field(..., description="Model used for completion")
    choices: List[CompletionChoice] = Field(..., description="List of completion choices")
    usage: Optional[Usage] = Field(None, description="Token usage information")

    @classmethod
    def builder(cls, model: str) -> CompletionBuilder:
        """Start building a request for ``model``."""
        from ..services.builders import CompletionBuilder

        return CompletionBuilder(model=model)
