"""
Shared base models for openai-lite.

``WireModel`` is the base of every DTO: it keeps unknown fields the API may
add and, when serialized, omits unset optional values so payloads match
what the API expects.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class WireModel(BaseModel):
    """
    Base model for request and response payloads.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Fields serialized even when None
    keep_null_fields: ClassVar[FrozenSet[str]] = frozenset()
    # String fields omitted when empty
    omit_empty_strings: ClassVar[FrozenSet[str]] = frozenset()
    # Whether empty lists are omitted; responses keep them
    omit_empty_lists: ClassVar[bool] = False

    @model_serializer(mode="wrap")
    def serialize_without_unset(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not _is_omitted(key, value, self)
        }


class RequestModel(WireModel):
    """
    Base model for request bodies; unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    omit_empty_lists = True

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body sent to the API."""
        return self.model_dump(mode="json", by_alias=True)


def _is_omitted(key: str, value: Any, model: WireModel) -> bool:
    if value is None:
        return key not in model.keep_null_fields
    if isinstance(value, list) and not value:
        return model.omit_empty_lists
    return value == "" and key in model.omit_empty_strings


class Usage(WireModel):
    """
    Token usage information.
    """

    prompt_tokens: int = Field(0, description="Number of tokens in the prompt", ge=0)
    completion_tokens: int = Field(0, description="Number of tokens in the completion", ge=0)
    total_tokens: int = Field(0, description="Total number of tokens used", ge=0)


class ApiErrorDetail(WireModel):
    """
    Body of the ``{"error": {...}}`` envelope returned by the API.
    """

    message: Optional[str] = Field(None, description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error category")
    param: Optional[str] = Field(None, description="Offending request parameter")
    code: Optional[Union[str, int]] = Field(None, description="Machine-readable error code")
