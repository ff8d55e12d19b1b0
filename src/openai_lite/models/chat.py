"""
Chat completion models.

Given a chat conversation, the model returns a chat completion, either as a
single ``ChatCompletion`` or as a stream of ``ChatCompletionDelta`` objects
that can be merged back into one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, Field, RootModel, field_validator

from ..core import Credentials, DeltaMergeError
from .common import RequestModel, Usage, WireModel
from .structured_output import (
    ChatCompletionResponseFormatJsonSchema,
    JsonSchemaStyle,
    ToolCallFunctionDefinition,
)

if TYPE_CHECKING:
    from ..services.builders import ChatCompletionBuilder


ChatCompletionMessageRole = Literal["system", "user", "assistant", "function", "tool", "developer"]

ChatCompletionReasoningEffort = Literal["low", "medium", "high"]

ToolChoiceMode = Literal["none", "auto", "required"]


class ChatCompletionFunctionCall(WireModel):
    """
    Function called by the model (deprecated in favour of tool calls).
    """

    name: str = Field(..., description="Name of the function the model called")
    arguments: str = Field(..., description="Arguments formatted in JSON")


class ChatCompletionFunctionCallDelta(WireModel):
    """
    Same as ``ChatCompletionFunctionCall``, received during a response stream.
    """

    name: Optional[str] = Field(None, description="Name of the function the model called")
    arguments: Optional[str] = Field(None, description="Fragment of the JSON arguments")

    def to_function_call(self) -> ChatCompletionFunctionCall:
        return ChatCompletionFunctionCall(name=self.name or "", arguments=self.arguments or "")


class ToolCallFunction(WireModel):
    """
    Function the model wants to call.

    The arguments are generated by the model in JSON format. The model does
    not always generate valid JSON and may hallucinate parameters, so
    validate them before calling the function.
    """

    name: str = Field(..., description="Name of the function to call")
    arguments: str = Field(..., description="Arguments formatted in JSON")


class ToolCallFunctionDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCall(WireModel):
    """
    Tool call requested by the assistant.
    """

    id: str = Field(..., description="ID of the tool call")
    type: Literal["function"] = Field("function", description="Tool type")
    function: ToolCallFunction = Field(..., description="Function the model called")


class ToolCallDelta(WireModel):
    """
    Fragment of a tool call received during a response stream.
    """

    index: int = Field(..., description="Position of the tool call in the message")
    id: Optional[str] = None
    type: Optional[Literal["function"]] = None
    function: Optional[ToolCallFunctionDelta] = None

    def merge(self, other: ToolCallDelta) -> None:
        """Append the fragment ``other`` carrying the same index."""
        if self.id is None:
            self.id = other.id
        if self.type is None:
            self.type = other.type
        if other.function is None:
            return
        if self.function is None:
            self.function = other.function.model_copy()
            return
        if self.function.name is None:
            self.function.name = other.function.name
        if other.function.arguments is not None:
            self.function.arguments = (self.function.arguments or "") + other.function.arguments

    def to_tool_call(self) -> ToolCall:
        function = self.function or ToolCallFunctionDelta()
        return ToolCall(
            id=self.id or "",
            function=ToolCallFunction(name=function.name or "", arguments=function.arguments or ""),
        )


class ChatCompletionMessage(WireModel):
    """
    Message of a chat conversation.

    ``content`` is required for every message except when the assistant
    calls a function, and is always serialized (possibly as null).
    ``tool_call_id`` is required for ``tool`` messages; ``tool_calls`` may
    only be set on ``assistant`` messages.
    """

    keep_null_fields = frozenset({"content"})
    omit_empty_lists = True

    role: ChatCompletionMessageRole = Field("user", description="Role of the message author")
    content: Optional[str] = Field(None, description="Contents of the message")
    name: Optional[str] = Field(None, description="Name of the author in a multi-user chat")
    function_call: Optional[ChatCompletionFunctionCall] = Field(
        None, description="Deprecated: function the model called"
    )
    tool_call_id: Optional[str] = Field(None, description="Tool call this message responds to")
    tool_calls: Optional[List[ToolCall]] = Field(
        None, description="Tool calls the assistant requests"
    )


class ChatCompletionMessageDelta(WireModel):
    """
    Same as ``ChatCompletionMessage``, received during a response stream.
    """

    role: Optional[ChatCompletionMessageRole] = None
    content: Optional[str] = None
    name: Optional[str] = None
    function_call: Optional[ChatCompletionFunctionCallDelta] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


class ChatCompletionFunctionDefinition(WireModel):
    """
    Function ChatGPT can call (deprecated ``functions`` API).
    """

    name: str = Field(..., description="Name of the function")
    description: Optional[str] = Field(None, description="Description of the function")
    parameters: Optional[Dict[str, Any]] = Field(
        None, description="Parameters of the function formatted in JSON Schema"
    )


class ChatCompletionTool(WireModel):
    """
    Tool the model may call. Only functions are supported.
    """

    type: Literal["function"] = "function"
    function: ToolCallFunctionDefinition

    @classmethod
    def from_model(cls, model: Type[BaseModel], strict: Optional[bool] = None) -> ChatCompletionTool:
        """Expose a function taking an instance of ``model`` as arguments."""
        return cls(function=ToolCallFunctionDefinition.from_model(model, strict))


class FunctionChoice(WireModel):
    name: str = Field(..., description="Name of the function to call")


class NamedToolChoice(WireModel):
    type: Literal["function"] = "function"
    function: FunctionChoice


class ToolChoice(RootModel[Union[ToolChoiceMode, NamedToolChoice]]):
    """
    Controls which (if any) tool is called by the model.

    ``none`` means the model generates a message instead of calling a tool,
    ``auto`` lets it pick, and ``required`` forces at least one tool call.
    A named function forces that function.
    """

    @classmethod
    def mode(cls, mode: ToolChoiceMode) -> ToolChoice:
        return cls(mode)

    @classmethod
    def function(cls, name: str) -> ToolChoice:
        return cls(NamedToolChoice(function=FunctionChoice(name=name)))


class VeniceParameters(WireModel):
    """
    Parameters unique to the Venice API (an OpenAI-compatible provider).
    """

    include_venice_system_prompt: bool


class ChatCompletionResponseFormat(WireModel):
    """
    Format the model must output.

    ``json_object`` enables JSON mode; the conversation must still instruct
    the model to produce JSON. ``json_schema`` enables structured outputs.
    """

    type: Literal["text", "json_object", "json_schema"]
    json_schema: Optional[ChatCompletionResponseFormatJsonSchema] = None

    @classmethod
    def text(cls) -> ChatCompletionResponseFormat:
        return cls(type="text")

    @classmethod
    def json_object(cls) -> ChatCompletionResponseFormat:
        return cls(type="json_object")

    @classmethod
    def from_model(
        cls, model: Type[BaseModel], strict: bool = True, style: JsonSchemaStyle = "openai"
    ) -> ChatCompletionResponseFormat:
        return cls(
            type="json_schema",
            json_schema=ChatCompletionResponseFormatJsonSchema.from_model(model, strict, style),
        )


class ChatCompletionRequest(RequestModel):
    """
    Request model for the chat completions API.
    """

    omit_empty_strings = frozenset({"user"})

    model: str = Field(..., description="ID of the model to use", min_length=1)
    messages: List[ChatCompletionMessage] = Field(..., description="Conversation so far")
    reasoning_effort: Optional[ChatCompletionReasoningEffort] = Field(
        None, description="Effort spent on reasoning by reasoning models"
    )
    temperature: Optional[float] = Field(
        None, description="Sampling temperature (0.0 to 2.0)", ge=0.0, le=2.0
    )
    top_p: Optional[float] = Field(None, description="Nucleus sampling parameter", ge=0.0, le=1.0)
    n: Optional[int] = Field(None, description="Number of choices to generate", ge=1, le=128)
    stream: Optional[bool] = Field(None, description="Whether to stream the response")
    stop: List[str] = Field(default_factory=list, description="Up to 4 stop sequences", max_length=4)
    seed: Optional[int] = Field(None, description="Seed for best-effort deterministic sampling")
    max_tokens: Optional[int] = Field(
        None, description="Deprecated: use max_completion_tokens", gt=0
    )
    max_completion_tokens: Optional[int] = Field(
        None, description="Upper bound on generated tokens, excluding reasoning", gt=0
    )
    presence_penalty: Optional[float] = Field(
        None, description="Presence penalty (-2.0 to 2.0)", ge=-2.0, le=2.0
    )
    frequency_penalty: Optional[float] = Field(
        None, description="Frequency penalty (-2.0 to 2.0)", ge=-2.0, le=2.0
    )
    logit_bias: Optional[Dict[str, float]] = Field(None, description="Token id to bias (-100 to 100)")
    user: str = Field("", description="End-user identifier for abuse monitoring")
    tools: List[ChatCompletionTool] = Field(default_factory=list, description="Tools the model may call")
    tool_choice: Optional[ToolChoice] = Field(None, description="Which tool the model calls")
    parallel_tool_calls: Optional[bool] = Field(
        None, description="Whether to enable parallel function calling"
    )
    functions: List[ChatCompletionFunctionDefinition] = Field(
        default_factory=list, description="Deprecated: use tools"
    )
    function_call: Optional[Any] = Field(None, description="Deprecated: use tool_choice")
    response_format: Optional[ChatCompletionResponseFormat] = Field(
        None, description="Output format"
    )
    venice_parameters: Optional[VeniceParameters] = Field(
        None, description="Venice API extension parameters"
    )
    credentials: Optional[Credentials] = Field(
        None, description="Credentials used to send this request", exclude=True
    )

    @field_validator("stop", mode="before")
    @classmethod
    def validate_stop(cls, v: Any) -> Any:
        """Accept a single stop sequence."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class ChatCompletionChoice(WireModel):
    """
    Individual choice in a chat completion.
    """

    index: int = Field(..., description="Index of this choice", ge=0)
    finish_reason: Optional[str] = Field(None, description="Why the model stopped")
    message: ChatCompletionMessage = Field(..., description="The generated message")


class ChatCompletionChoiceDelta(WireModel):
    """
    Choice fragment received during a response stream.
    """

    index: int = Field(..., description="Index of this choice", ge=0)
    finish_reason: Optional[str] = Field(None, description="Why the model stopped")
    delta: ChatCompletionMessageDelta = Field(default_factory=ChatCompletionMessageDelta)

    def merge(self, other: ChatCompletionChoiceDelta) -> None:
        """
        Merge the later fragment ``other`` into this choice.

        Raises:
            DeltaMergeError: If the choice indices differ.
        """
        if self.index != other.index:
            raise DeltaMergeError(
                "different_completion_choice_indices",
                details={"index": self.index, "other_index": other.index},
            )

        delta, incoming = self.delta, other.delta
        if delta.role is None:
            delta.role = incoming.role
        if delta.name is None:
            delta.name = incoming.name
        if delta.tool_call_id is None:
            delta.tool_call_id = incoming.tool_call_id
        if incoming.content is not None:
            delta.content = (delta.content or "") + incoming.content

        if incoming.function_call is not None:
            if delta.function_call is None:
                delta.function_call = incoming.function_call.model_copy()
            else:
                if delta.function_call.name is None:
                    delta.function_call.name = incoming.function_call.name
                if incoming.function_call.arguments is not None:
                    delta.function_call.arguments = (
                        (delta.function_call.arguments or "") + incoming.function_call.arguments
                    )

        for tool_call in incoming.tool_calls or []:
            if delta.tool_calls is None:
                delta.tool_calls = []
            existing = next((tc for tc in delta.tool_calls if tc.index == tool_call.index), None)
            if existing is None:
                delta.tool_calls.append(tool_call.model_copy(deep=True))
            else:
                existing.merge(tool_call)

        if other.finish_reason is not None:
            self.finish_reason = other.finish_reason

    def to_choice(self) -> ChatCompletionChoice:
        fragments = sorted(self.delta.tool_calls or [], key=lambda tc: tc.index)
        tool_calls = [tc.to_tool_call() for tc in fragments]
        return ChatCompletionChoice(
            index=self.index,
            finish_reason=self.finish_reason or "",
            message=ChatCompletionMessage(
                role=self.delta.role or "assistant",
                content=self.delta.content,
                name=self.delta.name,
                function_call=(
                    self.delta.function_call.to_function_call()
                    if self.delta.function_call is not None
                    else None
                ),
                tool_calls=tool_calls or None,
            ),
        )


class ChatCompletion(WireModel):
    """
    A full chat completion.
    """

    id: str = Field(..., description="Unique identifier for the completion")
    object: str = Field("chat.completion", description="Object type")
    created: int = Field(..., description="Unix timestamp of creation")
    model: str = Field(..., description="Model used for completion")
    choices: List[ChatCompletionChoice] = Field(..., description="List of completion choices")
    usage: Optional[Usage] = Field(None, description="Token usage information")
    system_fingerprint: Optional[str] = Field(None, description="Backend configuration fingerprint")

    @classmethod
    def builder(
        cls, model: str, messages: List[ChatCompletionMessage]
    ) -> ChatCompletionBuilder:
        """Start building a request for ``model`` with ``messages``."""
        from ..services.builders import ChatCompletionBuilder

        return ChatCompletionBuilder(model=model, messages=list(messages))


class ChatCompletionDelta(WireModel):
    """
    A delta chat completion, streamed token by token.
    """

    id: str = Field(..., description="Identifier shared by every delta of a completion")
    object: str = Field("chat.completion.chunk", description="Object type")
    created: int = Field(..., description="Unix timestamp of creation")
    model: str = Field(..., description="Model used for completion")
    choices: List[ChatCompletionChoiceDelta] = Field(default_factory=list)
    usage: Optional[Usage] = Field(None, description="Token usage (final chunk only)")
    system_fingerprint: Optional[str] = None

    def merge(self, other: ChatCompletionDelta) -> None:
        """
        Merge the later delta ``other`` into this one.

        Raises:
            DeltaMergeError: If the completion ids differ.
        """
        if other.id != self.id:
            raise DeltaMergeError(
                "different_completion_ids",
                details={"id": self.id, "other_id": other.id},
            )
        for other_choice in other.choices:
            choice = next((c for c in self.choices if c.index == other_choice.index), None)
            if choice is None:
                self.choices.append(other_choice.model_copy(deep=True))
            else:
                choice.merge(other_choice)
        if other.usage is not None:
            self.usage = other.usage
        if self.system_fingerprint is None:
            self.system_fingerprint = other.system_fingerprint

    def to_completion(self) -> ChatCompletion:
        """Convert a (merged) delta into a full completion."""
        return ChatCompletion(
            id=self.id,
            object="chat.completion",
            created=self.created,
            model=self.model,
            choices=[choice.to_choice() for choice in sorted(self.choices, key=lambda c: c.index)],
            usage=self.usage,
            system_fingerprint=self.system_fingerprint,
        )
