"""
openai-lite data models.

This module provides the Pydantic models mirroring the OpenAI API's request
and response schemas.
"""

from __future__ import annotations

from .common import ApiErrorDetail, RequestModel, Usage, WireModel

# Chat completions
from .chat import (
    ChatCompletion,
    ChatCompletionChoice,
    ChatCompletionChoiceDelta,
    ChatCompletionDelta,
    ChatCompletionFunctionCall,
    ChatCompletionFunctionCallDelta,
    ChatCompletionFunctionDefinition,
    ChatCompletionMessage,
    ChatCompletionMessageDelta,
    ChatCompletionMessageRole,
    ChatCompletionReasoningEffort,
    ChatCompletionRequest,
    ChatCompletionResponseFormat,
    ChatCompletionTool,
    FunctionChoice,
    NamedToolChoice,
    ToolCall,
    ToolCallDelta,
    ToolCallFunction,
    ToolCallFunctionDelta,
    ToolChoice,
    ToolChoiceMode,
    VeniceParameters,
)
from .structured_output import (
    ChatCompletionResponseFormatJsonSchema,
    JsonSchemaStyle,
    ToolCallFunctionDefinition,
    json_schema_for,
)

# Other endpoints
from .completions import Completion, CompletionChoice, CompletionRequest
from .embeddings import Embedding, Embeddings, EmbeddingsRequest, EmbeddingsUsage
from .files import DeletedFile, File, FileList
from .model_info import Model, ModelList
from .moderations import Moderation, ModerationRequest, ModerationResult

__all__ = [
    # Shared
    "ApiErrorDetail",
    "RequestModel",
    "Usage",
    "WireModel",
    # Chat
    "ChatCompletion",
    "ChatCompletionChoice",
    "ChatCompletionChoiceDelta",
    "ChatCompletionDelta",
    "ChatCompletionFunctionCall",
    "ChatCompletionFunctionCallDelta",
    "ChatCompletionFunctionDefinition",
    "ChatCompletionMessage",
    "ChatCompletionMessageDelta",
    "ChatCompletionMessageRole",
    "ChatCompletionReasoningEffort",
    "ChatCompletionRequest",
    "ChatCompletionResponseFormat",
    "ChatCompletionTool",
    "FunctionChoice",
    "NamedToolChoice",
    "ToolCall",
    "ToolCallDelta",
    "ToolCallFunction",
    "ToolCallFunctionDelta",
    "ToolChoice",
    "ToolChoiceMode",
    "VeniceParameters",
    # Structured output
    "ChatCompletionResponseFormatJsonSchema",
    "JsonSchemaStyle",
    "ToolCallFunctionDefinition",
    "json_schema_for",
    # Completions
    "Completion",
    "CompletionChoice",
    "CompletionRequest",
    # Embeddings
    "Embedding",
    "Embeddings",
    "EmbeddingsRequest",
    "EmbeddingsUsage",
    # Files
    "DeletedFile",
    "File",
    "FileList",
    # Models
    "Model",
    "ModelList",
    # Moderations
    "Moderation",
    "ModerationRequest",
    "ModerationResult",
]
