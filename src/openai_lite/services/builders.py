"""
Fluent request builders.

Every setter returns a new builder, so a partially configured builder can
be reused as a template. Builders compare by value.

    completion = await (
        ChatCompletion.builder("gpt-4o-mini", messages)
        .temperature(0.2)
        .seed(1337)
        .create()
    )
"""

from __future__ import annotations

import copy
from contextlib import aclosing
from typing import (
    Any,
    AsyncIterator,
    ClassVar,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)

from pydantic import ValidationError

from ..core import BuilderError, Credentials
from ..models import (
    ChatCompletion,
    ChatCompletionDelta,
    ChatCompletionFunctionDefinition,
    ChatCompletionMessage,
    ChatCompletionReasoningEffort,
    ChatCompletionRequest,
    ChatCompletionResponseFormat,
    ChatCompletionTool,
    Completion,
    CompletionRequest,
    RequestModel,
    ToolChoice,
    ToolChoiceMode,
    VeniceParameters,
)
from .client import OpenAIClient


RequestT = TypeVar("RequestT", bound=RequestModel)
BuilderT = TypeVar("BuilderT", bound="RequestBuilder")


class RequestBuilder(Generic[RequestT]):
    """Accumulates request fields and validates them on ``build()``."""

    request_model: ClassVar[Type[RequestModel]]

    def __init__(self, **fields: Any) -> None:
        self._fields: Dict[str, Any] = dict(fields)

    def _with(self: BuilderT, **fields: Any) -> BuilderT:
        builder = copy.copy(self)
        builder._fields = {**self._fields, **fields}
        return builder

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        shown = {k: v for k, v in self._fields.items() if k != "credentials"}
        return f"{type(self).__name__}({shown!r})"

    def credentials(self: BuilderT, credentials: Credentials) -> BuilderT:
        """Credentials used to send the request instead of the environment's."""
        return self._with(credentials=credentials)

    def build(self) -> RequestT:
        """
        Validate the accumulated fields into a request.

        Raises:
            BuilderError: If a required field is missing or a value is invalid
        """
        try:
            return self.request_model(**self._fields)  # type: ignore[return-value]
        except ValidationError as e:
            raise BuilderError(
                f"Cannot build {self.request_model.__name__}: {e.error_count()} invalid field(s)",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e


class ChatCompletionBuilder(RequestBuilder[ChatCompletionRequest]):
    """Builder for ``ChatCompletionRequest``."""

    request_model = ChatCompletionRequest

    def model(self, model: str) -> ChatCompletionBuilder:
        return self._with(model=model)

    def messages(self, messages: List[ChatCompletionMessage]) -> ChatCompletionBuilder:
        return self._with(messages=list(messages))

    def reasoning_effort(self, effort: ChatCompletionReasoningEffort) -> ChatCompletionBuilder:
        return self._with(reasoning_effort=effort)

    def temperature(self, temperature: float) -> ChatCompletionBuilder:
        return self._with(temperature=temperature)

    def top_p(self, top_p: float) -> ChatCompletionBuilder:
        return self._with(top_p=top_p)

    def n(self, n: int) -> ChatCompletionBuilder:
        return self._with(n=n)

    def stream(self, stream: bool) -> ChatCompletionBuilder:
        return self._with(stream=stream)

    def stop(self, stop: Union[str, List[str]]) -> ChatCompletionBuilder:
        return self._with(stop=stop)

    def seed(self, seed: int) -> ChatCompletionBuilder:
        return self._with(seed=seed)

    def max_tokens(self, max_tokens: int) -> ChatCompletionBuilder:
        return self._with(max_tokens=max_tokens)

    def max_completion_tokens(self, max_completion_tokens: int) -> ChatCompletionBuilder:
        return self._with(max_completion_tokens=max_completion_tokens)

    def presence_penalty(self, penalty: float) -> ChatCompletionBuilder:
        return self._with(presence_penalty=penalty)

    def frequency_penalty(self, penalty: float) -> ChatCompletionBuilder:
        return self._with(frequency_penalty=penalty)

    def logit_bias(self, logit_bias: Dict[str, float]) -> ChatCompletionBuilder:
        return self._with(logit_bias=dict(logit_bias))

    def user(self, user: str) -> ChatCompletionBuilder:
        return self._with(user=user)

    def tools(self, tools: List[ChatCompletionTool]) -> ChatCompletionBuilder:
        return self._with(tools=list(tools))

    def tool_choice(self, tool_choice: Union[ToolChoice, ToolChoiceMode]) -> ChatCompletionBuilder:
        return self._with(tool_choice=tool_choice)

    def parallel_tool_calls(self, enabled: bool) -> ChatCompletionBuilder:
        return self._with(parallel_tool_calls=enabled)

    def functions(self, functions: List[ChatCompletionFunctionDefinition]) -> ChatCompletionBuilder:
        return self._with(functions=list(functions))

    def function_call(self, function_call: Any) -> ChatCompletionBuilder:
        return self._with(function_call=function_call)

    def response_format(self, response_format: ChatCompletionResponseFormat) -> ChatCompletionBuilder:
        return self._with(response_format=response_format)

    def venice_parameters(self, parameters: VeniceParameters) -> ChatCompletionBuilder:
        return self._with(venice_parameters=parameters)

    async def create(self, client: Optional[OpenAIClient] = None) -> ChatCompletion:
        """Build the request and send it, returning the full completion."""
        request = self.build()
        if client is not None:
            return await client.chat.create(request)
        async with OpenAIClient(request.credentials) as owned:
            return await owned.chat.create(request)

    async def create_stream(
        self, client: Optional[OpenAIClient] = None
    ) -> AsyncIterator[ChatCompletionDelta]:
        """Build the request with streaming enabled and yield its deltas."""
        request = self.stream(True).build()
        if client is not None:
            async with aclosing(client.chat.create_stream(request)) as deltas:
                async for delta in deltas:
                    yield delta
            return
        async with OpenAIClient(request.credentials) as owned:
            async with aclosing(owned.chat.create_stream(request)) as deltas:
                async for delta in deltas:
                    yield delta


class CompletionBuilder(RequestBuilder[CompletionRequest]):
    """Builder for the legacy ``CompletionRequest``."""

    request_model = CompletionRequest

    def model(self, model: str) -> CompletionBuilder:
        return self._with(model=model)

    def prompt(self, prompt: Union[str, List[str]]) -> CompletionBuilder:
        return self._with(prompt=prompt)

    def suffix(self, suffix: str) -> CompletionBuilder:
        return self._with(suffix=suffix)

    def max_tokens(self, max_tokens: int) -> CompletionBuilder:
        return self._with(max_tokens=max_tokens)

    def temperature(self, temperature: float) -> CompletionBuilder:
        return self._with(temperature=temperature)

    def top_p(self, top_p: float) -> CompletionBuilder:
        return self._with(top_p=top_p)

    def n(self, n: int) -> CompletionBuilder:
        return self._with(n=n)

    def logprobs(self, logprobs: int) -> CompletionBuilder:
        return self._with(logprobs=logprobs)

    def echo(self, echo: bool) -> CompletionBuilder:
        return self._with(echo=echo)

    def stop(self, stop: Union[str, List[str]]) -> CompletionBuilder:
        return self._with(stop=stop)

    def presence_penalty(self, penalty: float) -> CompletionBuilder:
        return self._with(presence_penalty=penalty)

    def frequency_penalty(self, penalty: float) -> CompletionBuilder:
        return self._with(frequency_penalty=penalty)

    def best_of(self, best_of: int) -> CompletionBuilder:
        return self._with(best_of=best_of)

    def logit_bias(self, logit_bias: Dict[str, float]) -> CompletionBuilder:
        return self._with(logit_bias=dict(logit_bias))

    def user(self, user: str) -> CompletionBuilder:
        return self._with(user=user)

    async def create(self, client: Optional[OpenAIClient] = None) -> Completion:
        """Build the request and send it."""
        request = self.build()
        if client is not None:
            return await client.completions.create(request)
        async with OpenAIClient(request.credentials) as owned:
            return await owned.completions.create(request)
