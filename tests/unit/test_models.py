'''
Unit tests for openai-lite data models.

Validates request serialization against the JSON shapes the API expects
and response parsing of real-world payloads.
'''

from __future__ import annotations

import pytest
from pydantic import ValidationError

from openai_lite.core import Credentials
from openai_lite.models import (
    ChatCompletion,
    ChatCompletionFunctionDefinition,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponseFormat,
    Completion,
    CompletionRequest,
    File,
    ModelList,
    Moderation,
    ToolCall,
    ToolCallFunction,
    ToolChoice,
    VeniceParameters,
)

from conftest import chat_completion_body


def user(content: str) -> ChatCompletionMessage:
    return ChatCompletionMessage(role='user', content=content)


class TestChatMessages:
    '''
    Test chat message serialization.
    '''

    def test_default_role_is_user(self) -> None:
        message = ChatCompletionMessage(content='Hello!')

        assert message.role == 'user'

    def test_content_is_serialized_even_when_null(self) -> None:
        message = ChatCompletionMessage(
            role='assistant',
            tool_calls=[
                ToolCall(
                    id='call_1',
                    function=ToolCallFunction(name='mul', arguments='{"a": 2}'),
                )
            ],
        )

        assert message.model_dump() == {
            'role': 'assistant',
            'content': None,
            'tool_calls': [
                {
                    'id': 'call_1',
                    'type': 'function',
                    'function': {'name': 'mul', 'arguments': '{"a": 2}'},
                }
            ],
        }

    def test_unset_optional_fields_are_omitted(self) -> None:
        assert user('Hello!').model_dump() == {'role': 'user', 'content': 'Hello!'}

    def test_empty_tool_calls_are_omitted(self) -> None:
        message = ChatCompletionMessage(role='assistant', content='Hi', tool_calls=[])

        assert 'tool_calls' not in message.model_dump()

    def test_tool_response_message(self) -> None:
        message = ChatCompletionMessage(
            role='tool', content='the result is 25903.06', tool_call_id='the_tool_call'
        )

        assert message.model_dump() == {
            'role': 'tool',
            'content': 'the result is 25903.06',
            'tool_call_id': 'the_tool_call',
        }

    def test_invalid_role(self) -> None:
        with pytest.raises(ValidationError):
            ChatCompletionMessage(role='robot', content='beep')


class TestChatCompletionRequest:
    '''
    Test chat completion request payloads.
    '''

    def test_minimal_payload(self) -> None:
        request = ChatCompletionRequest(model='gpt-4o-mini', messages=[user('Hello!')])

        assert request.to_payload() == {
            'model': 'gpt-4o-mini',
            'messages': [{'role': 'user', 'content': 'Hello!'}],
        }

    def test_sampling_parameters(self) -> None:
        request = ChatCompletionRequest(
            model='gpt-4o-mini',
            messages=[user('Hello!')],
            temperature=0.0,
            seed=1337,
            max_completion_tokens=64,
            reasoning_effort='low',
            logit_bias={'50256': -100.0},
        )

        payload = request.to_payload()

        assert payload['temperature'] == 0.0
        assert payload['seed'] == 1337
        assert payload['max_completion_tokens'] == 64
        assert payload['reasoning_effort'] == 'low'
        assert payload['logit_bias'] == {'50256': -100.0}

    def test_credentials_are_never_serialized(self) -> None:
        request = ChatCompletionRequest(
            model='gpt-4o-mini',
            messages=[user('Hello!')],
            credentials=Credentials(api_key='sk-secret'),
        )

        assert 'credentials' not in request.to_payload()
        assert 'sk-secret' not in str(request.to_payload())

    def test_single_stop_sequence_becomes_list(self) -> None:
        request = ChatCompletionRequest(model='gpt-4', messages=[], stop='\n')

        assert request.to_payload()['stop'] == ['\n']

    def test_tool_choice_mode(self) -> None:
        request = ChatCompletionRequest(
            model='gpt-4', messages=[], tool_choice=ToolChoice.mode('required')
        )

        assert request.to_payload()['tool_choice'] == 'required'

    def test_tool_choice_accepts_plain_string(self) -> None:
        request = ChatCompletionRequest(model='gpt-4', messages=[], tool_choice='auto')

        assert request.to_payload()['tool_choice'] == 'auto'

    def test_tool_choice_function(self) -> None:
        request = ChatCompletionRequest(
            model='gpt-4', messages=[], tool_choice=ToolChoice.function('Character')
        )

        assert request.to_payload()['tool_choice'] == {
            'type': 'function',
            'function': {'name': 'Character'},
        }

    def test_response_formats(self) -> None:
        text = ChatCompletionRequest(
            model='gpt-4', messages=[], response_format=ChatCompletionResponseFormat.text()
        )
        json_mode = ChatCompletionRequest(
            model='gpt-4', messages=[], response_format=ChatCompletionResponseFormat.json_object()
        )

        assert text.to_payload()['response_format'] == {'type': 'text'}
        assert json_mode.to_payload()['response_format'] == {'type': 'json_object'}

    def test_deprecated_functions(self) -> None:
        request = ChatCompletionRequest(
            model='gpt-4o',
            messages=[user('What is the weather in Boston?')],
            functions=[
                ChatCompletionFunctionDefinition(
                    name='get_current_weather',
                    description='Get the current weather in a given location.',
                    parameters={
                        'type': 'object',
                        'properties': {'location': {'type': 'string'}},
                        'required': ['location'],
                    },
                )
            ],
        )

        function = request.to_payload()['functions'][0]

        assert function['name'] == 'get_current_weather'
        assert function['parameters']['required'] == ['location']

    def test_venice_parameters(self) -> None:
        request = ChatCompletionRequest(
            model='llama-3.3-70b',
            messages=[],
            venice_parameters=VeniceParameters(include_venice_system_prompt=False),
        )

        assert request.to_payload()['venice_parameters'] == {'include_venice_system_prompt': False}

    def test_validation(self) -> None:
        with pytest.raises(ValidationError):
            ChatCompletionRequest(model='gpt-4', messages=[], temperature=3.0)

        with pytest.raises(ValidationError):
            ChatCompletionRequest(model='', messages=[])

        with pytest.raises(ValidationError):
            ChatCompletionRequest(model='gpt-4', messages=[], unknown_field=True)


class TestResponses:
    '''
    Test parsing of API responses.
    '''

    def test_chat_completion(self) -> None:
        completion = ChatCompletion.model_validate(chat_completion_body())

        assert completion.id == 'chatcmpl-123'
        assert completion.choices[0].message.role == 'assistant'
        assert completion.choices[0].message.content == 'Hello! How can I assist you today?'
        assert completion.choices[0].finish_reason == 'stop'
        assert completion.usage.total_tokens == 21
        assert completion.system_fingerprint == 'fp_44709d6fcb'

    def test_chat_completion_with_tool_calls(self) -> None:
        body = chat_completion_body()
        body['choices'][0]['message'] = {
            'role': 'assistant',
            'content': None,
            'tool_calls': [
                {
                    'id': 'call_abc',
                    'type': 'function',
                    'function': {'name': 'Character', 'arguments': '{"name": "Thorin"}'},
                }
            ],
        }
        body['choices'][0]['finish_reason'] = 'tool_calls'

        completion = ChatCompletion.model_validate(body)
        tool_call = completion.choices[0].message.tool_calls[0]

        assert tool_call.id == 'call_abc'
        assert tool_call.function.name == 'Character'
        assert tool_call.function.arguments == '{"name": "Thorin"}'

    def test_unknown_fields_are_kept(self) -> None:
        completion = ChatCompletion.model_validate(chat_completion_body())

        assert completion.choices[0].message.model_extra == {'refusal': None}

    def test_legacy_completion(self) -> None:
        completion = Completion.model_validate({
            'id': 'cmpl-1',
            'object': 'text_completion',
            'created': 1589478378,
            'model': 'gpt-3.5-turbo-instruct',
            'choices': [
                {'text': '\n\nThis is indeed a test', 'index': 0, 'logprobs': None, 'finish_reason': 'length'}
            ],
            'usage': {'prompt_tokens': 5, 'completion_tokens': 7, 'total_tokens': 12},
        })

        assert completion.choices[0].text == '\n\nThis is indeed a test'
        assert completion.usage.completion_tokens == 7

    def test_model_list(self) -> None:
        models = ModelList.model_validate({
            'object': 'list',
            'data': [
                {'id': 'gpt-4o', 'object': 'model', 'created': 1715367049, 'owned_by': 'system'},
                {'id': 'whisper-1', 'object': 'model', 'created': 1677532384, 'owned_by': 'openai-internal'},
            ],
        })

        assert [model.id for model in models.data] == ['gpt-4o', 'whisper-1']
        assert models.data[0].owned_by == 'system'

    def test_empty_lists_in_responses_are_kept(self) -> None:
        dumped = ModelList.model_validate({'object': 'list', 'data': []}).model_dump()

        assert dumped == {'object': 'list', 'data': []}
        assert ModelList.model_validate(dumped).data == []

    def test_empty_lists_in_requests_are_omitted(self) -> None:
        request = ChatCompletionRequest(model='gpt-4o-mini', messages=[user('Hi')], stop=[])

        assert 'stop' not in request.to_payload()

    def test_file(self) -> None:
        file = File.model_validate({
            'id': 'file-abc123',
            'object': 'file',
            'bytes': 120000,
            'created_at': 1677610602,
            'filename': 'mydata.jsonl',
            'purpose': 'fine-tune',
        })

        assert file.bytes == 120000
        assert file.purpose == 'fine-tune'

    def test_moderation(self) -> None:
        moderation = Moderation.model_validate({
            'id': 'modr-1',
            'model': 'omni-moderation-latest',
            'results': [
                {
                    'flagged': True,
                    'categories': {'violence': True, 'hate': False},
                    'category_scores': {'violence': 0.91, 'hate': 0.01},
                }
            ],
        })

        assert moderation.results[0].flagged_categories() == ['violence']

    def test_completion_request_defaults_are_omitted(self) -> None:
        request = CompletionRequest(model='gpt-3.5-turbo-instruct', prompt='Say this is a test')

        assert request.to_payload() == {
            'model': 'gpt-3.5-turbo-instruct',
            'prompt': 'Say this is a test',
        }
