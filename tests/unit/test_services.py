'''
Unit tests for the endpoint services behind OpenAIClient.
'''

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from respx import MockRouter

from openai_lite.core import ConfigurationError, Credentials, ResponseDecodeError, reload_settings
from openai_lite.models import ChatCompletionMessage, ChatCompletionRequest, CompletionRequest
from openai_lite.services import OpenAIClient, collect_stream

from conftest import API_KEY, BASE_URL, TrackingStream, chat_completion_body, sse_body, streaming_transport


FILE_BODY = {
    'id': 'file-abc123',
    'object': 'file',
    'bytes': 140,
    'created_at': 1613779121,
    'filename': 'mydata.jsonl',
    'purpose': 'fine-tune',
    'status': 'processed',
}


def chunk(content: str = '', role: str = None, finish_reason: str = None) -> str:
    delta = {}
    if role:
        delta['role'] = role
    if content:
        delta['content'] = content
    return json.dumps({
        'id': 'chatcmpl-stream',
        'object': 'chat.completion.chunk',
        'created': 1694268190,
        'model': 'gpt-4o-mini',
        'choices': [{'index': 0, 'delta': delta, 'finish_reason': finish_reason}],
    })


def chat_request(**fields) -> ChatCompletionRequest:
    return ChatCompletionRequest(
        model='gpt-4o-mini',
        messages=[ChatCompletionMessage(role='user', content='Hello!')],
        **fields,
    )


class TestOpenAIClient:
    '''
    Test client construction.
    '''

    @pytest.mark.asyncio
    async def test_credentials_from_environment(self, respx_mock: MockRouter) -> None:
        route = respx_mock.get(f'{BASE_URL}models').mock(
            return_value=httpx.Response(200, json={'object': 'list', 'data': []})
        )

        async with OpenAIClient() as client:
            await client.models.list()

        assert route.calls.last.request.headers['Authorization'] == f'Bearer {API_KEY}'

    def test_missing_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('OPENAI_KEY')
        monkeypatch.chdir(Path(__file__).parent)
        reload_settings()

        with pytest.raises(ConfigurationError) as exc_info:
            OpenAIClient()

        assert exc_info.value.error_code == 'missing_api_key'


class TestChatService:
    '''
    Test chat completions.
    '''

    @pytest.mark.asyncio
    async def test_create(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}chat/completions').mock(
            return_value=httpx.Response(200, json=chat_completion_body())
        )

        completion = await client.chat.create(chat_request(temperature=0.2))

        assert completion.choices[0].message.content == 'Hello! How can I assist you today?'
        assert json.loads(route.calls.last.request.content) == {
            'model': 'gpt-4o-mini',
            'messages': [{'role': 'user', 'content': 'Hello!'}],
            'temperature': 0.2,
        }

    @pytest.mark.asyncio
    async def test_create_never_streams(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}chat/completions').mock(
            return_value=httpx.Response(200, json=chat_completion_body())
        )

        await client.chat.create(chat_request(stream=True))

        assert 'stream' not in json.loads(route.calls.last.request.content)

    @pytest.mark.asyncio
    async def test_unexpected_response_shape(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        respx_mock.post(f'{BASE_URL}chat/completions').mock(
            return_value=httpx.Response(200, json={'id': 'chatcmpl-1'})
        )

        with pytest.raises(ResponseDecodeError):
            await client.chat.create(chat_request())

    @pytest.mark.asyncio
    async def test_create_stream(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}chat/completions').mock(
            return_value=httpx.Response(
                200,
                content=sse_body(
                    chunk(role='assistant'),
                    chunk('Hello'),
                    chunk(' there'),
                    chunk(finish_reason='stop'),
                ),
                headers={'Content-Type': 'text/event-stream'},
            )
        )

        deltas = [delta async for delta in client.chat.create_stream(chat_request())]

        assert len(deltas) == 4
        assert deltas[1].choices[0].delta.content == 'Hello'
        assert json.loads(route.calls.last.request.content)['stream'] is True

    @pytest.mark.asyncio
    async def test_collect_stream(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        respx_mock.post(f'{BASE_URL}chat/completions').mock(
            return_value=httpx.Response(
                200,
                content=sse_body(chunk('Hel', role='assistant'), chunk('lo'), chunk(finish_reason='stop')),
                headers={'Content-Type': 'text/event-stream'},
            )
        )

        completion = await collect_stream(client.chat.create_stream(chat_request()))

        assert completion.id == 'chatcmpl-stream'
        assert completion.choices[0].message.content == 'Hello'
        assert completion.choices[0].finish_reason == 'stop'

    @pytest.mark.asyncio
    async def test_closing_stream_early_releases_response(self, credentials: Credentials) -> None:
        body = TrackingStream(sse_body(chunk('Hel', role='assistant'), chunk('lo'), chunk(finish_reason='stop')))

        async with OpenAIClient(credentials, transport=streaming_transport(body)) as client:
            deltas = client.chat.create_stream(chat_request())
            first = await deltas.__anext__()
            await deltas.aclose()

            assert first.choices[0].delta.content == 'Hel'
            assert body.closed


class TestCompletionService:
    '''
    Test legacy text completions.
    '''

    @pytest.mark.asyncio
    async def test_create(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}completions').mock(
            return_value=httpx.Response(200, json={
                'id': 'cmpl-1',
                'object': 'text_completion',
                'created': 1589478378,
                'model': 'gpt-3.5-turbo-instruct',
                'choices': [{'text': 'This is a test.', 'index': 0, 'logprobs': None, 'finish_reason': 'stop'}],
                'usage': {'prompt_tokens': 5, 'completion_tokens': 5, 'total_tokens': 10},
            })
        )

        completion = await client.completions.create(
            CompletionRequest(model='gpt-3.5-turbo-instruct', prompt='Say this is a test', max_tokens=7)
        )

        assert completion.choices[0].text == 'This is a test.'
        assert json.loads(route.calls.last.request.content) == {
            'model': 'gpt-3.5-turbo-instruct',
            'prompt': 'Say this is a test',
            'max_tokens': 7,
        }


class TestFileService:
    '''
    Test the files endpoints.
    '''

    @pytest.mark.asyncio
    async def test_upload_bytes(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}files').mock(return_value=httpx.Response(200, json=FILE_BODY))

        file = await client.files.upload(b'{"prompt": "a"}\n', 'fine-tune', filename='mydata.jsonl')

        assert file.id == 'file-abc123'
        request = route.calls.last.request
        assert request.headers['Content-Type'].startswith('multipart/form-data')
        assert b'name="purpose"' in request.content
        assert b'fine-tune' in request.content
        assert b'filename="mydata.jsonl"' in request.content
        assert b'{"prompt": "a"}' in request.content

    @pytest.mark.asyncio
    async def test_upload_path(self, client: OpenAIClient, respx_mock: MockRouter, tmp_path: Path) -> None:
        path = tmp_path / 'batch.jsonl'
        path.write_bytes(b'{"custom_id": "1"}\n')
        route = respx_mock.post(f'{BASE_URL}files').mock(return_value=httpx.Response(200, json=FILE_BODY))

        await client.files.upload(path, 'batch')

        assert b'filename="batch.jsonl"' in route.calls.last.request.content

    @pytest.mark.asyncio
    async def test_list(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.get(f'{BASE_URL}files').mock(
            return_value=httpx.Response(200, json={'object': 'list', 'data': [FILE_BODY]})
        )

        files = await client.files.list(purpose='fine-tune')

        assert [f.filename for f in files.data] == ['mydata.jsonl']
        assert route.calls.last.request.url.params['purpose'] == 'fine-tune'

    @pytest.mark.asyncio
    async def test_retrieve(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        respx_mock.get(f'{BASE_URL}files/file-abc123').mock(return_value=httpx.Response(200, json=FILE_BODY))

        file = await client.files.retrieve('file-abc123')

        assert file.bytes == 140

    @pytest.mark.asyncio
    async def test_delete(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        respx_mock.delete(f'{BASE_URL}files/file-abc123').mock(
            return_value=httpx.Response(200, json={'id': 'file-abc123', 'object': 'file', 'deleted': True})
        )

        deleted = await client.files.delete('file-abc123')

        assert deleted.deleted is True

    @pytest.mark.asyncio
    async def test_content(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        respx_mock.get(f'{BASE_URL}files/file-abc123/content').mock(
            return_value=httpx.Response(200, content=b'line one\nline two\n')
        )

        assert await client.files.content('file-abc123') == b'line one\nline two\n'


class TestModelService:
    '''
    Test the models endpoints.
    '''

    @pytest.mark.asyncio
    async def test_list_and_retrieve(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        model = {'id': 'gpt-4o-mini', 'object': 'model', 'created': 1721172741, 'owned_by': 'system'}
        respx_mock.get(f'{BASE_URL}models').mock(
            return_value=httpx.Response(200, json={'object': 'list', 'data': [model]})
        )
        respx_mock.get(f'{BASE_URL}models/gpt-4o-mini').mock(return_value=httpx.Response(200, json=model))

        models = await client.models.list()
        retrieved = await client.models.retrieve('gpt-4o-mini')

        assert models.data[0] == retrieved
        assert retrieved.owned_by == 'system'


class TestModerationService:
    '''
    Test the moderations endpoint.
    '''

    @pytest.mark.asyncio
    async def test_create(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}moderations').mock(
            return_value=httpx.Response(200, json={
                'id': 'modr-1',
                'model': 'omni-moderation-latest',
                'results': [{
                    'flagged': False,
                    'categories': {'violence': False},
                    'category_scores': {'violence': 0.0001},
                }],
            })
        )

        moderation = await client.moderations.create('I like trains')

        assert moderation.results[0].flagged is False
        assert json.loads(route.calls.last.request.content) == {'input': 'I like trains'}

    @pytest.mark.asyncio
    async def test_create_with_model(self, client: OpenAIClient, respx_mock: MockRouter) -> None:
        route = respx_mock.post(f'{BASE_URL}moderations').mock(
            return_value=httpx.Response(200, json={'id': 'modr-2', 'model': 'omni-moderation-latest', 'results': []})
        )

        await client.moderations.create(['a', 'b'], model='omni-moderation-latest')

        assert json.loads(route.calls.last.request.content) == {
            'input': ['a', 'b'],
            'model': 'omni-moderation-latest',
        }


class TestCustomCredentials:
    '''
    Test clients pointed at other OpenAI-compatible endpoints.
    '''

    @pytest.mark.asyncio
    async def test_base_url_and_key(self, respx_mock: MockRouter) -> None:
        route = respx_mock.post('https://api.venice.ai/api/v1/chat/completions').mock(
            return_value=httpx.Response(200, json=chat_completion_body())
        )
        credentials = Credentials(api_key='venice-key', base_url='https://api.venice.ai/api/v1/')

        async with OpenAIClient(credentials) as client:
            await client.chat.create(chat_request())

        assert route.calls.last.request.headers['Authorization'] == 'Bearer venice-key'
