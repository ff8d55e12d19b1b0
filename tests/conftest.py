'''
Shared fixtures for openai-lite tests.
'''

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from openai_lite.core import Credentials, reload_settings
from openai_lite.services import OpenAIClient


API_KEY = 'sk-test-123'
BASE_URL = 'https://api.openai.com/v1/'


@pytest.fixture(autouse=True)
def openai_env(monkeypatch: pytest.MonkeyPatch) -> None:
    '''
    Isolate every test from the developer's real OpenAI environment.
    '''
    for name in (
        'OPENAI_KEY', 'OPENAI_API_KEY', 'OPENAI_BASE_URL', 'OPENAI_TIMEOUT',
        'LOG_LEVEL', 'LOG_FORMAT', 'LOG_FILE_PATH',
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('OPENAI_KEY', API_KEY)
    reload_settings()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=API_KEY, base_url=BASE_URL)


@pytest.fixture
async def client(credentials: Credentials) -> AsyncIterator[OpenAIClient]:
    '''
    Client whose requests are intercepted by respx.
    '''
    async with OpenAIClient(credentials) as client:
        yield client


def chat_completion_body(content: str = 'Hello! How can I assist you today?') -> dict:
    return {
        'id': 'chatcmpl-123',
        'object': 'chat.completion',
        'created': 1677652288,
        'model': 'gpt-4o-mini',
        'choices': [
            {
                'index': 0,
                'message': {'role': 'assistant', 'content': content, 'refusal': None},
                'finish_reason': 'stop',
                'logprobs': None,
            }
        ],
        'usage': {'prompt_tokens': 9, 'completion_tokens': 12, 'total_tokens': 21},
        'system_fingerprint': 'fp_44709d6fcb',
    }


def sse_body(*events: str) -> bytes:
    '''
    Encode JSON strings as a server-sent event stream ending in [DONE].
    '''
    chunks = [f'data: {event}\n\n' for event in events]
    chunks.append('data: [DONE]\n\n')
    return ''.join(chunks).encode('utf-8')


class TrackingStream(httpx.AsyncByteStream):
    '''
    Response body that records whether the client closed it.
    '''

    def __init__(self, body: bytes) -> None:
        self.body = body
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for line in self.body.splitlines(keepends=True):
            yield line

    async def aclose(self) -> None:
        self.closed = True


def streaming_transport(stream: TrackingStream) -> httpx.MockTransport:
    return httpx.MockTransport(
        lambda request: httpx.Response(200, headers={'Content-Type': 'text/event-stream'}, stream=stream)
    )
