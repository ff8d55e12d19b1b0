"""
HTTP client utilities for openai-lite.

This module wraps an ``httpx.AsyncClient`` bound to one set of credentials:
it sends JSON, multipart and streaming requests, maps failures onto the
library's exception hierarchy and decodes server-sent events.
"""

from __future__ import annotations

import json as jsonlib
import time
from contextlib import aclosing
from typing import Any, AsyncIterator, Dict, Optional

import httpx
from httpx import Response
from pydantic import ValidationError

from ..core import (
    Credentials,
    APIConnectionError,
    APITimeoutError,
    ResponseDecodeError,
    api_error_for_status,
    get_logger,
    get_settings,
    log_api_call,
    log_error,
)
from ..models.common import ApiErrorDetail


SSE_DONE = "[DONE]"


class HTTPClient:
    """Async HTTP transport for the OpenAI REST API."""

    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = get_settings()
        self.logger = get_logger(__name__)

        self.credentials = credentials
        self.timeout = timeout or self.settings.openai.timeout

        default_headers = {
            "User-Agent": f"{self.settings.app_name}/{self.settings.app_version}",
            "Accept": "application/json",
            "Authorization": credentials.authorization,
        }
        if headers:
            default_headers.update(headers)

        client_kwargs: Dict[str, Any] = {
            "base_url": credentials.base_url,
            "timeout": httpx.Timeout(self.timeout),
            "headers": default_headers,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport

        self.client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Response:
        """
        Send a request and return the raw response.

        Raises:
            APITimeoutError: If the request times out
            APIConnectionError: If no response could be obtained
        """
        start_time = time.time()
        try:
            response = await self.client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                data=data,
                files=files,
            )
        except httpx.TimeoutException as e:
            log_error(self.logger, e, context={"method": method, "path": path})
            raise APITimeoutError(
                f"Request to {path} timed out",
                details={"path": path, "timeout": self.timeout},
            ) from e
        except httpx.RequestError as e:
            log_error(self.logger, e, context={"method": method, "path": path})
            raise APIConnectionError(
                f"Request to {path} failed: {e}",
                details={"path": path},
            ) from e

        log_api_call(
            self.logger,
            endpoint=path,
            method=method,
            status_code=response.status_code,
            duration_ms=(time.time() - start_time) * 1000,
            request_size=len(response.request.content) if not files else None,
            response_size=len(response.content),
        )
        return response

    async def request_json(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            APIError: If the body is an error envelope or the status is not 2xx
            ResponseDecodeError: If the body is not JSON
        """
        response = await self.request(
            method, path, params=params, json=json, data=data, files=files
        )
        body = self._decode(response)
        self._raise_for_error(response, body)
        return body

    async def request_bytes(self, method: str, path: str) -> bytes:
        """Send a request whose successful body is raw bytes."""
        response = await self.request(method, path)
        if response.is_error:
            self._raise_for_error(response, self._decode_quietly(response.content))
        return response.content

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request_json("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request_json("POST", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request_json("DELETE", path)

    async def post_multipart(
        self, path: str, data: Dict[str, Any], files: Dict[str, Any]
    ) -> Any:
        return await self.request_json("POST", path, data=data, files=files)

    async def stream_events(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> AsyncIterator[Any]:
        """
        Send a request answered with server-sent events.

        Yields:
            The decoded JSON payload of every ``data`` event, until the
            stream closes or sends ``[DONE]``.
        """
        start_time = time.time()
        events = 0
        try:
            async with self.client.stream(
                method=method, url=path, json=json, headers={"Accept": "text/event-stream"}
            ) as response:
                self.logger.debug(
                    "Streaming request started",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                )

                if response.is_error:
                    content = await response.aread()
                    self._raise_for_error(response, self._decode_quietly(content))

                async with aclosing(iter_sse_data(response.aiter_lines())) as lines:
                    async for data in lines:
                        if data == SSE_DONE:
                            break
                        try:
                            payload = jsonlib.loads(data)
                        except ValueError as e:
                            raise ResponseDecodeError(
                                f"Malformed stream event: {e}",
                                status_code=response.status_code,
                                details={"data": data[:200]},
                            ) from e
                        self._raise_for_error(response, payload)
                        events += 1
                        yield payload

        except httpx.TimeoutException as e:
            log_error(self.logger, e, context={"method": method, "path": path})
            raise APITimeoutError(
                f"Streaming request to {path} timed out",
                details={"path": path, "timeout": self.timeout},
            ) from e
        except httpx.RequestError as e:
            log_error(self.logger, e, context={"method": method, "path": path})
            raise APIConnectionError(
                f"Streaming request to {path} failed: {e}",
                details={"path": path},
            ) from e
        finally:
            self.logger.debug(
                "Streaming request finished",
                method=method,
                path=path,
                events=events,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )

    def _decode(self, response: Response) -> Any:
        if not response.content:
            body: Any = None
        else:
            try:
                body = jsonlib.loads(response.text)
            except ValueError as e:
                if response.is_error:
                    self._raise_for_error(response, None)
                raise ResponseDecodeError(
                    f"Malformed JSON response: {e}",
                    status_code=response.status_code,
                    details={"body": response.text[:200]},
                ) from e
        return body

    @staticmethod
    def _decode_quietly(content: bytes) -> Any:
        try:
            return jsonlib.loads(content.decode("utf-8", errors="replace"))
        except ValueError:
            return None

    def _raise_for_error(self, response: Response, body: Any) -> None:
        """Raise if ``body`` is an error envelope or the status is not 2xx."""
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            try:
                detail = ApiErrorDetail.model_validate(error)
            except ValidationError:
                detail = ApiErrorDetail(message=str(error))
            exc = api_error_for_status(
                response.status_code,
                message=detail.message or "OpenAI API error",
                error_type=detail.type or "api_error",
                error_code=_as_str(detail.code),
                param=detail.param,
            )
        elif error is not None:
            exc = api_error_for_status(response.status_code, message=str(error))
        elif response.is_error:
            exc = api_error_for_status(
                response.status_code,
                message=f"HTTP {response.status_code} from {response.request.url.path}",
                details={"body": _safe_text(response)},
            )
        else:
            return
        log_error(
            self.logger,
            exc,
            context={"status_code": response.status_code, "code": exc.error_code},
        )
        raise exc

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()


async def iter_sse_data(lines: AsyncIterator[str]) -> AsyncIterator[str]:
    """
    Group server-sent event lines into event payloads.

    Multiple ``data`` lines of one event are joined with newlines; comment
    lines and the ``event``, ``id`` and ``retry`` fields are ignored.
    """
    buffer: list[str] = []
    async for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line:
            if buffer:
                yield "\n".join(buffer)
                buffer = []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if field != "data":
            continue
        buffer.append(value[1:] if value.startswith(" ") else value)
    if buffer:
        yield "\n".join(buffer)


def _as_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _safe_text(response: Response) -> str:
    try:
        return response.text[:200]
    except httpx.ResponseNotRead:
        return ""
