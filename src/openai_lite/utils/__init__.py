"""
Utility modules for openai-lite.

This package contains the HTTP transport and server-sent event decoding.
"""

from __future__ import annotations

from .http_client import HTTPClient, iter_sse_data

__all__ = [
    "HTTPClient",
    "iter_sse_data",
]
