"""
Files service.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Union

from ..models import DeletedFile, File, FileList
from .base import BaseService


class FileService(BaseService):
    """Service for the ``files`` endpoints."""

    endpoint = "files"

    async def list(self, purpose: Optional[str] = None) -> FileList:
        params = {"purpose": purpose} if purpose else None
        body = await self.http.get(self.endpoint, params=params)
        return self.parse(FileList, body)

    async def retrieve(self, file_id: str) -> File:
        body = await self.http.get(f"{self.endpoint}/{file_id}")
        return self.parse(File, body)

    async def upload(
        self,
        file: Union[str, Path, bytes],
        purpose: str,
        filename: Optional[str] = None,
    ) -> File:
        """
        Upload a file as multipart form data.

        Args:
            file: Path of the file to upload, or its contents
            purpose: Intended purpose, e.g. ``fine-tune`` or ``batch``
            filename: Name sent to the API; defaults to the path's name
        """
        if isinstance(file, bytes):
            content = file
            name = filename or "upload"
        else:
            path = Path(file)
            content = await asyncio.to_thread(path.read_bytes)
            name = filename or path.name

        self.logger.info("Uploading file", filename=name, purpose=purpose, size=len(content))
        body = await self.http.post_multipart(
            self.endpoint,
            data={"purpose": purpose},
            files={"file": (name, content, "application/octet-stream")},
        )
        return self.parse(File, body)

    async def delete(self, file_id: str) -> DeletedFile:
        body = await self.http.delete(f"{self.endpoint}/{file_id}")
        return self.parse(DeletedFile, body)

    async def content(self, file_id: str) -> bytes:
        """Download the contents of a file."""
        return await self.http.request_bytes("GET", f"{self.endpoint}/{file_id}/content")
