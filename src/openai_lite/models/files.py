"""
File models.

Files are uploaded for use with features such as fine-tuning and batch
processing.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import WireModel


class File(WireModel):
    """
    Uploaded file metadata.
    """

    id: str = Field(..., description="File identifier")
    object: str = Field("file", description="Object type")
    bytes: int = Field(0, description="Size of the file in bytes", ge=0)
    created_at: int = Field(..., description="Unix timestamp of upload")
    filename: str = Field(..., description="Name of the uploaded file")
    purpose: str = Field(..., description="Intended purpose of the file")
    status: Optional[str] = Field(None, description="Deprecated processing status")


class FileList(WireModel):
    object: str = "list"
    data: List[File] = Field(default_factory=list)


class DeletedFile(WireModel):
    id: str
    object: str = "file"
    deleted: bool
