"""Pydantic schemas for file operation endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import StrictStr

from hostnote.schemas.common import CamelModel


class FileEntryResponse(CamelModel):
    """Response model for one row of the file listing."""
    name: str
    size: int
    modified: datetime
    is_public: bool
    public_id: Optional[str] = None


class FileContentResponse(CamelModel):
    """Response model for reading a file."""
    name: str
    content: str


class SaveFileRequest(CamelModel):
    """Request model for saving a file."""
    content: StrictStr


class SaveFileResponse(CamelModel):
    """Response model for saving a file."""
    success: bool = True
    name: str


class DeleteFileResponse(CamelModel):
    """Response model for file deletion."""
    success: bool = True


class RenameFileRequest(CamelModel):
    """Request model for renaming a file."""
    new_name: StrictStr


class RenameFileResponse(CamelModel):
    """Response model for renaming a file."""
    success: bool = True
    new_name: str


class ShareFileResponse(CamelModel):
    """Response model for making a file public."""
    success: bool = True
    is_public: bool = True
    public_id: str
    public_url: str


class UnshareFileResponse(CamelModel):
    """Response model for making a file private."""
    success: bool = True
    is_public: bool = False


class PublicFileResponse(CamelModel):
    """Response model for reading a shared file."""
    name: str
    content: str
    is_public: bool = True
