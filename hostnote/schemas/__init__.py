"""Pydantic schemas for API requests and responses."""

from hostnote.schemas.files import (
    DeleteFileResponse,
    FileContentResponse,
    FileEntryResponse,
    PublicFileResponse,
    RenameFileRequest,
    RenameFileResponse,
    SaveFileRequest,
    SaveFileResponse,
    ShareFileResponse,
    UnshareFileResponse,
)
from hostnote.schemas.user import UserInfoResponse

__all__ = [
    "DeleteFileResponse",
    "FileContentResponse",
    "FileEntryResponse",
    "PublicFileResponse",
    "RenameFileRequest",
    "RenameFileResponse",
    "SaveFileRequest",
    "SaveFileResponse",
    "ShareFileResponse",
    "UnshareFileResponse",
    "UserInfoResponse",
]
